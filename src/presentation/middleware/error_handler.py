"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from src.domain.exceptions import (
    DomainException,
    InsightGenerationException,
    InsightUnavailableException,
    MarketDataException,
    MarketDataTimeoutException,
    NotFoundException,
    TransactionFeedException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, exc: DomainException, message: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.code,
            "message": message or exc.message,
            "request_id": get_request_id(),
        },
    )


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses. Anything not
    listed here that is still a DomainException is a 400.
    """

    @app.exception_handler(NotFoundException)
    async def not_found_handler(
        request: Request,
        exc: NotFoundException,
    ) -> JSONResponse:
        """Handle unknown resources, including those owned by another user."""
        logger.info(
            "resource_not_found",
            request_id=get_request_id(),
            resource=exc.resource,
            identifier=exc.identifier,
        )
        return _error_response(404, exc)

    @app.exception_handler(MarketDataTimeoutException)
    async def market_data_timeout_handler(
        request: Request,
        exc: MarketDataTimeoutException,
    ) -> JSONResponse:
        """Handle market data provider timeouts."""
        logger.error(
            "market_data_timeout",
            request_id=get_request_id(),
            provider=exc.provider,
        )
        return _error_response(503, exc, "Market data temporarily unavailable. Please try again.")

    @app.exception_handler(MarketDataException)
    async def market_data_error_handler(
        request: Request,
        exc: MarketDataException,
    ) -> JSONResponse:
        """Handle market data provider errors."""
        logger.error(
            "market_data_error",
            request_id=get_request_id(),
            provider=exc.provider,
            message=exc.message,
            status_code=exc.status_code,
        )
        return _error_response(502, exc)

    @app.exception_handler(TransactionFeedException)
    async def transaction_feed_error_handler(
        request: Request,
        exc: TransactionFeedException,
    ) -> JSONResponse:
        """Handle transaction feed errors."""
        logger.error(
            "transaction_feed_error",
            request_id=get_request_id(),
            message=exc.message,
            status_code=exc.status_code,
        )
        return _error_response(502, exc, "Unable to reach the transaction feed. Please try again later.")

    @app.exception_handler(InsightGenerationException)
    async def insight_generation_handler(
        request: Request,
        exc: InsightGenerationException,
    ) -> JSONResponse:
        """Handle AI provider failures on forced regeneration."""
        logger.error(
            "insight_generation_failed",
            request_id=get_request_id(),
            message=exc.message,
        )
        return _error_response(503, exc)

    @app.exception_handler(InsightUnavailableException)
    async def insight_unavailable_handler(
        request: Request,
        exc: InsightUnavailableException,
    ) -> JSONResponse:
        """Handle insights that could not be generated and have no cached copy."""
        return _error_response(503, exc)

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return _error_response(400, exc)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_ERROR",
                "message": "An unexpected error occurred.",
                "request_id": get_request_id(),
            },
        )
