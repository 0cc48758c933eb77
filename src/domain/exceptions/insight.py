"""AI insight exceptions."""

from .base import DomainException


class InsightGenerationException(DomainException):
    """Raised when the LLM provider fails to produce an insight."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message=message,
            code="INSIGHT_GENERATION_FAILED",
        )
        self.status_code = status_code


class InsightUnavailableException(DomainException):
    """Raised when generation failed and no cached insight exists."""

    def __init__(self, insight_type: str, reason: str):
        super().__init__(
            message=f"AI analysis failed for {insight_type}: {reason}",
            code="INSIGHT_UNAVAILABLE",
        )
        self.insight_type = insight_type
        self.reason = reason


class InsufficientDataException(DomainException):
    """Raised when there is no transaction data to analyze."""

    def __init__(self, message: str = "No transaction data available. Please sync first."):
        super().__init__(
            message=message,
            code="INSUFFICIENT_DATA",
        )
