"""Pydantic schema for API error responses."""

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """
    Body of every non-2xx response raised by the service.

    Request validation failures keep FastAPI's 422 `detail` format instead.
    """

    error: str = Field(
        ...,
        description="Stable error code, e.g. SUBSCRIPTION_NOT_FOUND or INSIGHT_UNAVAILABLE",
    )
    message: str = Field(..., description="Human-readable explanation")
    request_id: str | None = Field(
        None,
        description="Value of the X-Request-ID response header",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "SUBSCRIPTION_NOT_FOUND",
                    "message": "Subscription not found: 550e8400-e29b-41d4-a716-446655440000",
                    "request_id": "9b2f6c0e-5d1a-4c7e-8f3b-2a6d1e4c9f70",
                },
                {
                    "error": "INVALID_NWI_CONFIG",
                    "message": "Percentages must sum to 100 (got 95)",
                    "request_id": "0c7d2e91-3b4f-4a8e-9d6c-5f1a2b3c4d5e",
                },
                {
                    "error": "INSIGHT_UNAVAILABLE",
                    "message": "AI analysis failed for spending_analysis: LLM request timed out",
                    "request_id": "6e5d4c3b-2a19-4f8e-8d7c-6b5a49382716",
                },
            ]
        }
    }
