"""AI insight Pydantic schemas."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from src.domain.entities import InsightType


class InsightRequestSchema(BaseModel):
    """Schema for POST /v1/ai/insights request body."""

    type: InsightType = Field(..., examples=["spending_analysis"])


class InsightResponseSchema(BaseModel):
    """An AI insight, fresh or served from the cache."""

    type: str
    content: str
    sections: Optional[List[Dict[str, Any]]] = Field(
        None,
        description="Structured sections when the model returned JSON",
    )
    generated_at: datetime
    data_points: int = Field(..., description="Transactions the analysis was built from")
    from_cache: bool = False
    stale: bool = Field(
        False,
        description="True when regeneration failed and an older insight is shown",
    )
    warning: Optional[str] = None
