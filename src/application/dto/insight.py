"""Data transfer objects for AI insight operations."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class InsightResponse:
    """
    An insight as returned to the client.

    `stale` is True when regeneration failed and an older cached insight
    is served instead; `warning` then explains why.
    """

    type: str
    content: str
    sections: Optional[List[Dict[str, Any]]]
    generated_at: str
    data_points: int
    from_cache: bool = False
    stale: bool = False
    warning: Optional[str] = None

    @classmethod
    def from_entity(
        cls,
        insight,
        from_cache: bool = False,
        stale: bool = False,
        warning: Optional[str] = None,
    ) -> "InsightResponse":
        return cls(
            type=insight.type.value,
            content=insight.content,
            sections=insight.sections,
            generated_at=insight.generated_at.isoformat() + "Z",
            data_points=insight.data_points,
            from_cache=from_cache,
            stale=stale,
            warning=warning,
        )
