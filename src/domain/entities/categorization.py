"""User-defined categorization rule entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from .common import utcnow


class MatchField(str, Enum):
    """Which transaction text a rule pattern is matched against."""

    MERCHANT = "merchant"
    DESCRIPTION = "description"
    ANY = "any"


@dataclass
class CategorizationRule:
    """
    Substring rule that assigns a category to matching transactions.

    Example: pattern "GROWSY" on description with category "Investment"
    categorizes every transaction whose description contains "GROWSY".
    """

    user_id: str
    pattern: str
    category: str
    match_field: MatchField = MatchField.ANY
    case_sensitive: bool = False
    enabled: bool = True
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "pattern": self.pattern,
            "match_field": self.match_field.value,
            "category": self.category,
            "case_sensitive": self.case_sensitive,
            "enabled": self.enabled,
            "created_at": self.created_at.isoformat() + "Z",
        }
