"""Categorization rule exceptions."""

from .base import DomainException, NotFoundException


class RuleNotFoundException(NotFoundException):
    """Raised when a categorization rule cannot be found."""

    def __init__(self, rule_id: str):
        super().__init__("Rule", rule_id, "RULE_NOT_FOUND")
        self.rule_id = rule_id


class InvalidRuleRequestException(DomainException):
    """Raised when a rule create/update request is invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_RULE_REQUEST",
        )
