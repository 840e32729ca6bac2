"""Errors for the incident notifications module."""

from typing import Any, Optional


class RuleLoadError(Exception):
    """Raised when a persisted notification rule cannot be turned into a rule.

    Attributes:
        rule_id: id of the offending row, when it could be read
        row: the raw persisted row
    """

    def __init__(self, message: str, rule_id: Optional[Any] = None, row: Any = None):
        super().__init__(message)
        self.rule_id = rule_id
        self.row = row
