"""Test data factories for deterministic test data generation."""

from tests.factories.incidents import make_incident, make_rule, make_rule_row
from tests.factories.notifications import (
    make_clerk_user,
    make_notification,
    make_profile,
    make_recipient,
    make_result,
)

__all__ = [
    "make_clerk_user",
    "make_incident",
    "make_notification",
    "make_profile",
    "make_recipient",
    "make_result",
    "make_rule",
    "make_rule_row",
]
