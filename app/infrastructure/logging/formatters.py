"""Structlog processors for credential masking and body truncation."""

from typing import Any, FrozenSet, Optional

SENSITIVE_PATTERNS = frozenset(
    {
        "password",
        "secret",
        "token",
        "api_key",
        "authorization",
        "credential",
        "cookie",
        "bearer",
    }
)

REDACTED = "***REDACTED***"


def _is_sensitive(key: Any, patterns: FrozenSet[str]) -> bool:
    name = str(key).lower()
    return any(pattern in name for pattern in patterns)


def _mask(value: Any, patterns: FrozenSet[str], mask_value: str) -> Any:
    if isinstance(value, dict):
        return {
            key: (
                mask_value
                if _is_sensitive(key, patterns) and item is not None
                else _mask(item, patterns, mask_value)
            )
            for key, item in value.items()
        }
    return value


def mask_sensitive_data(
    mask_value: str = REDACTED,
    additional_patterns: Optional[FrozenSet[str]] = None,
):
    """Processor replacing values of credential-like keys.

    Keys are matched case-insensitively on substrings, so ``SMTP_PASSWORD``
    and ``auth_token`` are both masked. Nested dicts (request payloads) are
    masked too; None values are kept.
    """
    patterns = SENSITIVE_PATTERNS | (additional_patterns or frozenset())

    def processor(logger: Any, method_name: str, event_dict: dict) -> dict:
        return _mask(event_dict, patterns, mask_value)

    return processor


def truncate_large_values(max_length: int = 500):
    """Processor shortening long strings such as rendered email bodies."""

    def processor(logger: Any, method_name: str, event_dict: dict) -> dict:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    f"{value[:max_length]}...[truncated, {len(value)} chars total]"
                )
        return event_dict

    return processor
