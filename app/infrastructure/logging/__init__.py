"""Structured logging built on structlog.

Example:
    from infrastructure.logging import get_module_logger, bind_incident_context

    logger = get_module_logger()

    with bind_incident_context(incident_id=42, incident_code="VM-2024-001"):
        logger.info("incident_notification_started")
"""

from infrastructure.logging.context import (
    bind_incident_context,
    get_correlation_id,
)
from infrastructure.logging.formatters import (
    SENSITIVE_PATTERNS,
    mask_sensitive_data,
    truncate_large_values,
)
from infrastructure.logging.setup import configure_logging, get_module_logger

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_incident_context",
    "get_correlation_id",
    "SENSITIVE_PATTERNS",
    "mask_sensitive_data",
    "truncate_large_values",
]
