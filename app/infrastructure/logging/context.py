"""Context binding for structured logging.

Binds correlation ids and incident metadata to every log entry emitted
within a block, including entries emitted by worker threads that copy the
caller's context.

Usage:
    from infrastructure.logging import bind_incident_context

    with bind_incident_context(incident_id=42, incident_code="VM-2024-001"):
        logger.info("incident_notification_started")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Optional, Any, Generator
import structlog


@contextmanager
def bind_incident_context(
    incident_id: int,
    incident_code: Optional[str] = None,
) -> Generator[None, None, None]:
    """Bind the incident being notified to all logs within the block.

    A correlation id is generated when none is bound yet, so every log line
    of one dispatch shares it.
    """
    context: dict[str, Any] = {"incident_id": incident_id}
    if incident_code is not None:
        context["incident_code"] = incident_code
    if get_correlation_id() is None:
        context["correlation_id"] = str(uuid.uuid4())

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context."""
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")
