"""Structlog configuration.

The process-wide pipeline merges bound context (correlation id, incident),
stamps level, time and call site, masks credentials, truncates rendered
message bodies and renders to the console in development or JSON in
production. Under pytest every log line is dropped.

Usage:
    from infrastructure.logging import get_module_logger

    logger = get_module_logger()
    logger.info("incident_notification_started", incident_id=42)
"""

import inspect
import logging
import sys
from typing import Any, List, Optional

import structlog
from structlog.stdlib import BoundLogger

from infrastructure.configuration import get_settings
from infrastructure.logging.formatters import (
    mask_sensitive_data,
    truncate_large_values,
)

_SILENT = logging.CRITICAL + 1


def _is_test_environment() -> bool:
    return "pytest" in sys.modules


def _add_release(git_sha: str):
    """Processor stamping the deployed revision on every event."""

    def processor(logger: Any, method_name: str, event_dict: dict) -> dict:
        event_dict.setdefault("git_sha", git_sha)
        return event_dict

    return processor


def _build_processors(production: bool, git_sha: str) -> List[Any]:
    renderer = (
        structlog.processors.JSONRenderer()
        if production
        else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        _add_release(git_sha),
        mask_sensitive_data(),
        truncate_large_values(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Install the structlog pipeline and the stdlib root handler.

    Args:
        log_level: Level name; defaults to ``settings.LOG_LEVEL``
        is_production: JSON output when True; defaults to
            ``settings.is_production``

    Returns:
        The root structlog logger
    """
    if _is_test_environment():
        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(format="%(message)s", level=_SILENT, force=True)
        return structlog.stdlib.get_logger()

    settings = get_settings()
    production = settings.is_production if is_production is None else is_production
    level_name = (log_level or settings.LOG_LEVEL).upper()

    structlog.configure(
        processors=_build_processors(production, settings.GIT_SHA),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level_name, logging.INFO),
    )
    return structlog.stdlib.get_logger()


logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Logger bound to the calling module.

    Binds ``component`` (last dotted part) and ``module_path``, e.g.
    ``component="recipients"`` and
    ``module_path="modules.incident_notifications.recipients"``.
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None
    if module is None:
        return logger.bind(component="unknown")

    return logger.bind(
        component=module.__name__.rsplit(".", 1)[-1],
        module_path=module.__name__,
    )
