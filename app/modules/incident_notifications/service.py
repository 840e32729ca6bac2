"""Incident notification entry points.

Runs the full pipeline for a newly created incident: load rules, select the
matching ones, aggregate recipients, render the notification and dispatch
it. The pipeline never raises to the incident-creation flow.

Usage:
    from modules.incident_notifications import notify_incident

    results = notify_incident(incident)

    # Fire-and-forget
    notify_incident_background(incident)
"""

import atexit
import contextvars
from concurrent.futures import ThreadPoolExecutor
from threading import Lock
from typing import TYPE_CHECKING, List, Optional

from infrastructure.idempotency import IdempotencyCache, IdempotencyKeyBuilder
from infrastructure.identity import IdentityService
from infrastructure.logging import bind_incident_context, get_module_logger
from infrastructure.notifications import NotificationResult, NotificationService
from modules.incident_notifications.aggregation import RecipientAggregator
from modules.incident_notifications.contacts import (
    ContactEnricher,
    OverridePhoneLookup,
    ProfilePhoneLookup,
)
from modules.incident_notifications.domain.models import Incident, Severity
from modules.incident_notifications.infrastructure.stores import (
    MembershipStore,
    PhoneOverrideStore,
    RuleStore,
)
from modules.incident_notifications.matching import select_matching_rules
from modules.incident_notifications.messages import (
    DEFAULT_INCIDENT_PATH_TEMPLATE,
    build_incident_notification,
    build_incident_url,
)
from modules.incident_notifications.recipients import RecipientResolver
from modules.incident_notifications.rules import load_enabled_rules

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = get_module_logger()

IDEMPOTENCY_NAMESPACE = "incident_notifications"

# Managed executor for background dispatches
_EXECUTOR: Optional[ThreadPoolExecutor] = None
_executor_lock = Lock()
_executor_shutdown = False


class IncidentNotifier:
    """Notifies the recipients of every rule matching an incident.

    Attributes:
        rule_store: Source of persisted notification rules
        aggregator: Resolves and merges the recipients of matching rules
        notifications: Delivers the rendered notification
        base_url: Application base URL for the incident deep link
        path_template: Path of the incident detail view
        cache: Optional idempotency cache; when set, an incident already
            dispatched within ``dedupe_ttl_seconds`` is skipped
    """

    def __init__(
        self,
        rule_store: RuleStore,
        aggregator: RecipientAggregator,
        notifications: NotificationService,
        base_url: str,
        path_template: str = DEFAULT_INCIDENT_PATH_TEMPLATE,
        cache: Optional[IdempotencyCache] = None,
        dedupe_ttl_seconds: int = 3600,
    ):
        self.rule_store = rule_store
        self.aggregator = aggregator
        self.notifications = notifications
        self.base_url = base_url
        self.path_template = path_template
        self.cache = cache
        self.dedupe_ttl_seconds = dedupe_ttl_seconds
        self._keys = IdempotencyKeyBuilder(namespace=IDEMPOTENCY_NAMESPACE)

    def notify_incident(self, incident: Incident) -> List[NotificationResult]:
        """Run the notification pipeline for an incident.

        Returns the per-recipient, per-channel results, which are
        informational only. Never raises.
        """
        with bind_incident_context(incident.id, incident.incident_code):
            try:
                return self._notify(incident)
            except Exception as e:  # pylint: disable=broad-except
                logger.exception("incident_notification_failed", error=str(e))
                return []

    def _notify(self, incident: Incident) -> List[NotificationResult]:
        logger.info("incident_notification_started", severity=incident.severity.value)

        if self.cache is not None and not self._claim(incident):
            logger.info("incident_already_notified")
            return []

        rules = load_enabled_rules(self.rule_store)
        matching = select_matching_rules(incident, rules)
        if not matching:
            logger.info("incident_notification_no_matching_rules", rule_count=len(rules))
            return []

        recipients = self.aggregator.aggregate(matching)
        if not recipients:
            logger.info(
                "incident_notification_no_recipients", matching_rule_count=len(matching)
            )
            return []

        url = build_incident_url(self.base_url, incident.id, self.path_template)
        notification = build_incident_notification(incident, url)
        results = self.notifications.dispatch(notification, list(recipients.values()))

        logger.info(
            "incident_notification_completed",
            matching_rule_count=len(matching),
            recipient_count=len(recipients),
            sent_count=sum(1 for result in results if result.is_success),
        )
        return results

    def _claim(self, incident: Incident) -> bool:
        """Mark an incident as dispatched; False if it already was."""
        key = self._keys.build(operation="notify_incident", incident_id=incident.id)
        return self.cache.claim(
            key,
            {"incident_id": incident.id, "incident_code": incident.incident_code},
            ttl_seconds=self.dedupe_ttl_seconds,
        )


def build_incident_notifier(
    settings: "Settings",
    *,
    rule_store: RuleStore,
    membership_store: MembershipStore,
    phone_override_store: PhoneOverrideStore,
    identity: IdentityService,
    notifications: NotificationService,
    cache: Optional[IdempotencyCache] = None,
) -> IncidentNotifier:
    """Wire an IncidentNotifier from settings and its collaborators.

    The phone lookup chain consults the override store before the identity
    provider's registered numbers. The cache is only used when
    ``DEDUPLICATE_DISPATCH`` is enabled.
    """
    feature = settings.notifications
    workers = feature.MAX_RECIPIENT_WORKERS

    resolver = RecipientResolver(identity, membership_store, max_workers=workers)
    enricher = ContactEnricher(
        identity,
        phone_lookups=[OverridePhoneLookup(phone_override_store), ProfilePhoneLookup()],
    )
    return IncidentNotifier(
        rule_store=rule_store,
        aggregator=RecipientAggregator(resolver, enricher, max_workers=workers),
        notifications=notifications,
        base_url=feature.base_url,
        path_template=feature.INCIDENT_PATH_TEMPLATE,
        cache=cache if feature.DEDUPLICATE_DISPATCH else None,
        dedupe_ttl_seconds=feature.IDEMPOTENCY_TTL_SECONDS,
    )


def _default_notifier() -> IncidentNotifier:
    # Import here to avoid circular dependency with the service providers
    from infrastructure.services import get_incident_notifier

    return get_incident_notifier()


def notify_incident(
    incident: Incident, notifier: Optional[IncidentNotifier] = None
) -> List[NotificationResult]:
    """Notify synchronously; joins every delivery before returning."""
    try:
        notifier = notifier or _default_notifier()
    except Exception as e:  # pylint: disable=broad-except
        logger.exception(
            "incident_notification_failed", incident_id=incident.id, error=str(e)
        )
        return []
    return notifier.notify_incident(incident)


def _background_worker(notifier: Optional[IncidentNotifier], incident: Incident) -> None:
    """Worker wrapper to call notify_incident and log exceptions."""
    try:
        notify_incident(incident, notifier=notifier)
    except Exception as e:  # pylint: disable=broad-except
        logger.exception(
            "background_incident_notification_failed",
            incident_id=incident.id,
            error=str(e),
        )


def _get_or_create_executor(max_workers: int = 4) -> Optional[ThreadPoolExecutor]:
    """Lazily create the module-scoped executor.

    Returns None once the executor has been explicitly shut down.
    """
    global _EXECUTOR
    with _executor_lock:
        if _executor_shutdown:
            return None
        if _EXECUTOR is None:
            _EXECUTOR = ThreadPoolExecutor(
                max_workers=max_workers, thread_name_prefix="incident-notify"
            )
            logger.debug(
                "created_background_notification_executor", max_workers=max_workers
            )
        return _EXECUTOR


def shutdown_notification_executor(wait: bool = True) -> None:
    """Shut down the background executor and refuse further submissions.

    Idempotent.
    """
    global _EXECUTOR, _executor_shutdown
    with _executor_lock:
        if _EXECUTOR is None:
            _executor_shutdown = True
            return
        try:
            _EXECUTOR.shutdown(wait=wait)
            logger.debug("background_notification_executor_shut_down", wait=wait)
        finally:
            _EXECUTOR = None
            _executor_shutdown = True


def reset_notification_executor() -> None:
    """Allow the executor to be recreated after shutdown (for testing only)."""
    global _executor_shutdown
    shutdown_notification_executor(wait=True)
    with _executor_lock:
        _executor_shutdown = False


@atexit.register
def _atexit_shutdown():
    """Best-effort shutdown at process exit."""
    try:
        shutdown_notification_executor(wait=False)
    except Exception:  # pylint: disable=broad-except
        pass


def notify_incident_background(
    incident: Incident, notifier: Optional[IncidentNotifier] = None
) -> bool:
    """Submit the pipeline to the background executor and return at once.

    Returns:
        True if the work was submitted, False if submission failed.
    """
    try:
        executor = _get_or_create_executor()
        if executor is None:
            logger.error("notification_executor_unavailable", incident_id=incident.id)
            return False
        ctx = contextvars.copy_context()
        executor.submit(ctx.run, _background_worker, notifier, incident)
        return True
    except Exception:  # pylint: disable=broad-except
        logger.exception(
            "failed_to_submit_incident_notification", incident_id=incident.id
        )
        return False


def dispatch_incident_notifications(
    incident: Incident,
    notifier: Optional[IncidentNotifier] = None,
    mode: Optional[str] = None,
) -> List[NotificationResult]:
    """Notify using the configured ``DISPATCH_MODE``.

    In background mode the results are not available and an empty list is
    returned. Unreadable settings fall back to sync dispatch.
    """
    if mode is None:
        try:
            from infrastructure.services import get_settings

            mode = get_settings().notifications.DISPATCH_MODE
        except Exception as e:  # pylint: disable=broad-except
            logger.exception(
                "incident_notification_failed",
                incident_id=incident.id,
                error=str(e),
                fallback_mode="sync",
            )
            mode = "sync"

    if mode == "background":
        notify_incident_background(incident, notifier=notifier)
        return []
    return notify_incident(incident, notifier=notifier)


def notify_critical_incident(
    incident_id: int,
    incident_code: str,
    title: str,
    location: Optional[str] = None,
    notifier: Optional[IncidentNotifier] = None,
) -> List[NotificationResult]:
    """Deprecated: notify a critical incident by its bare fields.

    Builds a critical incident snapshot without category, discipline,
    organization or project and runs notify_incident.
    """
    logger.warning(
        "notify_critical_incident_deprecated",
        incident_id=incident_id,
        replacement="notify_incident",
    )
    incident = Incident(
        id=incident_id,
        incident_code=incident_code,
        title=title,
        description="",
        severity=Severity.CRITICAL,
        category="",
        location=location,
    )
    return notify_incident(incident, notifier=notifier)
