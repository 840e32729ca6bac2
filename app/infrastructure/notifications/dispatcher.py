"""Notification dispatcher with concurrent per-recipient, per-channel delivery.

Delivers one notification to many recipients:
- Every recipient is processed concurrently
- Each recipient's requested channels are attempted concurrently and
  independently: a failure on one channel never affects another channel
  or another recipient
- Every attempt yields a NotificationResult; nothing is raised to the caller
- All attempts are joined before ``dispatch`` returns

Usage Example:
    from infrastructure.notifications import (
        Channel,
        NotificationDispatcher,
        ResolvedRecipient,
    )

    dispatcher = NotificationDispatcher(
        channels={Channel.EMAIL: email_channel, Channel.IN_APP: in_app_channel},
    )

    results = dispatcher.dispatch(
        notification,
        [ResolvedRecipient(user_id="user_1", email="a@example.com",
                           channels={Channel.EMAIL, Channel.IN_APP})],
    )
    success_count = sum(1 for r in results if r.is_success)
"""

import contextvars
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Dict, List, Sequence
import structlog
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.models import (
    Channel,
    Notification,
    NotificationResult,
    NotificationStatus,
    ResolvedRecipient,
)

logger = structlog.get_logger()


def submit_in_context(executor: ThreadPoolExecutor, fn, *args) -> Future:
    """Submit ``fn`` running inside a copy of the caller's context.

    Keeps log context (incident id, correlation id) bound in worker threads.
    """
    ctx = contextvars.copy_context()
    return executor.submit(ctx.run, fn, *args)


class NotificationDispatcher:
    """Multi-channel notification dispatcher.

    Attributes:
        channels: Dict mapping Channel to NotificationChannel instance
        max_workers: Upper bound on recipients processed at once
    """

    def __init__(
        self,
        channels: Dict[Channel, NotificationChannel],
        max_workers: int = 8,
    ):
        self.channels = channels
        self.max_workers = max(1, max_workers)

        logger.info(
            "initialized_notification_dispatcher",
            channels=[channel.value for channel in channels],
            max_workers=self.max_workers,
        )

    def dispatch(
        self,
        notification: Notification,
        recipients: Sequence[ResolvedRecipient],
    ) -> List[NotificationResult]:
        """Deliver a notification to every recipient over its channels.

        Args:
            notification: Content to deliver
            recipients: Deduplicated recipients with their requested channels

        Returns:
            One NotificationResult per requested channel per recipient, grouped
            by recipient in input order, channels in Channel declaration order
        """
        if not recipients:
            logger.info("notification_dispatch_no_recipients")
            return []

        workers = min(self.max_workers, len(recipients))
        channel_workers = workers * len(Channel)

        with ThreadPoolExecutor(
            max_workers=channel_workers, thread_name_prefix="notify-channel"
        ) as channel_pool, ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="notify-recipient"
        ) as recipient_pool:
            futures = [
                submit_in_context(
                    recipient_pool,
                    self._deliver_to_recipient,
                    channel_pool,
                    notification,
                    recipient,
                )
                for recipient in recipients
            ]
            results: List[NotificationResult] = []
            for recipient, future in zip(recipients, futures):
                results.extend(
                    self._collect(future, recipient, list(recipient.channels))
                )

        logger.info(
            "notification_dispatch_completed",
            recipient_count=len(recipients),
            total_attempts=len(results),
            sent_count=sum(1 for r in results if r.status == NotificationStatus.SENT),
            failed_count=sum(
                1 for r in results if r.status == NotificationStatus.FAILED
            ),
            skipped_count=sum(
                1 for r in results if r.status == NotificationStatus.SKIPPED
            ),
        )
        return results

    def _deliver_to_recipient(
        self,
        channel_pool: ThreadPoolExecutor,
        notification: Notification,
        recipient: ResolvedRecipient,
    ) -> List[NotificationResult]:
        """Attempt every requested channel for one recipient and join them."""
        requested = [channel for channel in Channel if recipient.wants(channel)]
        futures = [
            submit_in_context(
                channel_pool, self._attempt, channel, notification, recipient
            )
            for channel in requested
        ]

        results = []
        for channel, future in zip(requested, futures):
            results.extend(self._collect(future, recipient, [channel]))
        return results

    def _attempt(
        self,
        channel_name: Channel,
        notification: Notification,
        recipient: ResolvedRecipient,
    ) -> List[NotificationResult]:
        """One channel attempt. Never raises."""
        log = logger.bind(recipient_id=recipient.user_id, channel=channel_name.value)

        channel = self.channels.get(channel_name)
        if channel is None:
            log.warning("notification_channel_unavailable")
            return [
                NotificationResult(
                    channel=channel_name,
                    recipient_id=recipient.user_id,
                    status=NotificationStatus.SKIPPED,
                    message=f"Channel {channel_name.value} is not registered",
                    error_code="CHANNEL_UNAVAILABLE",
                )
            ]

        try:
            if not channel.is_configured():
                log.info("notification_channel_not_configured")
                return [
                    NotificationResult(
                        channel=channel_name,
                        recipient_id=recipient.user_id,
                        status=NotificationStatus.SKIPPED,
                        message=f"Channel {channel_name.value} is not configured",
                        error_code="NOT_CONFIGURED",
                    )
                ]

            result = channel.send(notification, recipient)
        except Exception as e:  # pylint: disable=broad-except
            log.error("notification_channel_exception", error=str(e), exc_info=True)
            return [
                NotificationResult(
                    channel=channel_name,
                    recipient_id=recipient.user_id,
                    status=NotificationStatus.FAILED,
                    message=f"Channel exception: {str(e)}",
                    error_code="CHANNEL_EXCEPTION",
                )
            ]

        if result.status == NotificationStatus.SENT:
            log.info("notification_channel_sent", external_id=result.external_id)
        elif result.status == NotificationStatus.SKIPPED:
            log.info(
                "notification_channel_skipped",
                reason=result.message,
                error_code=result.error_code,
            )
        else:
            log.warning(
                "notification_channel_failed",
                error=result.message,
                error_code=result.error_code,
            )
        return [result]

    def _collect(
        self,
        future: Future,
        recipient: ResolvedRecipient,
        channels: List[Channel],
    ) -> List[NotificationResult]:
        """Join a task, converting an escaped exception into FAILED results."""
        try:
            return future.result()
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "notification_task_failed",
                recipient_id=recipient.user_id,
                error=str(e),
                exc_info=True,
            )
            return [
                NotificationResult(
                    channel=channel,
                    recipient_id=recipient.user_id,
                    status=NotificationStatus.FAILED,
                    message=f"Delivery task failed: {str(e)}",
                    error_code="TASK_FAILED",
                )
                for channel in sorted(channels, key=list(Channel).index)
            ]

    def get_available_channels(self) -> List[Channel]:
        return list(self.channels.keys())

    def health_check(self) -> Dict[str, bool]:
        """Check health of all channels.

        Returns:
            Dict mapping channel name to health status (True=healthy)
        """
        health_status = {}

        for channel_name, channel in self.channels.items():
            try:
                result = channel.health_check()
                health_status[channel_name.value] = result.is_success
            except Exception as e:  # pylint: disable=broad-except
                logger.error(
                    "channel_health_check_failed",
                    channel_name=channel_name.value,
                    error=str(e),
                    exc_info=True,
                )
                health_status[channel_name.value] = False

        return health_status
