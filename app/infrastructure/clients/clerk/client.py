"""Clerk Backend API client for user lookups.

Provides access to Clerk user records with consistent error handling and
OperationResult return types.
"""

from typing import TYPE_CHECKING, Optional

import requests
import structlog

from infrastructure.operations import OperationResult, classify_http_error

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = structlog.get_logger()


class ClerkClient:
    """Client for the Clerk Backend API.

    All methods return OperationResult; a successful ``get_user`` carries the
    raw user payload as data.

    Args:
        settings: Settings instance with clerk.CLERK_SECRET_KEY
        session: Optional requests session (shared connection pool)
    """

    def __init__(
        self, settings: "Settings", session: Optional[requests.Session] = None
    ) -> None:
        self._secret_key = settings.clerk.CLERK_SECRET_KEY
        self._api_url = settings.clerk.CLERK_API_URL.rstrip("/")
        self._timeout = settings.clerk.CLERK_TIMEOUT_SECONDS
        self._session = session or requests.Session()
        self._logger = logger.bind(component="clerk_client")

    @property
    def is_configured(self) -> bool:
        return bool(self._secret_key)

    def get_user(self, user_id: str) -> OperationResult:
        """Fetch a single user by id.

        Args:
            user_id: Clerk user id (e.g. "user_2abc...")

        Returns:
            OperationResult with the user payload dict, NOT_FOUND when the
            user does not exist, or a classified error
        """
        log = self._logger.bind(user_id=user_id)

        if not self.is_configured:
            log.warning("clerk_not_configured")
            return OperationResult.permanent_error(
                "CLERK_SECRET_KEY is not configured", error_code="NOT_CONFIGURED"
            )

        try:
            response = self._session.get(
                f"{self._api_url}/users/{user_id}",
                headers={"Authorization": f"Bearer {self._secret_key}"},
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            result = classify_http_error(exc, provider="Clerk")
            log.warning(
                "clerk_get_user_failed",
                status=result.status.value,
                error_code=result.error_code,
                error=str(exc),
            )
            return result

        log.debug("clerk_user_fetched")
        return OperationResult.success(data=response.json(), message="User fetched")

    def healthcheck(self) -> OperationResult:
        """Check that the API is reachable and the key is accepted."""
        if not self.is_configured:
            return OperationResult.permanent_error(
                "CLERK_SECRET_KEY is not configured", error_code="NOT_CONFIGURED"
            )
        try:
            response = self._session.get(
                f"{self._api_url}/users",
                headers={"Authorization": f"Bearer {self._secret_key}"},
                params={"limit": 1},
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            return classify_http_error(exc, provider="Clerk")
        return OperationResult.success(message="Clerk API reachable")
