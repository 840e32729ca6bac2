"""Infrastructure configuration module - public API.

Centralized configuration management for the notification engine using
Pydantic BaseSettings with domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    get_settings: Cached process-wide Settings instance

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    smtp_host = settings.smtp.SMTP_HOST
    base_url = settings.notifications.base_url
    ```
"""

from infrastructure.configuration.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
