"""Infrastructure modules for the incident notification engine.

Centralized infrastructure components:
- configuration: Settings management (Settings, get_settings)
- logging: Structured logging (get_module_logger, bind_incident_context)
- operations: Operation results and error classification
- clients: AWS (DynamoDB), Clerk, SMTP and Twilio clients
- identity: User identity resolution (IdentityProfile, IdentityService)
- idempotency: Idempotency cache
- notifications: Multi-channel notification dispatcher
- services: Dependency injection providers (get_incident_notifier, ...)
"""

# Configuration
from infrastructure.configuration import Settings, get_settings

# Logging
from infrastructure.logging import get_module_logger

# Operations
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    # Logging
    "get_module_logger",
    # Operations
    "OperationResult",
    "OperationStatus",
]
