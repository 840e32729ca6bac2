"""Idempotency key builder for consistent key generation."""

import hashlib
from typing import Any


class IdempotencyKeyBuilder:
    """Build deterministic idempotency keys.

    Keys are namespaced per feature and hash their components, so two
    triggers for the same entity always map to the same key.

    Example:
        >>> builder = IdempotencyKeyBuilder(namespace="incident_notifications")
        >>> builder.build(operation="notify_incident", incident_id=42)
        'incident_notifications:notify_incident:<16 hex chars>'
    """

    def __init__(self, namespace: str):
        self.namespace = namespace

    def build(self, operation: str, **components: Any) -> str:
        """Build idempotency key from components.

        Args:
            operation: Operation type (e.g., "notify_incident")
            **components: Key components; order does not matter

        Returns:
            Idempotency key string
        """
        key_parts = [self.namespace, operation]
        key_parts.extend(f"{k}={v}" for k, v in sorted(components.items()))
        key_string = "|".join(str(part) for part in key_parts)

        key_hash = hashlib.sha256(key_string.encode()).hexdigest()[:16]

        return f"{self.namespace}:{operation}:{key_hash}"
