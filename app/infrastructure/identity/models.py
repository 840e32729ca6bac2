"""User identity models.

Defines the normalized identity profile returned by the identity provider.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class IdentityProfile(BaseModel):
    """Normalized user identity from the identity provider.

    Contact lists keep the provider's registration order; the first entry
    is the one used for delivery.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(..., description="Identity provider user id")
    email_addresses: List[str] = Field(
        default_factory=list, description="Registered email addresses, in order"
    )
    phone_numbers: List[str] = Field(
        default_factory=list, description="Registered phone numbers, in order"
    )
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @property
    def primary_email(self) -> Optional[str]:
        return self.email_addresses[0] if self.email_addresses else None

    @property
    def primary_phone(self) -> Optional[str]:
        return self.phone_numbers[0] if self.phone_numbers else None
