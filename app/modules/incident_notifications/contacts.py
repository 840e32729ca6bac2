"""Contact enrichment.

Attaches a delivery email and phone number to a resolved identity. Phone
numbers come from an ordered chain of lookups; the first lookup returning a
number wins.
"""

from typing import List, Optional, Protocol, Sequence

from pydantic import BaseModel, EmailStr, TypeAdapter, ValidationError

from infrastructure.identity import IdentityProfile, IdentityService
from infrastructure.logging import get_module_logger
from modules.incident_notifications.infrastructure.stores import PhoneOverrideStore

logger = get_module_logger()

_email_adapter: TypeAdapter = TypeAdapter(EmailStr)


class ContactInfo(BaseModel):
    """Delivery addresses of one user; either may be missing."""

    email: Optional[str] = None
    phone: Optional[str] = None


class PhoneLookup(Protocol):
    """One step of the phone lookup chain."""

    name: str

    def lookup(
        self, user_id: str, profile: Optional[IdentityProfile]
    ) -> Optional[str]: ...


class OverridePhoneLookup:
    """Phone number from the legacy critical-incident recipients table."""

    name = "override"

    def __init__(self, store: PhoneOverrideStore):
        self.store = store

    def lookup(
        self, user_id: str, profile: Optional[IdentityProfile]
    ) -> Optional[str]:
        return self.store.get_override_phone(user_id)


class ProfilePhoneLookup:
    """First phone number registered with the identity provider."""

    name = "profile"

    def lookup(
        self, user_id: str, profile: Optional[IdentityProfile]
    ) -> Optional[str]:
        return profile.primary_phone if profile else None


def validate_email(address: Optional[str]) -> Optional[str]:
    """Return the address if it is a valid email, else None."""
    if not address:
        return None
    try:
        _email_adapter.validate_python(address)
    except ValidationError:
        logger.warning("contact_email_invalid", email=address)
        return None
    return address


class ContactEnricher:
    """Looks up the email and phone number of a user.

    Never raises: a failing lookup leaves the corresponding field empty.
    """

    def __init__(
        self,
        identity: IdentityService,
        phone_lookups: Optional[Sequence[PhoneLookup]] = None,
    ):
        self.identity = identity
        self.phone_lookups: List[PhoneLookup] = list(
            phone_lookups if phone_lookups is not None else [ProfilePhoneLookup()]
        )

    def enrich(
        self, user_id: str, profile: Optional[IdentityProfile] = None
    ) -> ContactInfo:
        """Return the contact details of a user.

        Args:
            user_id: Identity-provider user id
            profile: Already resolved profile; looked up when omitted
        """
        if profile is None:
            profile = self._fetch_profile(user_id)

        email = validate_email(profile.primary_email) if profile else None
        phone = self._lookup_phone(user_id, profile)

        logger.debug(
            "contact_enriched",
            user_id=user_id,
            has_email=email is not None,
            has_phone=phone is not None,
        )
        return ContactInfo(email=email, phone=phone)

    def _fetch_profile(self, user_id: str) -> Optional[IdentityProfile]:
        try:
            result = self.identity.get_user(user_id)
        except Exception as e:  # pylint: disable=broad-except
            logger.error("contact_profile_lookup_failed", user_id=user_id, error=str(e))
            return None

        if not result.is_success:
            logger.warning(
                "contact_profile_lookup_failed",
                user_id=user_id,
                error=result.message,
                error_code=result.error_code,
            )
            return None
        return result.data

    def _lookup_phone(
        self, user_id: str, profile: Optional[IdentityProfile]
    ) -> Optional[str]:
        for step in self.phone_lookups:
            try:
                phone = step.lookup(user_id, profile)
            except Exception as e:  # pylint: disable=broad-except
                logger.warning(
                    "contact_phone_lookup_failed",
                    user_id=user_id,
                    lookup=step.name,
                    error=str(e),
                )
                continue
            if phone:
                return phone
        return None
