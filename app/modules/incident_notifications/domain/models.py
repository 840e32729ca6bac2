"""Domain models for incident notifications.

Pydantic models for the incident snapshot, notification rules and their
filters, and the legacy critical-incident recipient rows.

Key distinctions:
  - Incident: immutable snapshot passed in when an incident is created
  - NotificationRule: validated persisted configuration, read-only here
  - RecipientDescriptor: closed union of user / team / organization targets
"""

from enum import Enum
from typing import Annotated, FrozenSet, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from infrastructure.notifications.models import Channel


class Severity(str, Enum):
    """Incident severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Incident(BaseModel):
    """Incident snapshot taken at trigger time. Never mutated.

    Attributes:
        id: Numeric database id, used for the deep link
        incident_code: Human-facing code (e.g. "VM-2024-001")
        title: Incident title
        description: Optional free-text description
        severity: Severity level
        category: Open category string (e.g. "graafschade")
        discipline: Optional discipline
        location: Optional location text
        organization_id: Optional owning organization
        project_id: Optional owning project
    """

    model_config = ConfigDict(frozen=True)

    id: int
    incident_code: str
    title: str
    description: Optional[str] = None
    severity: Severity
    category: str = ""
    discipline: Optional[str] = None
    location: Optional[str] = None
    organization_id: Optional[int] = None
    project_id: Optional[int] = None


class RuleFilter(BaseModel):
    """Incident filter of a notification rule.

    An empty set or absent id means "match every value" for that dimension.
    Persisted filters use camelCase keys, so both spellings are accepted.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    severity: FrozenSet[str] = frozenset()
    category: FrozenSet[str] = frozenset()
    discipline: FrozenSet[str] = frozenset()
    organization_id: Optional[int] = Field(default=None, alias="organizationId")
    project_id: Optional[int] = Field(default=None, alias="projectId")

    @field_validator("severity", "category", "discipline", mode="before")
    @classmethod
    def coerce_null_to_empty(cls, v):
        if v is None:
            return frozenset()
        if isinstance(v, str):
            return frozenset({v})
        return v

    @property
    def is_empty(self) -> bool:
        return not (
            self.severity
            or self.category
            or self.discipline
            or self.organization_id is not None
            or self.project_id is not None
        )


class UserRecipient(BaseModel):
    """A single identity-provider user."""

    model_config = ConfigDict(frozen=True)

    type: Literal["user"] = "user"
    id: str = Field(..., min_length=1)


class TeamRecipient(BaseModel):
    """Every member of a project."""

    model_config = ConfigDict(frozen=True)

    type: Literal["team"] = "team"
    id: int


class OrganizationRecipient(BaseModel):
    """Every active member of an organization."""

    model_config = ConfigDict(frozen=True)

    type: Literal["organization"] = "organization"
    id: int


RecipientDescriptor = Annotated[
    Union[UserRecipient, TeamRecipient, OrganizationRecipient],
    Field(discriminator="type"),
]


class NotificationRule(BaseModel):
    """A validated notification rule.

    Attributes:
        id: Rule id
        name: Display name
        description: Optional description
        recipient: Who to notify
        channels: Channels to notify on (at least one)
        filter: Which incidents the rule applies to
        organization_id: Hard tenant scope; when set the rule only ever
            applies to incidents of this organization
        enabled: Disabled rules are never evaluated
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    description: Optional[str] = None
    recipient: RecipientDescriptor
    channels: FrozenSet[Channel] = Field(..., min_length=1)
    filter: RuleFilter = Field(default_factory=RuleFilter)
    organization_id: Optional[int] = None
    enabled: bool = True


class LegacyRecipient(BaseModel):
    """Row of the legacy critical-incident recipient table.

    Still consulted as the first source of phone numbers.
    """

    user_id: str
    phone_number: Optional[str] = None
    enabled: bool = True
    added_by: Optional[str] = None
