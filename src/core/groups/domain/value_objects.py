"""Value objects for the groups domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and the enumerated group settings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar, Self

from ulid import ULID


@dataclass(frozen=True)
class _UlidId:
    """Base for ULID-backed identifiers.

    ULIDs sort by creation time, so "lowest id" also means "oldest".
    """

    value: str

    _label: ClassVar[str] = "Id"

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> Self:
        """Generate a new identifier using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create an identifier from its string value.

        Args:
            value: ULID string

        Returns:
            Identifier instance

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid {cls._label}: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class GroupId(_UlidId):
    """Identifier for a Group aggregate."""

    _label: ClassVar[str] = "GroupId"


@dataclass(frozen=True)
class UserId(_UlidId):
    """Identifier for a user of the platform."""

    _label: ClassVar[str] = "UserId"


@dataclass(frozen=True)
class MembershipId(_UlidId):
    """Identifier for a Membership."""

    _label: ClassVar[str] = "MembershipId"


@dataclass(frozen=True)
class MembershipRequestId(_UlidId):
    """Identifier for a MembershipRequest."""

    _label: ClassVar[str] = "MembershipRequestId"


@dataclass(frozen=True)
class DiscussionId(_UlidId):
    """Identifier for a discussion owned by the discussion collaborator."""

    _label: ClassVar[str] = "DiscussionId"


class PaymentPlan(StrEnum):
    """How a top-level group pays for the platform."""

    PWYC = "pwyc"
    SUBSCRIPTION = "subscription"
    MANUAL_SUBSCRIPTION = "manual_subscription"
    UNDETERMINED = "undetermined"


class DiscussionPrivacyOption(StrEnum):
    """Which discussion privacy settings a group allows."""

    PUBLIC_ONLY = "public_only"
    PRIVATE_ONLY = "private_only"
    PUBLIC_OR_PRIVATE = "public_or_private"


class MembershipGrantedUpon(StrEnum):
    """What it takes for a user to become a member."""

    REQUEST = "request"
    APPROVAL = "approval"
    INVITATION = "invitation"


class Visibility(StrEnum):
    """Semantic visibility term derived from the two stored flags.

    Exactly one term holds for every group.
    """

    PUBLIC = "public"
    PARENT_MEMBERS = "parent_members"
    MEMBERS = "members"


@dataclass(frozen=True)
class FieldError:
    """A single validation problem attached to a group field.

    ``field`` is ``"base"`` for problems that concern the group as a whole
    (such as an invalid parent).
    """

    field: str
    message: str

    def __str__(self) -> str:
        """Return a human readable description."""
        return f"{self.field}: {self.message}"
