"""Domain exceptions for the groups bounded context.

Validation problems are collected and raised together as a single
GroupValidationError so a caller can present all of them at once.
The remaining errors abort the current operation immediately.
"""

from __future__ import annotations

from collections.abc import Iterable

from groups.domain.value_objects import FieldError


class GroupValidationError(Exception):
    """Raised when a group violates one or more of its invariants.

    Covers bad visibility combinations, an invalid hierarchy parent, and
    field length or enum violations.

    Attributes:
        errors: Every problem found, in the order the checks ran
    """

    def __init__(self, errors: Iterable[FieldError]) -> None:
        self.errors: list[FieldError] = list(errors)
        if not self.errors:
            raise ValueError("GroupValidationError requires at least one error")
        super().__init__("; ".join(str(error) for error in self.errors))

    def fields(self) -> set[str]:
        """Return the names of all fields that failed validation."""
        return {error.field for error in self.errors}


class CapacityExceededError(Exception):
    """Raised when adding a member would take a top-level group past max_size.

    Subgroups are never capacity-limited.
    """

    def __init__(self, group_id: str, max_size: int, member_count: int) -> None:
        self.group_id = group_id
        self.max_size = max_size
        self.member_count = member_count
        super().__init__(
            f"Group {group_id} is full ({member_count} members, max_size {max_size})"
        )


class InvalidArgumentError(ValueError):
    """Raised for an unrecognised visibility term or enum value."""

    pass


class InvalidStateError(RuntimeError):
    """Raised when stored state holds a value the domain cannot represent.

    Unreachable while the enum invariants hold; seeing it means a
    programming error let an invalid value through.
    """

    pass


class NotFoundError(LookupError):
    """Raised when a lookup the caller required to succeed found nothing.

    For example asking for the admin email of a group without admins.
    """

    pass
