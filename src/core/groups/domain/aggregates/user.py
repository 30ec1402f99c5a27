"""User read model for the groups context."""

from __future__ import annotations

from dataclasses import dataclass

from groups.domain.value_objects import UserId


@dataclass(frozen=True)
class User:
    """A platform user as seen by the group rules.

    Users are owned by the user directory; the groups context only reads
    the id and the contact fields.
    """

    id: UserId
    email: str
    name: str | None = None

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.email})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)
