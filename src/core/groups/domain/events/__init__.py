"""Domain events for the groups bounded context.

Domain events capture facts about things that have happened in the domain.
They are immutable value objects that carry all the information needed
to describe the occurrence of an event, and are handed to the event
publisher (search indexer, notifications) once the use case commits.
"""

from groups.domain.events.group import (
    GroupArchived,
    GroupCreated,
    GroupDetailsChanged,
    GroupSetupCompleted,
    GroupVisibilityChanged,
)
from groups.domain.events.membership import (
    MemberAdded,
    MemberPromotedToAdmin,
    MemberRemoved,
)

# Type alias for all domain events in the groups context
DomainEvent = (
    GroupCreated
    | GroupDetailsChanged
    | GroupVisibilityChanged
    | GroupSetupCompleted
    | GroupArchived
    | MemberAdded
    | MemberPromotedToAdmin
    | MemberRemoved
)

__all__ = [
    # Group events
    "GroupArchived",
    "GroupCreated",
    "GroupDetailsChanged",
    "GroupSetupCompleted",
    "GroupVisibilityChanged",
    # Membership events
    "MemberAdded",
    "MemberPromotedToAdmin",
    "MemberRemoved",
    # Type alias
    "DomainEvent",
]
