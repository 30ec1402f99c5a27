"""Domain aggregates for the groups context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants and business rules without depending on infrastructure.
"""

from groups.domain.aggregates.group import (
    FULL_NAME_SEPARATOR,
    Group,
    GroupFieldLimits,
    calculate_full_name,
)
from groups.domain.aggregates.membership import Membership
from groups.domain.aggregates.membership_request import MembershipRequest
from groups.domain.aggregates.subscription import Subscription
from groups.domain.aggregates.user import User

__all__ = [
    "FULL_NAME_SEPARATOR",
    "Group",
    "GroupFieldLimits",
    "Membership",
    "MembershipRequest",
    "Subscription",
    "User",
    "calculate_full_name",
]
