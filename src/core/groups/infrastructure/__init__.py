"""Infrastructure layer for the groups bounded context.

SQLAlchemy repositories implementing the port protocols.
"""

from groups.infrastructure.discussion_repository import DiscussionRepository
from groups.infrastructure.group_repository import GroupRepository
from groups.infrastructure.invitation_repository import InvitationRepository
from groups.infrastructure.membership_repository import MembershipRepository
from groups.infrastructure.membership_request_repository import (
    MembershipRequestRepository,
)
from groups.infrastructure.subscription_repository import SubscriptionRepository
from groups.infrastructure.user_repository import UserRepository

__all__ = [
    "DiscussionRepository",
    "GroupRepository",
    "InvitationRepository",
    "MembershipRepository",
    "MembershipRequestRepository",
    "SubscriptionRepository",
    "UserRepository",
]
