"""SQLAlchemy ORM models for the groups bounded context.

These models map to database tables and are used by repository implementations.
"""

from groups.infrastructure.models.discussion import DiscussionModel
from groups.infrastructure.models.group import GroupModel
from groups.infrastructure.models.invitation import InvitationModel
from groups.infrastructure.models.membership import MembershipModel
from groups.infrastructure.models.membership_request import MembershipRequestModel
from groups.infrastructure.models.subscription import SubscriptionModel
from groups.infrastructure.models.user import UserModel

__all__ = [
    "DiscussionModel",
    "GroupModel",
    "InvitationModel",
    "MembershipModel",
    "MembershipRequestModel",
    "SubscriptionModel",
    "UserModel",
]
