"""Ports (interfaces) for the groups bounded context.

Ports define the contracts for storage and the other collaborators
without specifying implementation details. This allows for dependency
inversion and keeps the rule services independent of infrastructure.
"""

from groups.ports.exceptions import DuplicateMembershipError
from groups.ports.publisher import DomainEventPublisher
from groups.ports.repositories import (
    IDiscussionRepository,
    IGroupRepository,
    IInvitationRepository,
    IMembershipRepository,
    IMembershipRequestRepository,
    ISubscriptionRepository,
    IUserRepository,
)

__all__ = [
    "DomainEventPublisher",
    "DuplicateMembershipError",
    "IDiscussionRepository",
    "IGroupRepository",
    "IInvitationRepository",
    "IMembershipRepository",
    "IMembershipRequestRepository",
    "ISubscriptionRepository",
    "IUserRepository",
]
