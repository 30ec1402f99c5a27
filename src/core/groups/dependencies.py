"""Composition of the groups bounded context.

Wires repositories, rule services and probes around a SQLAlchemy session
so callers only deal with GroupService.
"""

from sqlalchemy.orm import Session

from groups.application.services import (
    GroupHierarchy,
    GroupService,
    MembershipRegistry,
)
from groups.domain.aggregates import GroupFieldLimits
from groups.infrastructure import (
    DiscussionRepository,
    GroupRepository,
    InvitationRepository,
    MembershipRepository,
    MembershipRequestRepository,
    SubscriptionRepository,
    UserRepository,
)
from groups.ports.publisher import DomainEventPublisher
from infrastructure.settings import GroupRuleSettings, get_group_rule_settings


def get_field_limits(settings: GroupRuleSettings | None = None) -> GroupFieldLimits:
    """Build the validation limits from group rule settings."""
    settings = settings or get_group_rule_settings()
    return GroupFieldLimits(
        name_max_length=settings.name_max_length,
        description_max_length=settings.description_max_length,
    )


def get_group_service(
    session: Session,
    settings: GroupRuleSettings | None = None,
    publisher: DomainEventPublisher | None = None,
) -> GroupService:
    """Build a GroupService bound to ``session``.

    The session must not be in a transaction; each service call begins
    and commits its own.

    Args:
        session: Session from the factory in infrastructure.database
        settings: Rule settings; read from the environment when omitted
        publisher: Optional receiver of committed domain events
    """
    settings = settings or get_group_rule_settings()

    group_repository = GroupRepository(session=session)
    membership_repository = MembershipRepository(session=session)

    registry = MembershipRegistry(
        membership_repository=membership_repository,
        membership_request_repository=MembershipRequestRepository(session=session),
        invitation_repository=InvitationRepository(session=session),
        user_repository=UserRepository(session=session),
    )
    hierarchy = GroupHierarchy(
        group_repository=group_repository,
        membership_repository=membership_repository,
        discussion_repository=DiscussionRepository(session=session),
    )
    return GroupService(
        session=session,
        group_repository=group_repository,
        subscription_repository=SubscriptionRepository(session=session),
        registry=registry,
        hierarchy=hierarchy,
        limits=get_field_limits(settings),
        default_max_size=settings.default_max_size,
        publisher=publisher,
    )
