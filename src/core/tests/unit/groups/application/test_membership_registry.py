"""Unit tests for MembershipRegistry."""

from unittest.mock import create_autospec

import pytest

from groups.application.observability import MembershipRegistryProbe
from groups.application.services import MembershipRegistry
from groups.domain.aggregates import Group, Membership, User
from groups.domain.events import MemberAdded, MemberPromotedToAdmin, MemberRemoved
from groups.domain.exceptions import (
    CapacityExceededError,
    InvalidArgumentError,
    NotFoundError,
)
from groups.domain.value_objects import UserId
from groups.ports.exceptions import DuplicateMembershipError
from groups.ports.repositories import (
    IInvitationRepository,
    IMembershipRepository,
    IMembershipRequestRepository,
    IUserRepository,
)


@pytest.fixture
def mock_membership_repository():
    repo = create_autospec(IMembershipRepository, instance=True)
    repo.get.return_value = None
    repo.count_for_group.return_value = 0
    repo.list_admins.return_value = []
    return repo


@pytest.fixture
def mock_request_repository():
    return create_autospec(IMembershipRequestRepository, instance=True)


@pytest.fixture
def mock_invitation_repository():
    repo = create_autospec(IInvitationRepository, instance=True)
    repo.count_pending.return_value = 0
    return repo


@pytest.fixture
def mock_user_repository():
    return create_autospec(IUserRepository, instance=True)


@pytest.fixture
def mock_probe():
    return create_autospec(MembershipRegistryProbe, instance=True)


@pytest.fixture
def registry(
    mock_membership_repository,
    mock_request_repository,
    mock_invitation_repository,
    mock_user_repository,
    mock_probe,
) -> MembershipRegistry:
    return MembershipRegistry(
        membership_repository=mock_membership_repository,
        membership_request_repository=mock_request_repository,
        invitation_repository=mock_invitation_repository,
        user_repository=mock_user_repository,
        probe=mock_probe,
    )


@pytest.fixture
def group() -> Group:
    group = Group.create("Loomio", max_size=5)
    group.collect_events()
    return group


class TestMembershipRegistryInit:
    def test_uses_default_probe_when_not_provided(
        self,
        mock_membership_repository,
        mock_request_repository,
        mock_invitation_repository,
        mock_user_repository,
    ):
        registry = MembershipRegistry(
            membership_repository=mock_membership_repository,
            membership_request_repository=mock_request_repository,
            invitation_repository=mock_invitation_repository,
            user_repository=mock_user_repository,
        )

        assert registry._probe is not None


class TestAddMember:
    def test_creates_membership_when_absent(
        self, registry, group, mock_membership_repository, mock_probe
    ):
        user_id = UserId.generate()
        inviter_id = UserId.generate()

        membership = registry.add_member(group, user_id, inviter_id)

        assert membership.group_id == group.id
        assert membership.user_id == user_id
        assert membership.inviter_id == inviter_id
        assert membership.admin is False
        mock_membership_repository.add.assert_called_once_with(membership)
        mock_probe.member_added.assert_called_once_with(
            group_id=group.id.value,
            user_id=user_id.value,
            inviter_id=inviter_id.value,
        )

    def test_records_member_added_event(self, registry, group):
        registry.add_member(group, UserId.generate())

        events = group.collect_events()

        assert len(events) == 1
        assert isinstance(events[0], MemberAdded)

    def test_returns_existing_membership_without_insert(
        self, registry, group, mock_membership_repository
    ):
        existing = Membership.create(group.id, UserId.generate())
        mock_membership_repository.get.return_value = existing

        membership = registry.add_member(group, existing.user_id)

        assert membership is existing
        mock_membership_repository.add.assert_not_called()
        assert group.collect_events() == []

    def test_full_group_refuses_new_member(
        self, registry, group, mock_membership_repository, mock_probe
    ):
        mock_membership_repository.count_for_group.return_value = 5

        with pytest.raises(CapacityExceededError) as exc_info:
            registry.add_member(group, UserId.generate())

        assert exc_info.value.max_size == 5
        assert exc_info.value.member_count == 5
        mock_membership_repository.add.assert_not_called()
        mock_probe.capacity_exceeded.assert_called_once_with(
            group_id=group.id.value, max_size=5, member_count=5
        )

    def test_full_group_returns_existing_membership(
        self, registry, group, mock_membership_repository, mock_probe
    ):
        existing = Membership.create(group.id, UserId.generate())
        mock_membership_repository.get.return_value = existing
        mock_membership_repository.count_for_group.return_value = 5

        membership = registry.add_member(group, existing.user_id)

        assert membership is existing
        mock_membership_repository.add.assert_not_called()
        mock_probe.capacity_exceeded.assert_not_called()

    def test_group_below_capacity_accepts_member(
        self, registry, group, mock_membership_repository
    ):
        mock_membership_repository.count_for_group.return_value = 4

        registry.add_member(group, UserId.generate())

        mock_membership_repository.add.assert_called_once()

    def test_unlimited_group_never_counts(self, registry, mock_membership_repository):
        group = Group.create("Open")

        registry.add_member(group, UserId.generate())

        mock_membership_repository.count_for_group.assert_not_called()

    def test_subgroup_is_not_capacity_limited(
        self, registry, group, mock_membership_repository
    ):
        subgroup = Group.create("Design", parent=group, max_size=0)
        mock_membership_repository.count_for_group.return_value = 100

        registry.add_member(subgroup, UserId.generate())

        mock_membership_repository.add.assert_called_once()

    def test_propagates_duplicate_membership(
        self, registry, group, mock_membership_repository
    ):
        mock_membership_repository.add.side_effect = DuplicateMembershipError("dup")

        with pytest.raises(DuplicateMembershipError):
            registry.add_member(group, UserId.generate())


class TestAddMembers:
    def test_adds_in_order(self, registry, group):
        user_ids = [UserId.generate() for _ in range(3)]

        memberships = registry.add_members(group, user_ids)

        assert [m.user_id for m in memberships] == user_ids

    def test_stops_at_capacity(
        self, registry, group, mock_membership_repository, mock_probe
    ):
        mock_membership_repository.count_for_group.side_effect = [3, 4, 5]

        with pytest.raises(CapacityExceededError):
            registry.add_members(group, [UserId.generate() for _ in range(3)])

        assert mock_membership_repository.add.call_count == 2
        mock_probe.batch_add_stopped.assert_called_once_with(
            group_id=group.id.value, added_count=2, requested_count=3
        )


class TestAddAdmin:
    def test_creates_admin_membership(
        self, registry, group, mock_membership_repository, mock_probe
    ):
        user_id = UserId.generate()

        membership = registry.add_admin(group, user_id)

        assert membership.admin is True
        mock_membership_repository.add.assert_called_once()
        mock_membership_repository.save.assert_called_once_with(membership)
        mock_probe.admin_promoted.assert_called_once_with(
            group_id=group.id.value, user_id=user_id.value
        )

    def test_records_added_then_promoted(self, registry, group):
        registry.add_admin(group, UserId.generate())

        events = group.collect_events()

        assert [type(e) for e in events] == [MemberAdded, MemberPromotedToAdmin]

    def test_promotes_existing_member(self, registry, group, mock_membership_repository):
        existing = Membership.create(group.id, UserId.generate())
        mock_membership_repository.get.return_value = existing

        membership = registry.add_admin(group, existing.user_id)

        assert membership is existing
        assert existing.admin is True
        mock_membership_repository.add.assert_not_called()

    def test_is_idempotent_for_existing_admin(
        self, registry, group, mock_membership_repository, mock_probe
    ):
        existing = Membership.create(group.id, UserId.generate())
        existing.make_admin()
        mock_membership_repository.get.return_value = existing

        registry.add_admin(group, existing.user_id)

        mock_membership_repository.save.assert_not_called()
        mock_probe.admin_promoted.assert_not_called()

    def test_ignores_capacity(self, registry, group, mock_membership_repository):
        mock_membership_repository.count_for_group.return_value = 5

        membership = registry.add_admin(group, UserId.generate())

        assert membership.admin is True


class TestRemoveMember:
    def test_removes_existing_membership(
        self, registry, group, mock_membership_repository, mock_probe
    ):
        existing = Membership.create(group.id, UserId.generate())
        mock_membership_repository.get.return_value = existing
        mock_membership_repository.remove.return_value = True

        assert registry.remove_member(group, existing.user_id) is True

        mock_membership_repository.remove.assert_called_once_with(existing.id)
        assert isinstance(group.collect_events()[0], MemberRemoved)
        mock_probe.member_removed.assert_called_once()

    def test_absent_member_returns_false(
        self, registry, group, mock_membership_repository
    ):
        assert registry.remove_member(group, UserId.generate()) is False

        mock_membership_repository.remove.assert_not_called()


class TestRemainingInvitations:
    def test_subtracts_members_and_pending_invitations(
        self, registry, group, mock_membership_repository, mock_invitation_repository
    ):
        mock_membership_repository.count_for_group.return_value = 2
        mock_invitation_repository.count_pending.return_value = 1

        assert registry.remaining_invitations(group) == 2

    def test_may_be_negative(
        self, registry, group, mock_membership_repository, mock_invitation_repository
    ):
        mock_membership_repository.count_for_group.return_value = 5
        mock_invitation_repository.count_pending.return_value = 2

        assert registry.remaining_invitations(group) == -2

    def test_unlimited_group_raises(self, registry):
        with pytest.raises(InvalidArgumentError, match="no max_size"):
            registry.remaining_invitations(Group.create("Open"))


class TestEmailLookups:
    def test_member_with_email(self, registry, group, mock_membership_repository):
        mock_membership_repository.exists_with_email.return_value = True

        assert registry.has_member_with_email(group, "ann@example.com")
        mock_membership_repository.exists_with_email.assert_called_once_with(
            group.id, "ann@example.com"
        )

    def test_request_with_email(self, registry, group, mock_request_repository):
        mock_request_repository.exists_with_email.return_value = False

        assert not registry.has_request_with_email(group, "bob@example.com")

    def test_pending_requests(self, registry, group, mock_request_repository):
        mock_request_repository.list_pending.return_value = []

        assert registry.pending_requests(group) == []
        mock_request_repository.list_pending.assert_called_once_with(group.id)


class TestAdmins:
    def _admin(self, group: Group, user_id: UserId | None = None) -> Membership:
        membership = Membership.create(group.id, user_id or UserId.generate())
        membership.make_admin()
        return membership

    def test_admins_returns_users(
        self, registry, group, mock_membership_repository, mock_user_repository
    ):
        admin = self._admin(group)
        user = User(id=admin.user_id, email="ann@example.com")
        mock_membership_repository.list_admins.return_value = [admin]
        mock_user_repository.get_many.return_value = [user]

        assert registry.admins(group) == [user]
        mock_user_repository.get_many.assert_called_once_with([admin.user_id])

    def test_contact_person_is_lowest_user_id(
        self, registry, group, mock_membership_repository, mock_user_repository
    ):
        first = self._admin(group, UserId(value="01ARZ3NDEKTSV4RRFFQ69G5FAV"))
        second = self._admin(group, UserId(value="01BX5ZZKBKACTAV9WEVGEMMVRZ"))
        mock_membership_repository.list_admins.return_value = [second, first]
        user = User(id=first.user_id, email="first@example.com")
        mock_user_repository.get_by_id.return_value = user

        assert registry.contact_person(group) is user
        mock_user_repository.get_by_id.assert_called_once_with(first.user_id)

    def test_contact_person_none_without_admins(self, registry, group):
        assert registry.contact_person(group) is None

    def test_admin_email(
        self, registry, group, mock_membership_repository, mock_user_repository
    ):
        admin = self._admin(group)
        mock_membership_repository.list_admins.return_value = [admin]
        mock_user_repository.get_by_id.return_value = User(
            id=admin.user_id, email="ann@example.com"
        )

        assert registry.admin_email(group) == "ann@example.com"

    def test_admin_email_without_admins_raises(self, registry, group):
        with pytest.raises(NotFoundError, match="has no admin"):
            registry.admin_email(group)
