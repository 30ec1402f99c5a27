"""Unit tests for membership-side entities and domain exceptions."""

from datetime import UTC, datetime

import pytest

from groups.domain.aggregates import Membership, MembershipRequest, User
from groups.domain.exceptions import CapacityExceededError, GroupValidationError
from groups.domain.value_objects import (
    FieldError,
    GroupId,
    MembershipRequestId,
    UserId,
)


class TestMembership:
    def test_create_is_plain_member(self):
        group_id, user_id = GroupId.generate(), UserId.generate()

        membership = Membership.create(group_id=group_id, user_id=user_id)

        assert membership.group_id == group_id
        assert membership.user_id == user_id
        assert membership.admin is False
        assert membership.inviter_id is None
        assert not membership.is_archived()

    def test_make_admin_reports_change(self):
        membership = Membership.create(GroupId.generate(), UserId.generate())

        assert membership.make_admin() is True
        assert membership.make_admin() is False
        assert membership.admin is True

    def test_archive(self):
        membership = Membership.create(GroupId.generate(), UserId.generate())
        at = datetime(2024, 5, 1, tzinfo=UTC)

        membership.archive(at)

        assert membership.archived_at == at
        assert membership.is_archived()


class TestMembershipRequest:
    def test_requires_user_or_email(self):
        with pytest.raises(ValueError, match="user_id or an email"):
            MembershipRequest(id=MembershipRequestId.generate(), group_id=GroupId.generate())

    def test_email_request_is_pending_until_answered(self):
        request = MembershipRequest(
            id=MembershipRequestId.generate(),
            group_id=GroupId.generate(),
            email="ann@example.com",
        )

        assert request.is_pending()

        request.response = "approved"

        assert not request.is_pending()


class TestUser:
    def test_equality_is_by_id(self):
        user_id = UserId.generate()

        assert User(id=user_id, email="a@example.com") == User(
            id=user_id, email="b@example.com"
        )
        assert len({User(id=user_id, email="a@example.com"), User(id=user_id, email="b@example.com")}) == 1


class TestExceptions:
    def test_validation_error_requires_errors(self):
        with pytest.raises(ValueError):
            GroupValidationError([])

    def test_validation_error_message_joins_errors(self):
        error = GroupValidationError(
            [FieldError("name", "can't be blank"), FieldError("max_size", "must not be negative")]
        )

        assert str(error) == "name: can't be blank; max_size: must not be negative"
        assert error.fields() == {"name", "max_size"}

    def test_capacity_exceeded_carries_numbers(self):
        error = CapacityExceededError(group_id="g1", max_size=5, member_count=5)

        assert error.max_size == 5
        assert error.member_count == 5
        assert "g1" in str(error)
