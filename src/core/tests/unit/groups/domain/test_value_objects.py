"""Unit tests for groups value objects."""

import pytest

from groups.domain.value_objects import (
    DiscussionPrivacyOption,
    FieldError,
    GroupId,
    MembershipId,
    UserId,
    Visibility,
)


class TestIdentifiers:
    """Tests for ULID-backed identifiers."""

    def test_generate_creates_unique_ids(self):
        assert GroupId.generate() != GroupId.generate()

    def test_str_returns_value(self):
        group_id = GroupId.generate()

        assert str(group_id) == group_id.value

    def test_from_string_accepts_valid_ulid(self):
        value = UserId.generate().value

        assert UserId.from_string(value) == UserId(value=value)

    def test_from_string_rejects_invalid_value(self):
        with pytest.raises(ValueError, match="Invalid MembershipId"):
            MembershipId.from_string("not-a-ulid")

    def test_ids_are_immutable(self):
        group_id = GroupId.generate()

        with pytest.raises(AttributeError):
            group_id.value = "changed"  # type: ignore[misc]


class TestEnums:
    """Tests for the enumerated settings."""

    def test_visibility_values(self):
        assert {v.value for v in Visibility} == {"public", "parent_members", "members"}

    def test_privacy_option_accepts_raw_string(self):
        assert DiscussionPrivacyOption("private_only") is DiscussionPrivacyOption.PRIVATE_ONLY

    def test_privacy_option_rejects_unknown_string(self):
        with pytest.raises(ValueError):
            DiscussionPrivacyOption("secret")


class TestFieldError:
    def test_str_joins_field_and_message(self):
        assert str(FieldError("name", "can't be blank")) == "name: can't be blank"
