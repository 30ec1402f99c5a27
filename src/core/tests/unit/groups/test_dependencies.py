"""Unit tests for the groups composition module."""

from unittest.mock import MagicMock

from groups.application.services import GroupService
from groups.dependencies import get_field_limits, get_group_service
from groups.domain.aggregates import GroupFieldLimits
from infrastructure.settings import GroupRuleSettings


class TestGetFieldLimits:
    def test_copies_lengths_from_settings(self):
        settings = GroupRuleSettings(name_max_length=80, description_max_length=500)

        assert get_field_limits(settings) == GroupFieldLimits(
            name_max_length=80, description_max_length=500
        )


class TestGetGroupService:
    def test_builds_service_bound_to_session(self):
        session = MagicMock()
        settings = GroupRuleSettings(default_max_size=50)

        service = get_group_service(session, settings=settings)

        assert isinstance(service, GroupService)
        assert service._session is session
        assert service._default_max_size == 50
        assert service._limits == GroupFieldLimits()

    def test_passes_publisher_through(self):
        publisher = MagicMock()

        service = get_group_service(
            MagicMock(), settings=GroupRuleSettings(), publisher=publisher
        )

        assert service._publisher is publisher
