"""Unit tests for groups repository probes."""

from unittest.mock import MagicMock

from groups.infrastructure.observability import (
    DefaultGroupRepositoryProbe,
    DefaultMembershipRepositoryProbe,
)


class TestDefaultGroupRepositoryProbe:
    def test_logs_group_saved_at_info_level(self):
        mock_logger = MagicMock()
        probe = DefaultGroupRepositoryProbe(logger=mock_logger)

        probe.group_saved("g-1", is_new=True)

        assert mock_logger.info.call_args[0][0] == "group_saved"
        assert mock_logger.info.call_args[1] == {"group_id": "g-1", "is_new": True}

    def test_logs_group_not_found_at_debug_level(self):
        mock_logger = MagicMock()
        probe = DefaultGroupRepositoryProbe(logger=mock_logger)

        probe.group_not_found("g-1")

        assert mock_logger.debug.call_args[0][0] == "group_not_found"


class TestDefaultMembershipRepositoryProbe:
    def test_logs_duplicate_membership_at_warning_level(self):
        mock_logger = MagicMock()
        probe = DefaultMembershipRepositoryProbe(logger=mock_logger)

        probe.duplicate_membership("g-1", "u-1")

        mock_logger.warning.assert_called_once_with(
            "duplicate_membership", group_id="g-1", user_id="u-1"
        )

    def test_logs_memberships_archived_with_count(self):
        mock_logger = MagicMock()
        probe = DefaultMembershipRepositoryProbe(logger=mock_logger)

        probe.memberships_archived("g-1", 4)

        mock_logger.info.assert_called_once_with(
            "memberships_archived", group_id="g-1", count=4
        )

    def test_logs_row_changes_at_debug_level(self):
        mock_logger = MagicMock()
        probe = DefaultMembershipRepositoryProbe(logger=mock_logger)

        probe.membership_added("g-1", "u-1")
        probe.membership_removed("g-1", "u-1")

        names = [c[0][0] for c in mock_logger.debug.call_args_list]
        assert names == ["membership_added", "membership_removed"]
