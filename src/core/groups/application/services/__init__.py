"""Application services for the groups bounded context."""

from groups.application.services.group_hierarchy import GroupHierarchy
from groups.application.services.group_service import GroupService
from groups.application.services.membership_registry import MembershipRegistry

__all__ = [
    "GroupHierarchy",
    "GroupService",
    "MembershipRegistry",
]
