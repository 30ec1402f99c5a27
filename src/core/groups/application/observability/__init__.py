"""Domain-Oriented Observability for the groups application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from groups.application.observability.group_hierarchy_probe import (
    DefaultGroupHierarchyProbe,
    GroupHierarchyProbe,
)
from groups.application.observability.group_service_probe import (
    DefaultGroupServiceProbe,
    GroupServiceProbe,
)
from groups.application.observability.membership_registry_probe import (
    DefaultMembershipRegistryProbe,
    MembershipRegistryProbe,
)

__all__ = [
    "GroupHierarchyProbe",
    "DefaultGroupHierarchyProbe",
    "GroupServiceProbe",
    "DefaultGroupServiceProbe",
    "MembershipRegistryProbe",
    "DefaultMembershipRegistryProbe",
]
