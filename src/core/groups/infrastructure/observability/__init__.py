"""Domain-Oriented Observability for groups infrastructure.

Probes for repository operations following Domain-Oriented Observability patterns.
"""

from groups.infrastructure.observability.repository_probe import (
    DefaultGroupRepositoryProbe,
    DefaultMembershipRepositoryProbe,
    GroupRepositoryProbe,
    MembershipRepositoryProbe,
)

__all__ = [
    "GroupRepositoryProbe",
    "DefaultGroupRepositoryProbe",
    "MembershipRepositoryProbe",
    "DefaultMembershipRepositoryProbe",
]
