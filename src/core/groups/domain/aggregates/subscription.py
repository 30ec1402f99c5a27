"""Subscription value for the groups context."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from groups.domain.value_objects import GroupId


@dataclass(frozen=True)
class Subscription:
    """Billing subscription of a top-level group.

    Amounts are supplied by the billing collaborator; only presence and
    ``amount > 0`` matter to the group rules.
    """

    group_id: GroupId
    amount: Decimal
