"""Outbound port for domain events.

The search indexer and notification collaborators subscribe through an
implementation of this protocol.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from groups.domain.events import DomainEvent


@runtime_checkable
class DomainEventPublisher(Protocol):
    """Receives domain events after the use case that raised them commits."""

    def publish(self, event: DomainEvent) -> None:
        """Deliver one event. Delivery failures must not be raised."""
        ...
