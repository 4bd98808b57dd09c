"""Event store port and its Protean-backed adapter.

Intake depends only on ``EventStore``: look up subscriptions by broker
reference and insert one workflow event. ``DomainEventStore`` satisfies
the contract with the context's own repositories; a remote event service
can be dropped in behind the same interface.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from protean.utils.globals import current_domain

from dsub.event.workflow_event import WorkflowEvent
from dsub.notify.projector import CanonicalEvent
from dsub.subscription.subscription import Subscription


class EventStore(ABC):
    """Abstract interface for the workflow event store."""

    @abstractmethod
    def select_subscriptions_by_ref(self, broker_ref: str) -> Sequence[Subscription]:
        """Return every stored subscription with exactly this broker reference."""
        ...

    @abstractmethod
    def insert_event(self, event: CanonicalEvent) -> str:
        """Persist one subscription-stamped event and return its id."""
        ...


class DomainEventStore(EventStore):
    """EventStore backed by the active Protean domain's repositories."""

    def select_subscriptions_by_ref(self, broker_ref: str) -> Sequence[Subscription]:
        return current_domain.repository_for(Subscription).find_by_broker_ref(broker_ref)

    def insert_event(self, event: CanonicalEvent) -> str:
        workflow_event = WorkflowEvent.record(event)
        current_domain.repository_for(WorkflowEvent).add(workflow_event)
        return str(workflow_event.id)
