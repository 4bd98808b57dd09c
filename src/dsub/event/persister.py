"""Event persister — fan one canonical event out to every matched subscription.

Each subscription gets its own copy of the skeleton, stamped with that
subscription's pathway and topic. Inserts are independent: one failing
insert is logged and does not stop its siblings.
"""

from dataclasses import dataclass

import structlog

from dsub.event.store import EventStore
from dsub.exceptions import PersistenceFailure
from dsub.notify.projector import CanonicalEvent

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PersistOutcome:
    """Result of recording the event for one subscription."""

    pathway: str
    event_id: str | None = None
    error: str | None = None

    @property
    def persisted(self) -> bool:
        return self.event_id is not None


class EventPersister:
    def __init__(self, store: EventStore) -> None:
        self._store = store

    def persist_all(self, skeleton: CanonicalEvent, subscriptions, nhs_id: str) -> list[PersistOutcome]:
        return [self.persist(skeleton.for_subscription(subscription, nhs_id)) for subscription in subscriptions]

    def persist(self, event: CanonicalEvent) -> PersistOutcome:
        try:
            event_id = self._store.insert_event(event)
        except Exception as exc:
            failure = PersistenceFailure(f"unable to record event for pathway {event.pathway}: {exc}")
            logger.error(
                "Workflow event not recorded",
                broker_ref=event.broker_ref,
                pathway=event.pathway,
                error=str(failure),
            )
            return PersistOutcome(pathway=event.pathway, error=str(failure))

        logger.info(
            "Created workflow event",
            event_id=event_id,
            pathway=event.pathway,
            expression=event.expression,
            broker_ref=event.broker_ref,
        )
        return PersistOutcome(pathway=event.pathway, event_id=event_id)
