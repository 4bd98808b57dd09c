"""Subscription matcher — resolve a broker reference to stored subscriptions."""

import structlog

from dsub.event.store import EventStore
from dsub.exceptions import StoreQueryFailure

logger = structlog.get_logger(__name__)


class SubscriptionMatcher:
    def __init__(self, store: EventStore) -> None:
        self._store = store

    def match(self, broker_ref: str) -> list:
        """Return all subscriptions registered under ``broker_ref``.

        An empty list is a normal outcome (the broker still holds a reference
        we have dropped). A failing store query raises ``StoreQueryFailure``.
        """
        try:
            subscriptions = list(self._store.select_subscriptions_by_ref(broker_ref))
        except Exception as exc:
            logger.error("Subscription query failed", broker_ref=broker_ref, error=str(exc))
            raise StoreQueryFailure(f"unable to query subscriptions for {broker_ref}") from exc

        logger.info("Matched subscriptions", broker_ref=broker_ref, count=len(subscriptions))
        return subscriptions
