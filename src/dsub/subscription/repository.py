"""Repository for the Subscription aggregate."""

from dsub.domain import dsub
from dsub.subscription.subscription import Subscription


@dsub.repository(part_of=Subscription)
class SubscriptionRepository:
    def find_by_broker_ref(self, broker_ref: str) -> list[Subscription]:
        """All subscriptions whose broker reference equals ``broker_ref`` exactly."""
        return self._dao.query.filter(broker_ref=broker_ref).all().items

    def find_by_pathway(self, pathway: str) -> list[Subscription]:
        return self._dao.query.filter(pathway=pathway).all().items

    def find_all(self) -> list[Subscription]:
        return self._dao.query.all().items
