"""Tests for the Subscription aggregate and its repository finders."""

from dsub.subscription.events import SubscriptionRegistered
from dsub.subscription.subscription import TOPIC_TYPE_CODE, Subscription
from protean import current_domain


def _register(**overrides):
    defaults = {
        "broker_ref": "urn:uuid:abc",
        "pathway": "sepsis",
        "expression": "14Day^^1.2.840.114350",
    }
    defaults.update(overrides)
    return Subscription.register(**defaults)


class TestSubscriptionRegistration:
    def test_register_sets_fields(self):
        subscription = _register()
        assert subscription.id is not None
        assert subscription.broker_ref == "urn:uuid:abc"
        assert subscription.pathway == "sepsis"
        assert subscription.expression == "14Day^^1.2.840.114350"

    def test_topic_defaults_to_type_code_slot(self):
        assert _register().topic == TOPIC_TYPE_CODE

    def test_custom_topic(self):
        assert _register(topic="$XDSDocumentEntryClassCode").topic == "$XDSDocumentEntryClassCode"

    def test_topic_may_be_omitted_on_construction(self):
        subscription = Subscription(broker_ref="urn:uuid:abc", pathway="sepsis", expression="14Day^^1.2.840.114350")
        assert subscription.topic == TOPIC_TYPE_CODE

    def test_register_sets_created_at(self):
        assert _register().created_at is not None

    def test_register_raises_event(self):
        subscription = _register()
        assert len(subscription._events) == 1
        event = subscription._events[0]
        assert isinstance(event, SubscriptionRegistered)
        assert event.subscription_id == str(subscription.id)
        assert event.broker_ref == "urn:uuid:abc"
        assert event.pathway == "sepsis"


class TestSubscriptionRepository:
    def test_find_by_broker_ref_returns_every_row(self):
        repo = current_domain.repository_for(Subscription)
        repo.add(_register(pathway="sepsis"))
        repo.add(_register(pathway="falls"))
        repo.add(_register(broker_ref="urn:uuid:other", pathway="stroke"))

        found = repo.find_by_broker_ref("urn:uuid:abc")

        assert sorted(s.pathway for s in found) == ["falls", "sepsis"]

    def test_find_by_broker_ref_is_exact(self):
        repo = current_domain.repository_for(Subscription)
        repo.add(_register(broker_ref="urn:uuid:abc"))

        assert repo.find_by_broker_ref("urn:uuid:ab") == []
        assert repo.find_by_broker_ref("URN:UUID:ABC") == []

    def test_find_by_pathway(self):
        repo = current_domain.repository_for(Subscription)
        repo.add(_register(pathway="sepsis"))
        repo.add(_register(pathway="falls", broker_ref="urn:uuid:def"))

        found = repo.find_by_pathway("falls")

        assert len(found) == 1
        assert found[0].broker_ref == "urn:uuid:def"
