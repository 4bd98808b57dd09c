"""Tests for SubscriptionMatcher and the Protean-backed event store."""

from unittest.mock import MagicMock

import pytest
from dsub.event.store import DomainEventStore
from dsub.event.workflow_event import WorkflowEvent
from dsub.exceptions import StoreQueryFailure
from dsub.notify.projector import CanonicalEvent
from dsub.subscription.matcher import SubscriptionMatcher
from protean import current_domain


class TestSubscriptionMatcher:
    def test_returns_every_subscription_for_reference(self, store, add_subscription):
        add_subscription("sepsis")
        add_subscription("falls")
        add_subscription("stroke", broker_ref="urn:uuid:other")

        matched = SubscriptionMatcher(store).match("urn:uuid:abc")

        assert sorted(s.pathway for s in matched) == ["falls", "sepsis"]

    def test_no_subscriptions_is_an_empty_list(self, store):
        assert SubscriptionMatcher(store).match("urn:uuid:abc") == []

    def test_store_error_becomes_store_query_failure(self):
        store = MagicMock()
        store.select_subscriptions_by_ref.side_effect = RuntimeError("DB down")

        with pytest.raises(StoreQueryFailure, match="urn:uuid:abc") as exc:
            SubscriptionMatcher(store).match("urn:uuid:abc")

        assert isinstance(exc.value.__cause__, RuntimeError)


class TestDomainEventStore:
    def test_insert_event_persists_workflow_event(self, store):
        event_id = store.insert_event(
            CanonicalEvent(broker_ref="urn:uuid:abc", pathway="sepsis", nhs_id="9999999999", expression="14Day")
        )

        stored = current_domain.repository_for(WorkflowEvent).get(event_id)
        assert stored.pathway == "sepsis"
        assert stored.expression == "14Day"

    def test_insert_event_rejects_invalid_nhs_id(self, store):
        from protean.exceptions import ValidationError

        with pytest.raises(ValidationError):
            store.insert_event(CanonicalEvent(broker_ref="urn:uuid:abc", pathway="sepsis", nhs_id="123"))

    def test_select_subscriptions_by_ref(self, add_subscription):
        add_subscription("sepsis")
        assert [s.pathway for s in DomainEventStore().select_subscriptions_by_ref("urn:uuid:abc")] == ["sepsis"]
