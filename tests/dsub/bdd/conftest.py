"""Shared BDD fixtures and step definitions for notification intake."""

import pytest
from dsub.broker.templates.ack import ACK_ENVELOPE
from dsub.broker.templates.cancel import UNSUBSCRIBE_ACTION
from dsub.event.workflow_event import WorkflowEvent
from dsub.identity.fake_resolver import FakeIdentityResolver
from dsub.intake.intake import NotificationIntake
from protean import current_domain
from pytest_bdd import given, parsers, then

REGIONAL_OID = "2.16.840.1.113883.2.1.3.31.2.1.1"


@pytest.fixture()
def bdd_resolver():
    return FakeIdentityResolver()


@pytest.fixture()
def intake(config, store, bdd_resolver, sender):
    return NotificationIntake(config=config, store=store, resolver=bdd_resolver, sender=sender)


@pytest.fixture()
def outcome():
    """Container for the message and its reaction."""
    return {"reaction": None, "message": None}


def _recorded_events():
    return current_domain.repository_for(WorkflowEvent)._dao.query.all().items


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a subscription for pathway "{pathway}" with reference "{broker_ref}"'))
def stored_subscription(add_subscription, pathway, broker_ref):
    add_subscription(pathway, broker_ref=broker_ref)


@given(parsers.cfparse('the identity service resolves the patient to "{nhs_id}"'))
def identity_resolves(bdd_resolver, nhs_id):
    bdd_resolver.register("REG.1MWU5C92M2", REGIONAL_OID, nhs_id)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the broker is acknowledged")
def broker_acknowledged(outcome):
    assert outcome["reaction"] is not None
    assert outcome["reaction"].ack == ACK_ENVELOPE


@then(parsers.cfparse("{count:d} workflow events are recorded"))
def events_recorded(count):
    assert len(_recorded_events()) == count


@then(parsers.cfparse('every workflow event has NHS id "{nhs_id}"'))
def events_have_nhs_id(nhs_id):
    assert {e.nhs_id for e in _recorded_events()} == {nhs_id}


@then("no Cancel is sent")
def no_cancel(outcome, sender):
    assert outcome["reaction"].cancelled is False
    assert sender.sent_with_action(UNSUBSCRIBE_ACTION) == []


@then(parsers.cfparse('one Cancel is sent for reference "{broker_ref}"'))
def one_cancel(outcome, sender, broker_ref):
    cancels = sender.sent_with_action(UNSUBSCRIBE_ACTION)
    assert len(cancels) == 1
    assert broker_ref.encode() in cancels[0]["body"]
    assert outcome["reaction"].cancel_correlation_id.encode() in cancels[0]["body"]


@then("there is no reply")
def no_reply(outcome):
    assert outcome["reaction"] is None


@then("no network calls are made")
def no_network_calls(sender, bdd_resolver):
    assert sender.sent == []
    assert bdd_resolver.calls == []
