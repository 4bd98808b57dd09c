"""Subscription aggregate — a pathway's standing interest in a document type.

A row is written once the broker has accepted a Subscribe request and
handed back its subscription reference. Several pathways may subscribe to
the same expression, so one broker reference can be shared by many rows.
Intake only ever reads these rows.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, String

from dsub.domain import dsub
from dsub.subscription.events import SubscriptionRegistered

# Slot the broker filters on when matching a document's type code
TOPIC_TYPE_CODE = "$XDSDocumentEntryTypeCode"


@dsub.aggregate
class Subscription:
    """A broker subscription registered against a workflow pathway."""

    broker_ref: String(required=True, max_length=500)
    pathway: String(required=True, max_length=100)
    topic: String(max_length=100, default=TOPIC_TYPE_CODE)
    expression: String(required=True, max_length=255)
    created_at: DateTime()

    @classmethod
    def register(cls, broker_ref, pathway, expression, topic=TOPIC_TYPE_CODE):
        """Record a broker-accepted subscription."""
        now = datetime.now(UTC)

        subscription = cls(
            broker_ref=broker_ref,
            pathway=pathway,
            topic=topic,
            expression=expression,
            created_at=now,
        )

        subscription.raise_(
            SubscriptionRegistered(
                subscription_id=str(subscription.id),
                broker_ref=broker_ref,
                pathway=pathway,
                topic=topic,
                expression=expression,
                registered_at=now,
            )
        )

        return subscription
