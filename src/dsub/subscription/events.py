"""Domain events for the Subscription aggregate."""

from protean.fields import DateTime, Identifier, String

from dsub.domain import dsub


@dsub.event(part_of="Subscription")
class SubscriptionRegistered:
    """The broker accepted a Subscribe request and the reference was stored."""

    __version__ = 1

    subscription_id: Identifier(required=True)
    broker_ref: String(required=True, max_length=500)
    pathway: String(required=True, max_length=100)
    topic: String(required=True, max_length=100)
    expression: String(required=True, max_length=255)
    registered_at: DateTime(required=True)
