"""Failure classes for notification intake and broker subscription.

Only ``StoreQueryFailure`` is allowed to escape ``NotificationIntake.process``.
Every other class is caught at the point where it occurs, logged, and turned
into the protocol-mandated silence or partial outcome.
"""


class DsubError(Exception):
    """Base class for all DSUB context failures."""


class ParseError(DsubError):
    """The inbound message is empty, has no Notify element, or is not well-formed XML."""


class EmptyMessageError(ParseError):
    """The inbound message body is empty."""


class NotifyElementNotFound(ParseError):
    """No Notify element could be located in the inbound message."""


class CorrelationMiss(DsubError):
    """A well-formed notification carried no subscription reference."""


class StoreQueryFailure(DsubError):
    """The subscription store could not be queried."""


class IdentityUnresolved(DsubError):
    """No valid national identifier could be resolved for the patient."""


class PersistenceFailure(DsubError):
    """A single workflow event could not be recorded."""


class TransportFailure(DsubError):
    """A SOAP request to the broker could not be completed."""


class SubscriptionRejected(DsubError):
    """The broker answered a Subscribe request without a subscription reference."""
