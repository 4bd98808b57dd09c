"""DSUB bounded context — document-publication notifications from an IHE DSUB broker.

Receives broker Notify messages, projects them into canonical workflow
events, correlates them with stored broker subscriptions and records one
WorkflowEvent per matched subscription once the patient's national
identifier has been resolved. Replies to the broker with an Ack and, when
the subscription reference is no longer known, a Cancel.
"""

from protean.domain import Domain

from dsub.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

dsub = Domain(name="dsub")
