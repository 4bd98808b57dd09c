"""Broker subscription — Subscribe/Unsubscribe requests and the RegisterSubscription command.

A pathway subscribes to a document type expression. The broker answers
with a subscription reference, which becomes the BrokerRef that every later
Notify for this subscription is correlated by.
"""

from uuid import uuid4

import structlog
from protean.fields import String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from dsub.broker import get_sender
from dsub.broker.port import SoapSender
from dsub.broker.responses import subscription_reference
from dsub.broker.templates import get_template
from dsub.config import DsubConfig, get_config
from dsub.domain import dsub
from dsub.exceptions import ParseError, SubscriptionRejected, TransportFailure
from dsub.subscription.subscription import TOPIC_TYPE_CODE, Subscription

logger = structlog.get_logger(__name__)


class BrokerSubscriber:
    """Sends Subscribe and Unsubscribe requests to the configured broker."""

    def __init__(self, config: DsubConfig, sender: SoapSender) -> None:
        self.config = config
        self.sender = sender

    def subscribe(self, pathway: str, expression: str, topic: str = TOPIC_TYPE_CODE) -> Subscription:
        """Subscribe at the broker and store the returned reference.

        Raises:
            TransportFailure: the broker could not be reached.
            SubscriptionRejected: the broker answered without a reference.
        """
        template = get_template("subscribe")
        body = template.render(
            {
                "broker_url": self.config.broker_url,
                "consumer_url": self.config.consumer_url,
                "topic": topic,
                "expression": expression,
                "correlation_id": str(uuid4()),
            }
        )

        logger.info("Sending Subscribe request", pathway=pathway, expression=expression, topic=topic)
        try:
            response = self.sender.send(self.config.broker_url, template.action, body, self.config.soap_timeout)
        except TransportFailure as exc:
            logger.error("Subscribe request failed", pathway=pathway, expression=expression, error=str(exc))
            raise

        try:
            broker_ref = subscription_reference(response)
        except ParseError as exc:
            raise SubscriptionRejected(f"unreadable subscribe response for {expression}") from exc

        if not broker_ref:
            logger.warning("Broker returned no subscription reference", pathway=pathway, expression=expression)
            raise SubscriptionRejected(f"broker returned no subscription reference for {expression}")

        logger.info("Broker accepted subscription", broker_ref=broker_ref, pathway=pathway)

        subscription = Subscription.register(
            broker_ref=broker_ref,
            pathway=pathway,
            expression=expression,
            topic=topic,
        )
        current_domain.repository_for(Subscription).add(subscription)
        return subscription

    def unsubscribe(self, broker_ref: str) -> str:
        """Send a Cancel for ``broker_ref`` and return its correlation id."""
        correlation_id = str(uuid4())
        template = get_template("cancel")
        body = template.render({"broker_ref": broker_ref, "correlation_id": correlation_id})

        logger.info("Sending Cancel request", broker_ref=broker_ref, correlation_id=correlation_id)
        self.sender.send(self.config.broker_url, template.action, body, self.config.soap_timeout)
        return correlation_id


@dsub.command(part_of="Subscription")
class RegisterSubscription:
    """Request a broker subscription for a pathway."""

    pathway: String(required=True, max_length=100)
    expression: String(required=True, max_length=255)
    topic: String(max_length=100, default=TOPIC_TYPE_CODE)


@dsub.command_handler(part_of=Subscription)
class RegisterSubscriptionHandler:
    @handle(RegisterSubscription)
    def register_subscription(self, command: RegisterSubscription):
        subscriber = BrokerSubscriber(get_config(), get_sender())
        subscription = subscriber.subscribe(
            pathway=command.pathway,
            expression=command.expression,
            topic=command.topic or TOPIC_TYPE_CODE,
        )
        return str(subscription.id)
