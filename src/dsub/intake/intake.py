"""Notification intake — from raw broker message to persisted workflow events.

    raw message -> MessageParser -> EventProjector -> SubscriptionMatcher
        -> (matches: NationalIdLookup once, EventPersister per match)
        -> ReactionDispatcher

Malformed or uncorrelated messages are dropped without a reply: the broker
redelivers or times out on its own, and a reply cannot be addressed without
a subscription reference. A failing subscription query is the only error
that reaches the caller, before any reply is produced.
"""

import structlog

from dsub.broker.port import SoapSender
from dsub.config import DsubConfig
from dsub.event.persister import EventPersister
from dsub.event.store import EventStore
from dsub.exceptions import CorrelationMiss, IdentityUnresolved, ParseError
from dsub.identity.lookup import NationalIdLookup
from dsub.identity.port import IdentityResolver
from dsub.intake.reaction import Reaction, ReactionDispatcher
from dsub.notify.envelope import NotifyEnvelope
from dsub.notify.parser import MessageParser
from dsub.notify.projector import EventProjector
from dsub.subscription.matcher import SubscriptionMatcher

logger = structlog.get_logger(__name__)


def _require_broker_ref(envelope: NotifyEnvelope) -> str:
    if not envelope.broker_ref:
        raise CorrelationMiss("no subscription ref found in notification message")
    return envelope.broker_ref


class NotificationIntake:
    def __init__(
        self,
        config: DsubConfig,
        store: EventStore,
        resolver: IdentityResolver,
        sender: SoapSender,
        parser: MessageParser | None = None,
        projector: EventProjector | None = None,
    ) -> None:
        self.config = config
        self.parser = parser or MessageParser()
        self.projector = projector or EventProjector()
        self.matcher = SubscriptionMatcher(store)
        self.lookup = NationalIdLookup(resolver, config.regional_oid)
        self.persister = EventPersister(store)
        self.dispatcher = ReactionDispatcher(config, sender)

    def process(self, message: str | bytes | None) -> Reaction | None:
        """Handle one broker Notify message.

        Returns the Reaction (Ack, plus Cancel details when nothing matched),
        or ``None`` when the message was dropped silently.

        Raises:
            StoreQueryFailure: subscriptions could not be looked up.
        """
        try:
            envelope = self.parser.parse(message)
            broker_ref = _require_broker_ref(envelope)
        except ParseError as exc:
            logger.warning("Dropping unparseable notification", error=str(exc))
            return None
        except CorrelationMiss as exc:
            logger.warning("Dropping uncorrelated notification", error=str(exc))
            return None

        with structlog.contextvars.bound_contextvars(broker_ref=broker_ref):
            logger.info("Processing DSUB broker notification")
            skeleton = self.projector.project(envelope)
            subscriptions = self.matcher.match(broker_ref)

            outcomes = []
            if subscriptions:
                try:
                    nhs_id = self.lookup.nhs_id_for(skeleton.xds_pid)
                except IdentityUnresolved as exc:
                    logger.warning("Skipping workflow events, patient identity unresolved", error=str(exc))
                else:
                    outcomes = self.persister.persist_all(skeleton, subscriptions, nhs_id)

            reaction = self.dispatcher.react(broker_ref, len(subscriptions), outcomes)
            logger.info(
                "Notification processed",
                matched=reaction.matched,
                persisted=reaction.persisted,
                cancelled=reaction.cancelled,
            )
            return reaction
