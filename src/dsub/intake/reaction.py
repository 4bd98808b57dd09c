"""Reaction dispatcher — the reply the broker protocol requires for a Notify.

Every correlated notification is acknowledged. When no stored subscription
recognises the reference, a Cancel (Unsubscribe) is also sent so the broker
stops delivering for it.
"""

from dataclasses import dataclass
from uuid import uuid4

import structlog

from dsub.broker.port import SoapSender
from dsub.broker.templates import get_template
from dsub.config import DsubConfig
from dsub.event.persister import PersistOutcome
from dsub.exceptions import TransportFailure

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Reaction:
    """What was done for one correlated notification."""

    broker_ref: str
    ack: bytes
    matched: int = 0
    cancel_correlation_id: str | None = None
    cancel_sent: bool = False
    outcomes: tuple[PersistOutcome, ...] = ()

    @property
    def cancelled(self) -> bool:
        return self.cancel_correlation_id is not None

    @property
    def persisted(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.persisted)


class ReactionDispatcher:
    def __init__(self, config: DsubConfig, sender: SoapSender) -> None:
        self.config = config
        self.sender = sender

    def react(self, broker_ref: str, matched: int, outcomes=()) -> Reaction:
        ack = get_template("ack").render()

        if matched:
            return Reaction(broker_ref=broker_ref, ack=ack, matched=matched, outcomes=tuple(outcomes))

        logger.info("No subscriptions found, sending Cancel request to broker", broker_ref=broker_ref)
        correlation_id = str(uuid4())
        return Reaction(
            broker_ref=broker_ref,
            ack=ack,
            matched=0,
            cancel_correlation_id=correlation_id,
            cancel_sent=self._send_cancel(broker_ref, correlation_id),
        )

    def _send_cancel(self, broker_ref: str, correlation_id: str) -> bool:
        template = get_template("cancel")
        body = template.render({"broker_ref": broker_ref, "correlation_id": correlation_id})
        try:
            self.sender.send(self.config.broker_url, template.action, body, self.config.soap_timeout)
        except TransportFailure as exc:
            logger.error(
                "Cancel request failed",
                broker_ref=broker_ref,
                correlation_id=correlation_id,
                error=str(exc),
            )
            return False
        return True
