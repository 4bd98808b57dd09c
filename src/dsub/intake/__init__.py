"""Notification intake composition root for the HTTP layer."""

from dsub.broker import get_sender
from dsub.config import get_config
from dsub.event.store import DomainEventStore
from dsub.identity import get_resolver
from dsub.intake.intake import NotificationIntake


def build_intake() -> NotificationIntake:
    """Assemble an intake from the active config, resolver and sender."""
    return NotificationIntake(
        config=get_config(),
        store=DomainEventStore(),
        resolver=get_resolver(),
        sender=get_sender(),
    )
