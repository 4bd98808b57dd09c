"""Structured form of a broker Notify message.

These are plain frozen value types produced by the parser; nothing here
knows about classification schemes or canonical fields.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Slot:
    """A named rim:Slot with its ordered value list."""

    name: str
    values: tuple[str, ...] = ()

    @property
    def first(self) -> str | None:
        return self.values[0] if self.values else None


@dataclass(frozen=True)
class Classification:
    """A rim:Classification on the document entry.

    ``value`` is the localized display name; author classifications carry
    their multi-valued sub-fields in ``slots`` instead.
    """

    scheme: str
    value: str | None = None
    node_representation: str | None = None
    slots: tuple[Slot, ...] = ()


@dataclass(frozen=True)
class ExternalIdentifier:
    scheme: str
    value: str


@dataclass(frozen=True)
class DocumentEntry:
    """The ExtrinsicObject embedded in the Notify message."""

    entry_id: str | None = None
    mime_type: str | None = None
    name: str | None = None
    slots: tuple[Slot, ...] = ()
    classifications: tuple[Classification, ...] = ()
    external_identifiers: tuple[ExternalIdentifier, ...] = ()

    def slot(self, name: str) -> Slot | None:
        """Return the first slot called ``name``, if any."""
        for slot in self.slots:
            if slot.name == name:
                return slot
        return None


@dataclass(frozen=True)
class NotifyEnvelope:
    """A decoded wsnt:Notify element."""

    broker_ref: str = ""
    producer_ref: str = ""
    topic: str = ""
    dialect: str = ""
    document: DocumentEntry = field(default_factory=DocumentEntry)
