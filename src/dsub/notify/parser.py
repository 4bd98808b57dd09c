"""Notify message parser — locate the wsnt:Notify element and decode it.

Brokers wrap the Notify element in differing SOAP/vendor envelopes, so the
element is found by local tag name at any depth rather than by validating
the whole document. When the outer body is not well-formed XML (multipart
bodies, stray preamble), the element is cut out of the raw text instead.
"""

import re
import xml.etree.ElementTree as ET

import structlog

from dsub.exceptions import EmptyMessageError, NotifyElementNotFound, ParseError
from dsub.notify.codes import NOTIFY_ELEMENT
from dsub.notify.envelope import (
    Classification,
    DocumentEntry,
    ExternalIdentifier,
    NotifyEnvelope,
    Slot,
)

logger = structlog.get_logger(__name__)

_NOTIFY_OPEN = re.compile(r"<(?P<tag>(?:[\w.-]+:)?" + NOTIFY_ELEMENT + r")(?=[\s>/])")
_XMLNS_DECLARATION = re.compile(r"""\bxmlns(?::[\w.-]+)?\s*=\s*(?:"[^"]*"|'[^']*')""")


def _local(tag) -> str:
    # Comments and processing instructions have callable tags
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element | None, name: str) -> ET.Element | None:
    if element is None:
        return None
    for child in element:
        if _local(child.tag) == name:
            return child
    return None


def _children(element: ET.Element | None, name: str) -> list[ET.Element]:
    if element is None:
        return []
    return [child for child in element if _local(child.tag) == name]


def _path(element: ET.Element | None, *names: str) -> ET.Element | None:
    for name in names:
        element = _child(element, name)
    return element


def _text(element: ET.Element | None) -> str:
    if element is None or element.text is None:
        return ""
    return element.text.strip()


def _declared_name(declaration: str) -> str:
    return declaration.split("=", 1)[0].strip()


def _inherit_namespaces(fragment: str, tag: str, enclosing: str) -> str:
    """Copy namespace declarations from the text before the element onto its start tag.

    A cut-out element loses the prefixes its ancestors declared. Later
    declarations in ``enclosing`` win, as they would for nested elements.
    """
    inherited = {_declared_name(d): d for d in _XMLNS_DECLARATION.findall(enclosing)}
    if not inherited:
        return fragment

    head = fragment[: fragment.find(">")]
    own = {_declared_name(d) for d in _XMLNS_DECLARATION.findall(head)}
    missing = [declaration for name, declaration in inherited.items() if name not in own]
    if not missing:
        return fragment

    insert_at = len(tag) + 1
    return fragment[:insert_at] + " " + " ".join(missing) + fragment[insert_at:]


def _localized_value(element: ET.Element) -> str | None:
    localized = _path(element, "Name", "LocalizedString")
    if localized is None:
        return None
    return localized.get("value")


class MessageParser:
    """Turns a raw broker message into a ``NotifyEnvelope``."""

    def parse(self, message: str | bytes | None) -> NotifyEnvelope:
        """Locate and decode the Notify element; raises ``ParseError``."""
        element = self.locate(message)
        envelope = self.decode(element)
        logger.debug(
            "Decoded Notify element",
            broker_ref=envelope.broker_ref,
            classifications=len(envelope.document.classifications),
            external_identifiers=len(envelope.document.external_identifiers),
        )
        return envelope

    def locate(self, message: str | bytes | None) -> ET.Element:
        """Find the Notify element anywhere in ``message``."""
        if message is None or not message.strip():
            raise EmptyMessageError("message is empty")

        try:
            root = ET.fromstring(message)
        except ET.ParseError:
            logger.debug("Message is not well-formed XML, searching raw text for Notify element")
            return self._locate_in_text(message)

        for element in root.iter():
            if _local(element.tag) == NOTIFY_ELEMENT:
                return element

        raise NotifyElementNotFound("unable to locate notify element in received message")

    def _locate_in_text(self, message: str | bytes) -> ET.Element:
        text = message.decode("utf-8", errors="replace") if isinstance(message, bytes) else message

        match = _NOTIFY_OPEN.search(text)
        if match is None:
            raise NotifyElementNotFound("unable to locate notify element in received message")

        closing = f"</{match.group('tag')}>"
        end = text.find(closing, match.start())
        if end < 0:
            raise ParseError(f"notify element is not terminated, expected {closing}")

        fragment = _inherit_namespaces(
            text[match.start() : end + len(closing)],
            match.group("tag"),
            text[: match.start()],
        )
        try:
            return ET.fromstring(fragment)
        except ET.ParseError as exc:
            raise ParseError(f"notify element is not well-formed: {exc}") from exc

    def decode(self, element: ET.Element) -> NotifyEnvelope:
        """Decode a located Notify element."""
        if _local(element.tag) != NOTIFY_ELEMENT:
            raise ParseError(f"expected {NOTIFY_ELEMENT} element, got {_local(element.tag)!r}")

        notification = _child(element, "NotificationMessage")
        topic = _child(notification, "Topic")
        extrinsic = _path(
            notification,
            "Message",
            "SubmitObjectsRequest",
            "RegistryObjectList",
            "ExtrinsicObject",
        )

        return NotifyEnvelope(
            broker_ref=_text(_path(notification, "SubscriptionReference", "Address")),
            producer_ref=_text(_path(notification, "ProducerReference", "Address")),
            topic=_text(topic),
            dialect=topic.get("Dialect", "") if topic is not None else "",
            document=self._decode_document(extrinsic),
        )

    def _decode_document(self, extrinsic: ET.Element | None) -> DocumentEntry:
        if extrinsic is None:
            return DocumentEntry()

        return DocumentEntry(
            entry_id=extrinsic.get("id"),
            mime_type=extrinsic.get("mimeType"),
            name=_localized_value(extrinsic),
            slots=self._decode_slots(extrinsic),
            classifications=tuple(
                Classification(
                    scheme=classification.get("classificationScheme", ""),
                    value=_localized_value(classification),
                    node_representation=classification.get("nodeRepresentation"),
                    slots=self._decode_slots(classification),
                )
                for classification in _children(extrinsic, "Classification")
            ),
            external_identifiers=tuple(
                self._decode_external_identifier(identifier)
                for identifier in _children(extrinsic, "ExternalIdentifier")
            ),
        )

    def _decode_slots(self, parent: ET.Element) -> tuple[Slot, ...]:
        slots = []
        for slot in _children(parent, "Slot"):
            name = slot.get("name", "")
            values = tuple(_text(value) for value in _children(_child(slot, "ValueList"), "Value"))
            slots.append(Slot(name=name, values=values))
        return tuple(slots)

    def _decode_external_identifier(self, identifier: ET.Element) -> ExternalIdentifier:
        # Unnamed slots and unschemed identifiers decode empty and are skipped downstream
        return ExternalIdentifier(scheme=identifier.get("identificationScheme", ""), value=identifier.get("value", ""))
