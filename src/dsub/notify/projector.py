"""Event projector — maps a decoded Notify envelope onto a CanonicalEvent.

Classification and external-identifier schemes are dispatched through
static tables. A scheme missing from a table is logged and skipped, so
new broker classification types never break intake.

Every canonical field is ``None`` until a matching classification, slot or
identifier supplies it. An empty string is a real (empty) value.
"""

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime

import structlog

from dsub.notify.codes import (
    AUTHOR_INSTITUTION,
    AUTHOR_PERSON,
    PID_AUTHORITY_SEPARATOR,
    REPOSITORY_UID,
    URN_AUTHOR,
    URN_CLASS_CODE,
    URN_CONF_CODE,
    URN_FACILITY_CODE,
    URN_FORMAT_CODE,
    URN_PRACTICE_CODE,
    URN_TYPE_CODE,
    URN_XDS_DOCUID,
    URN_XDS_PID,
)
from dsub.notify.envelope import Classification, ExternalIdentifier, NotifyEnvelope

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CanonicalEvent:
    """A document-publication event in the workflow service's vocabulary."""

    broker_ref: str
    class_code: str | None = None
    conf_code: str | None = None
    format_code: str | None = None
    facility_code: str | None = None
    practice_code: str | None = None
    expression: str | None = None
    authors: str | None = None
    org: str | None = None
    role: str | None = None
    xds_pid: str | None = None
    xds_doc_entry_uid: str | None = None
    repository_unique_id: str | None = None
    doc_name: str | None = None
    nhs_id: str | None = None
    pathway: str | None = None
    topic: str | None = None
    creation_time: datetime | None = None

    def for_subscription(self, subscription, nhs_id: str) -> "CanonicalEvent":
        """Return a copy stamped with one subscription's pathway/topic and the patient's NHS id."""
        return replace(self, pathway=subscription.pathway, topic=subscription.topic, nhs_id=nhs_id)


# ---------------------------------------------------------------------------
# HL7 value formatting
# ---------------------------------------------------------------------------
def pretty_author_person(xcn: str) -> str:
    """Render an XCN author (``id^family^given^middle^suffix^prefix``) as a display name."""
    if "^" not in xcn:
        return xcn.strip()

    parts = xcn.split("^") + [""] * 6
    family, given, middle, suffix, prefix = parts[1], parts[2], parts[3], parts[4], parts[5]
    name = " ".join(p for p in (prefix, given, middle, family, suffix) if p)
    return name or xcn.strip()


def pretty_author_institution(xon: str) -> str:
    """Keep only the organisation name from an XON value."""
    return xon.split("^", 1)[0].strip()


def normalize_xds_pid(value: str) -> str:
    """Drop the ``^^^&oid&ISO`` assigning-authority suffix from an XDS patient id."""
    return value.split(PID_AUTHORITY_SEPARATOR, 1)[0]


# ---------------------------------------------------------------------------
# Dispatch tables
# ---------------------------------------------------------------------------
@dataclass
class _Draft:
    values: dict = field(default_factory=dict)
    persons: list[str] = field(default_factory=list)
    institutions: list[str] = field(default_factory=list)


def _assign(field_name: str) -> Callable[[_Draft, Classification], None]:
    def setter(draft: _Draft, classification: Classification) -> None:
        if classification.value is not None:
            draft.values[field_name] = classification.value

    return setter


def _collect_author(draft: _Draft, classification: Classification) -> None:
    for slot in classification.slots:
        if slot.name == AUTHOR_PERSON:
            draft.persons.extend(pretty_author_person(v) for v in slot.values)
        elif slot.name == AUTHOR_INSTITUTION:
            draft.institutions.extend(pretty_author_institution(v) for v in slot.values)


def _set_xds_pid(draft: _Draft, identifier: ExternalIdentifier) -> None:
    draft.values["xds_pid"] = normalize_xds_pid(identifier.value)


def _set_doc_entry_uid(draft: _Draft, identifier: ExternalIdentifier) -> None:
    draft.values["xds_doc_entry_uid"] = identifier.value


CLASSIFICATION_SETTERS: dict[str, Callable[[_Draft, Classification], None]] = {
    URN_CLASS_CODE: _assign("class_code"),
    URN_CONF_CODE: _assign("conf_code"),
    URN_FORMAT_CODE: _assign("format_code"),
    URN_FACILITY_CODE: _assign("facility_code"),
    URN_PRACTICE_CODE: _assign("practice_code"),
    URN_TYPE_CODE: _assign("expression"),
    URN_AUTHOR: _collect_author,
}

IDENTIFIER_SETTERS: dict[str, Callable[[_Draft, ExternalIdentifier], None]] = {
    URN_XDS_PID: _set_xds_pid,
    URN_XDS_DOCUID: _set_doc_entry_uid,
}


class EventProjector:
    """Builds the shared CanonicalEvent skeleton for one notification."""

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or (lambda: datetime.now(UTC))

    def project(self, envelope: NotifyEnvelope) -> CanonicalEvent:
        document = envelope.document
        draft = _Draft()

        repository = document.slot(REPOSITORY_UID)
        if repository is not None and repository.first is not None:
            draft.values["repository_unique_id"] = repository.first

        for classification in document.classifications:
            setter = CLASSIFICATION_SETTERS.get(classification.scheme)
            if setter is None:
                logger.info("Unknown classification scheme, skipping", scheme=classification.scheme)
                continue
            setter(draft, classification)

        for identifier in document.external_identifiers:
            setter = IDENTIFIER_SETTERS.get(identifier.scheme)
            if setter is None:
                logger.debug("Ignoring external identifier", scheme=identifier.scheme)
                continue
            setter(draft, identifier)

        if draft.persons:
            draft.values["authors"] = ",".join(draft.persons)
        if draft.institutions:
            draft.values["org"] = ",".join(draft.institutions)

        # Role duplicates practice code for downstream consumers
        draft.values["role"] = draft.values.get("practice_code")

        event = CanonicalEvent(
            broker_ref=envelope.broker_ref,
            doc_name=document.name,
            creation_time=self._clock(),
            **draft.values,
        )

        logger.info(
            "Projected Notify message",
            broker_ref=event.broker_ref,
            expression=event.expression,
            xds_pid=event.xds_pid,
            xds_doc_entry_uid=event.xds_doc_entry_uid,
            repository_unique_id=event.repository_unique_id,
        )
        return event
