"""WorkflowEvent aggregate — one recorded document publication per pathway.

Created once per (notification x matched subscription) from the
notification's canonical event. Never updated or deleted afterwards.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, String, Text

from dsub.domain import dsub
from dsub.event.events import WorkflowEventRecorded

NHS_ID_LENGTH = 10


def is_valid_nhs_id(value) -> bool:
    return isinstance(value, str) and len(value) == NHS_ID_LENGTH


@dsub.aggregate
class WorkflowEvent:
    """A document-publication event attributed to a pathway and patient."""

    # Correlation
    broker_ref: String(required=True, max_length=500)
    pathway: String(required=True, max_length=100)
    topic: String(max_length=100)
    expression: String(max_length=255)

    # Patient
    nhs_id: String(required=True, max_length=10)
    xds_pid: String(max_length=255)

    # Document metadata
    doc_name: String(max_length=500)
    class_code: String(max_length=255)
    conf_code: String(max_length=255)
    format_code: String(max_length=255)
    facility_code: String(max_length=255)
    practice_code: String(max_length=255)
    xds_doc_entry_uid: String(max_length=255)
    repository_unique_id: String(max_length=255)

    # Authorship
    authors: Text()
    org: Text()
    role: String(max_length=255)

    # Timestamps
    creation_time: DateTime()
    recorded_at: DateTime()

    @classmethod
    def record(cls, event):
        """Create a WorkflowEvent from a subscription-stamped CanonicalEvent."""
        if not is_valid_nhs_id(event.nhs_id):
            raise ValidationError({"nhs_id": [f"NHS id must be exactly {NHS_ID_LENGTH} characters"]})
        if not event.pathway:
            raise ValidationError({"pathway": ["A workflow event must belong to a pathway"]})

        now = datetime.now(UTC)

        workflow_event = cls(
            broker_ref=event.broker_ref,
            pathway=event.pathway,
            topic=event.topic,
            expression=event.expression,
            nhs_id=event.nhs_id,
            xds_pid=event.xds_pid,
            doc_name=event.doc_name,
            class_code=event.class_code,
            conf_code=event.conf_code,
            format_code=event.format_code,
            facility_code=event.facility_code,
            practice_code=event.practice_code,
            xds_doc_entry_uid=event.xds_doc_entry_uid,
            repository_unique_id=event.repository_unique_id,
            authors=event.authors,
            org=event.org,
            role=event.role,
            creation_time=event.creation_time,
            recorded_at=now,
        )

        workflow_event.raise_(
            WorkflowEventRecorded(
                workflow_event_id=str(workflow_event.id),
                broker_ref=event.broker_ref,
                pathway=event.pathway,
                nhs_id=event.nhs_id,
                expression=event.expression,
                xds_doc_entry_uid=event.xds_doc_entry_uid,
                recorded_at=now,
            )
        )

        return workflow_event
