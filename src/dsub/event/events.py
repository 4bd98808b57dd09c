"""Domain events for the WorkflowEvent aggregate."""

from protean.fields import DateTime, Identifier, String

from dsub.domain import dsub


@dsub.event(part_of="WorkflowEvent")
class WorkflowEventRecorded:
    """A document publication was recorded against a pathway for a patient."""

    __version__ = 1

    workflow_event_id: Identifier(required=True)
    broker_ref: String(required=True, max_length=500)
    pathway: String(required=True, max_length=100)
    nhs_id: String(required=True, max_length=10)
    expression: String(max_length=255)
    xds_doc_entry_uid: String(max_length=255)
    recorded_at: DateTime(required=True)
