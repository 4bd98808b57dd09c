"""Repository for the WorkflowEvent aggregate."""

from dsub.domain import dsub
from dsub.event.workflow_event import WorkflowEvent


@dsub.repository(part_of=WorkflowEvent)
class WorkflowEventRepository:
    def find_by_nhs_id(self, nhs_id: str) -> list[WorkflowEvent]:
        return self._dao.query.filter(nhs_id=nhs_id).all().items

    def find_by_broker_ref(self, broker_ref: str) -> list[WorkflowEvent]:
        return self._dao.query.filter(broker_ref=broker_ref).all().items
