"""Pydantic request/response models for the DSUB API.

API schemas are separate from Protean commands (anti-corruption pattern).
"""

from pydantic import BaseModel, Field

from dsub.subscription.subscription import TOPIC_TYPE_CODE


# ---------------------------------------------------------------------------
# Request Models
# ---------------------------------------------------------------------------
class RegisterSubscriptionRequest(BaseModel):
    pathway: str = Field(..., max_length=100, examples=["sepsis"])
    expression: str = Field(
        ...,
        max_length=255,
        examples=["14Day^^1.2.840.114350"],
        description="Document type code the broker filters on",
    )
    topic: str = Field(TOPIC_TYPE_CODE, max_length=100)


class CancelSubscriptionRequest(BaseModel):
    broker_ref: str = Field(..., min_length=1, examples=["urn:uuid:0f6cfe52-9d37-4e0d-a0a1-4c1f5a2f5d11"])


# ---------------------------------------------------------------------------
# Response Models
# ---------------------------------------------------------------------------
class SubscriptionResponse(BaseModel):
    subscription_id: str
    broker_ref: str
    pathway: str
    topic: str
    expression: str
    created_at: str | None = None


class SubscriptionListResponse(BaseModel):
    subscriptions: list[SubscriptionResponse]


class CancelResponse(BaseModel):
    broker_ref: str
    correlation_id: str


class WorkflowEventResponse(BaseModel):
    event_id: str
    broker_ref: str
    pathway: str
    topic: str | None = None
    expression: str | None = None
    nhs_id: str
    xds_pid: str | None = None
    xds_doc_entry_uid: str | None = None
    repository_unique_id: str | None = None
    authors: str | None = None
    org: str | None = None
    role: str | None = None
    creation_time: str | None = None


class WorkflowEventListResponse(BaseModel):
    events: list[WorkflowEventResponse]


class ErrorResponse(BaseModel):
    detail: str
