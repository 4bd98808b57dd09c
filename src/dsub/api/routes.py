"""FastAPI routes for the DSUB domain.

Thin adapters: the notify endpoint hands the raw body to NotificationIntake
and returns the broker reply; subscription endpoints translate requests into
commands or subscriber calls. No business logic lives here.
"""

from fastapi import APIRouter, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from dsub.api.schemas import (
    CancelResponse,
    CancelSubscriptionRequest,
    RegisterSubscriptionRequest,
    SubscriptionListResponse,
    SubscriptionResponse,
    WorkflowEventListResponse,
    WorkflowEventResponse,
)
from dsub.broker import get_sender
from dsub.broker.http_sender import SOAP_XML
from dsub.config import get_config
from dsub.domain import dsub
from dsub.event.workflow_event import WorkflowEvent
from dsub.exceptions import StoreQueryFailure, SubscriptionRejected, TransportFailure
from dsub.intake import build_intake
from dsub.subscription.registration import BrokerSubscriber, RegisterSubscription
from dsub.subscription.subscription import Subscription

router = APIRouter(prefix="/dsub", tags=["dsub"])


def _subscription_response(subscription) -> SubscriptionResponse:
    return SubscriptionResponse(
        subscription_id=str(subscription.id),
        broker_ref=subscription.broker_ref,
        pathway=subscription.pathway,
        topic=subscription.topic,
        expression=subscription.expression,
        created_at=str(subscription.created_at) if subscription.created_at else None,
    )


# ---------------------------------------------------------------------------
# Broker notifications
# ---------------------------------------------------------------------------
def _process_notification(body: bytes):
    # Runs on a worker thread; identity lookups and Cancel sends block
    with dsub.domain_context():
        return build_intake().process(body)


@router.post("/notify")
async def notify(request: Request) -> Response:
    """Receive a broker Notify message and reply with the protocol Ack."""
    body = await request.body()
    try:
        reaction = await run_in_threadpool(_process_notification, body)
    except StoreQueryFailure as exc:
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    if reaction is None:
        return Response(status_code=204)
    return Response(content=reaction.ack, media_type=SOAP_XML)


# ---------------------------------------------------------------------------
# Subscriptions
# ---------------------------------------------------------------------------
@router.post("/subscriptions", status_code=201, response_model=SubscriptionResponse)
async def register_subscription(body: RegisterSubscriptionRequest):
    """Subscribe at the broker on behalf of a pathway."""
    command = RegisterSubscription(pathway=body.pathway, expression=body.expression, topic=body.topic)
    try:
        subscription_id = current_domain.process(command, asynchronous=False)
    except (TransportFailure, SubscriptionRejected) as exc:
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    subscription = current_domain.repository_for(Subscription).get(subscription_id)
    return _subscription_response(subscription)


@router.get("/subscriptions", response_model=SubscriptionListResponse)
async def list_subscriptions(broker_ref: str | None = None, pathway: str | None = None) -> SubscriptionListResponse:
    """List stored subscriptions, optionally filtered by broker reference or pathway."""
    repo = current_domain.repository_for(Subscription)
    if broker_ref:
        results = repo.find_by_broker_ref(broker_ref)
    elif pathway:
        results = repo.find_by_pathway(pathway)
    else:
        results = repo.find_all()

    return SubscriptionListResponse(subscriptions=[_subscription_response(s) for s in results])


@router.post("/subscriptions/cancel", response_model=CancelResponse)
async def cancel_subscription(body: CancelSubscriptionRequest):
    """Ask the broker to stop delivering for a subscription reference."""
    subscriber = BrokerSubscriber(get_config(), get_sender())
    try:
        correlation_id = subscriber.unsubscribe(body.broker_ref)
    except TransportFailure as exc:
        return JSONResponse(status_code=502, content={"detail": str(exc)})
    return CancelResponse(broker_ref=body.broker_ref, correlation_id=correlation_id)


# ---------------------------------------------------------------------------
# Workflow events
# ---------------------------------------------------------------------------
@router.get("/events", response_model=WorkflowEventListResponse)
async def list_events(nhs_id: str) -> WorkflowEventListResponse:
    """List recorded workflow events for a patient."""
    results = current_domain.repository_for(WorkflowEvent).find_by_nhs_id(nhs_id)

    return WorkflowEventListResponse(
        events=[
            WorkflowEventResponse(
                event_id=str(e.id),
                broker_ref=e.broker_ref,
                pathway=e.pathway,
                topic=e.topic,
                expression=e.expression,
                nhs_id=e.nhs_id,
                xds_pid=e.xds_pid,
                xds_doc_entry_uid=e.xds_doc_entry_uid,
                repository_unique_id=e.repository_unique_id,
                authors=e.authors,
                org=e.org,
                role=e.role,
                creation_time=str(e.creation_time) if e.creation_time else None,
            )
            for e in results
        ]
    )
