"""DSUB FastAPI application.

Receives broker Notify messages and manages broker subscriptions over HTTP.
Each request under the DSUB prefix runs inside the dsub domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"       → in-memory database
#   - "production" → SQLite database (run `python src/manage.py setup-db` first)
import structlog
from dsub.broker import get_sender
from dsub.domain import dsub  # noqa: E402
from dsub.identity import get_resolver
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)

dsub.init()

# SOAP_SENDER / IDENTITY_RESOLVER pick the adapters; production defaults to the real ones
logger.info(
    "Collaborator adapters selected",
    sender=type(get_sender()).__name__,
    resolver=type(get_resolver()).__name__,
)

_DOMAIN_PREFIX = "/dsub"


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="DSUB Notification Intake",
    description="Document subscription consumer — broker notifications to workflow events",
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the dsub domain context for DSUB requests."""
    if request.url.path.startswith(_DOMAIN_PREFIX):
        with dsub.domain_context():
            response = await call_next(request)
        return response
    # Health check, docs
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from dsub.api import router as dsub_router  # noqa: E402

app.include_router(dsub_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": {"name": dsub.name}})
