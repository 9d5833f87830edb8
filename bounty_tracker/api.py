"""FastAPI endpoints for tickets, dispatch, review callbacks and bounty reports.

This module provides REST endpoints to:
- Read, create/edit, delete and list tickets
- Dispatch a ticket to the builder service
- Receive the builder's review callback
- Report bounty status counts
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .builder_client import BuilderClient
from .dispatcher import Dispatcher
from .errors import (
    BountyTrackerError,
    ErrorKind,
    ExternalServiceError,
    UnauthorizedError,
)
from .models import BountyStatusCount, Ticket, TicketResponse
from .review import process_ticket_review
from .status import get_filter_status_count
from .storage import Store, get_store
from .tickets import TicketService

logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.EMPTY_INPUT: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.EXTERNAL_SERVICE: 502,
    ErrorKind.INTERNAL: 500,
}


def status_for(error: BountyTrackerError) -> int:
    """HTTP status for a tracker error, chosen by its kind."""
    return _STATUS_BY_KIND[error.kind]


router = APIRouter()


# Dependencies
def get_request_store(request: Request) -> Store:
    return request.app.state.store


def get_dispatcher(request: Request) -> Dispatcher:
    return request.app.state.dispatcher


def require_pubkey(x_pubkey: Optional[str] = Header(None)) -> str:
    """Caller identity, verified upstream and forwarded by the gateway."""
    if not x_pubkey:
        logger.info("[ticket] no pubkey from auth")
        raise UnauthorizedError("Unauthorized")
    return x_pubkey


# Endpoints
@router.post("/bounties/ticket/send", response_model=TicketResponse)
async def post_ticket_to_builder(
    payload: Any = Body(None),
    pubkey: str = Depends(require_pubkey),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    """Send a ticket to the builder service.

    The builder works asynchronously and reports back through
    /bounties/ticket/review/. The local ticket is not changed here.
    """
    if not isinstance(payload, dict):
        return _ticket_response(
            400, message="Validation failed", errors=["Error parsing request body"]
        )

    try:
        result = await dispatcher.dispatch(payload)
    except ExternalServiceError as e:
        status_code = e.status_code if e.status_code and e.status_code >= 400 else 502
        return _ticket_response(
            status_code, message=e.body or e.message, errors=e.errors
        )
    except BountyTrackerError as e:
        return _ticket_response(status_for(e), message=e.message, errors=e.errors)

    return TicketResponse(
        success=True, ticket_id=result.ticket_id, message=result.message
    )


@router.post("/bounties/ticket/review/", response_model=Ticket)
def process_review(
    payload: Any = Body(None),
    store: Store = Depends(get_request_store),
):
    """Builder callback carrying the reviewed ticket description."""
    return process_ticket_review(store, payload)


@router.get(
    "/bounties/ticket/feature/{feature_uuid}/phase/{phase_uuid}",
    response_model=List[Ticket],
)
def get_tickets_by_phase(
    feature_uuid: str,
    phase_uuid: str,
    pubkey: str = Depends(require_pubkey),
    store: Store = Depends(get_request_store),
):
    """List the tickets of a feature phase."""
    return TicketService(store).list_by_phase(feature_uuid, phase_uuid)


@router.get("/bounties/ticket/{uuid}", response_model=Ticket)
def get_ticket(uuid: str, store: Store = Depends(get_request_store)):
    """Fetch a single ticket."""
    return TicketService(store).get_ticket(uuid)


@router.post("/bounties/ticket/{uuid}", response_model=Ticket)
def update_ticket(
    uuid: str,
    payload: Any = Body(None),
    pubkey: str = Depends(require_pubkey),
    store: Store = Depends(get_request_store),
):
    """Create a ticket or apply a full or partial edit."""
    if not isinstance(payload, dict):
        return JSONResponse(
            status_code=400, content={"error": "Error parsing request body"}
        )
    return TicketService(store).create_or_edit(uuid, payload)


@router.delete("/bounties/ticket/{uuid}")
def delete_ticket(
    uuid: str,
    pubkey: str = Depends(require_pubkey),
    store: Store = Depends(get_request_store),
):
    """Delete a ticket."""
    TicketService(store).delete_ticket(uuid)
    return {"message": "Ticket deleted successfully"}


@router.get("/bounties/filter/count", response_model=BountyStatusCount)
def get_bounty_status_count(store: Store = Depends(get_request_store)):
    """Counts of visible bounties per status bucket. Buckets overlap."""
    return get_filter_status_count(store)


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "bounty-tracker"}


# Error handling
def _ticket_response(
    status_code: int, message: str, errors: List[str]
) -> JSONResponse:
    body = TicketResponse(success=False, message=message, errors=errors)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def _handle_tracker_error(request: Request, exc: BountyTrackerError):
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=status_code, content={"error": exc.message})


async def _handle_request_validation(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400, content={"error": "Error parsing request body"}
    )


async def _handle_unexpected(request: Request, exc: Exception):
    logger.exception(f"{request.method} {request.url.path} failed unexpectedly")
    return JSONResponse(status_code=500, content={"error": "internal server error"})


def create_app(
    store: Optional[Store] = None,
    builder: Optional[BuilderClient] = None,
    host: Optional[str] = None,
) -> FastAPI:
    """Build the API application.

    Args:
        store: Store to serve from. When omitted one is opened from the
            environment at startup and closed at shutdown.
        builder: Builder client for dispatch. Defaults to the environment.
        host: Public host for the review webhook. Defaults to HOST.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = None
        if getattr(app.state, "store", None) is None:
            owned = get_store()
            app.state.store = owned
            app.state.dispatcher = Dispatcher(owned, builder=builder, host=host)
        try:
            yield
        finally:
            if owned is not None:
                owned.close()
                app.state.store = None

    app = FastAPI(
        title="Bounty Tracker API",
        description="Bounty status, connection codes and ticket dispatch",
        version="1.0.0",
        lifespan=lifespan,
    )

    if store is not None:
        app.state.store = store
        app.state.dispatcher = Dispatcher(store, builder=builder, host=host)

    app.include_router(router)
    app.add_exception_handler(BountyTrackerError, _handle_tracker_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(Exception, _handle_unexpected)
    return app
