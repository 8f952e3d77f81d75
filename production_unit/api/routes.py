import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST
from pydantic import ValidationError

from ..register import EventStore, Malformed, NotFound, ProductionEvent, RegisterError
from .schemas import ProductionStepPayload

logger = logging.getLogger("ReportingAPI")

router = APIRouter()

# ASCII digits only; int() alone also takes whitespace, "1_0" and other scripts
_DEVICE_ID = re.compile(r"[+-]?[0-9]+")


def get_store(request: Request) -> EventStore:
    """The store injected into app.state at startup."""
    return request.app.state.store


def register_error_handler(request: Request, exc: RegisterError) -> PlainTextResponse:
    logger.warning(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    return PlainTextResponse(exc.message, status_code=exc.status_code)


# --- Production Steps ---

@router.get("/productionSteps")
def list_production_steps(store: EventStore = Depends(get_store)):
    """Returns all production steps in insertion order."""
    return [event.to_dict() for event in store.list_events()]


@router.post("/productionSteps", status_code=201)
async def add_production_step(request: Request, store: EventStore = Depends(get_store)):
    raw = await request.body()
    try:
        payload = ProductionStepPayload.model_validate_json(raw)
    except ValidationError:
        raise Malformed("Invalid JSON") from None

    event = ProductionEvent.from_fields(
        payload.device_id,
        payload.timestamp,
        payload.status,
        payload.operator,
    )
    # Store lock is a threading.Lock, keep it off the event loop
    stored = await run_in_threadpool(store.insert, event)

    return JSONResponse(
        status_code=201,
        content={"message": "Product added successfully", "product": stored.to_dict()},
    )


@router.delete("/productionSteps")
def delete_production_step(device_id: Optional[str] = None, store: EventStore = Depends(get_store)):
    """Deletes the first production step recorded for device_id."""
    if not device_id:
        raise Malformed("Missing query parameter: device_id")
    if not _DEVICE_ID.fullmatch(device_id):
        raise Malformed("Invalid query parameter: device_id")
    target = int(device_id)

    if not store.delete_by_device_id(target):
        raise NotFound("Product not found")

    return {"message": f"Product with device_id {target} deleted successfully"}


# --- Reporting ---

@router.get("/completionTimes")
def get_completion_times(store: EventStore = Depends(get_store)):
    """Date and time of every DONE step with a readable timestamp."""
    return [completed.to_dict() for completed in store.completed_events()]


@router.get("/metrics")
def get_metrics(store: EventStore = Depends(get_store)):
    return Response(content=store.exposition(), media_type=CONTENT_TYPE_LATEST)
