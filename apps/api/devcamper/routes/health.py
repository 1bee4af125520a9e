"""Liveness probe reporting document store reachability."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from devcamper import __version__
from devcamper.repositories.base import DocumentStore
from devcamper.routes.dependencies import get_store
from devcamper.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(store: Annotated[DocumentStore, Depends(get_store)]) -> HealthResponse:
    """Ping the document store; an unreachable store reports ``unhealthy``."""
    store_status = "connected"
    try:
        if not store.ping():
            store_status = "disconnected"
    except Exception as exc:
        store_status = "disconnected"
        logger.warning("health.store_unreachable error=%s", exc)

    overall = "healthy" if store_status == "connected" else "unhealthy"
    return HealthResponse(status=overall, version=__version__, store=store_status)
