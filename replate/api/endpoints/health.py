"""
Health checks - for load balancers and monitoring.
Challenge: Fast liveness; readiness reflects whether the listing store can be read.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from replate.config import get_settings
from replate.core.exceptions import StoreUnavailable
from replate.store.provider import ListingStoreDep

router = APIRouter()


@router.get("")
async def health():
    """Liveness: is the process up?"""
    return {"status": "ok", "app": get_settings().app_name}


@router.get("/ready")
async def ready(store: ListingStoreDep):
    """Readiness: can the document store be read?"""
    try:
        await store.list_all()
    except StoreUnavailable:
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ready"}
