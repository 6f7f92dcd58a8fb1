from datetime import datetime, timezone
from fastapi import APIRouter
from app.core.utils.serialization import iso_utc


router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    return {"ok": True}


@router.get("/api/health")
async def api_health():
    return {"ok": True, "timestamp": iso_utc(datetime.now(timezone.utc))}
