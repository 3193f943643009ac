"""
Health check endpoint.
"""
from datetime import datetime, timezone
from fastapi import APIRouter

router = APIRouter()


@router.get("/healthcheck")
async def healthcheck():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
