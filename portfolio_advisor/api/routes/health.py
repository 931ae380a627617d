from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_advisor.infrastructure.db.database import get_db

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    advisor = getattr(request.app.state, "advisor", None)
    return {
        "status": "ok",
        "advisor_ready": advisor is not None,
        "cache_running": bool(advisor and advisor.cache.running),
    }


@router.get("/ready")
async def ready(db: AsyncSession = Depends(get_db)):
    try:
        await db.execute(text("SELECT 1"))
        db_connected = True
    except Exception:
        db_connected = False

    return {
        "status": "ready" if db_connected else "not_ready",
        "db_connected": db_connected,
    }
