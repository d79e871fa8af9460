# services/sentence-builder/routers/health.py
from fastapi import APIRouter

from bank import get_bank
from session import get_machine

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/bank")
async def health_bank():
    b = get_bank()
    count = len(await b.load()) if b.loaded else None
    return {"ok": b.loaded, "loaded": b.loaded, "source": b.source, "count": count}


@router.get("/session")
async def health_session():
    m = get_machine()
    return {"ok": True, "state": m.state.value, "timer_active": m.timer_active}
