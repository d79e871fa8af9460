from __future__ import annotations

from fastapi import APIRouter

from bank import reload_bank
from errors import LoadError

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/reload")
async def reload_questions():
    try:
        n = await reload_bank()
    except LoadError as e:
        return {"ok": False, "error": str(e)}
    return {"ok": True, "count": n}
