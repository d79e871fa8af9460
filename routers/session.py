# services/sentence-builder/routers/session.py
from __future__ import annotations

from fastapi import APIRouter, HTTPException

from errors import LoadError, NoQuestionsError, SessionStateError
from schemas.session import (
    AnswerRecord,
    ClearRequest,
    PlaceRequest,
    SessionResult,
    SessionSnapshot,
    StartRequest,
    TickRequest,
)
from session import get_machine

# Handlers are async on purpose: they must run on the event loop that also
# runs the ticker, never in the threadpool.
router = APIRouter(prefix="/session", tags=["session"])


def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, LoadError):
        return HTTPException(status_code=502, detail=str(e))
    if isinstance(e, NoQuestionsError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, IndexError):
        return HTTPException(status_code=422, detail=str(e))
    return HTTPException(status_code=409, detail=str(e))


@router.get("", response_model=SessionSnapshot)
async def get_session():
    return get_machine().snapshot()


@router.post("/start", response_model=SessionSnapshot)
async def start_session(req: StartRequest):
    m = get_machine()
    try:
        await m.start(req.difficulty)
    except (LoadError, NoQuestionsError, SessionStateError) as e:
        raise _http_error(e)
    return m.snapshot()


@router.post("/restart", response_model=SessionSnapshot)
async def restart_session():
    m = get_machine()
    try:
        await m.restart()
    except (LoadError, NoQuestionsError, SessionStateError) as e:
        raise _http_error(e)
    return m.snapshot()


@router.post("/quit", response_model=SessionSnapshot)
async def quit_session():
    m = get_machine()
    try:
        m.quit()
    except SessionStateError as e:
        raise _http_error(e)
    return m.snapshot()


@router.post("/place", response_model=SessionSnapshot)
async def place_word(req: PlaceRequest):
    m = get_machine()
    try:
        m.place_word(req.word)
    except SessionStateError as e:
        raise _http_error(e)
    return m.snapshot()


@router.post("/clear", response_model=SessionSnapshot)
async def clear_slot(req: ClearRequest):
    m = get_machine()
    try:
        m.clear_slot(req.slot)
    except (SessionStateError, IndexError) as e:
        raise _http_error(e)
    return m.snapshot()


@router.post("/submit", response_model=AnswerRecord)
async def submit_answer():
    m = get_machine()
    try:
        return m.submit()
    except SessionStateError as e:
        raise _http_error(e)


@router.post("/tick", response_model=SessionSnapshot)
async def tick(req: TickRequest):
    m = get_machine()
    m.tick(req.seconds)
    return m.snapshot()


@router.get("/result", response_model=SessionResult)
async def get_result():
    m = get_machine()
    if m.result is None:
        raise HTTPException(status_code=404, detail="no finished session")
    return m.result
