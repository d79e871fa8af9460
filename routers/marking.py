from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException

from bank import get_questions
from errors import LoadError
from schemas.marking import (
    MarkBatchRequest,
    MarkBatchResponse,
    MarkRequest,
    MarkResponse,
    NormalizeRequest,
    NormalizeResponse,
)
from schemas.questions import QuestionRecord
from scoring import is_correct, normalize

LEN_LIMIT = 300

router = APIRouter(tags=["marking"])


def _validate_answer_text(s: str) -> Optional[str]:
    if s is None or not isinstance(s, str) or not s.strip():
        return "Answer required."
    if len(s) > LEN_LIMIT:
        return f"Answer too long (> {LEN_LIMIT})."
    return None


def _mark_one(q: QuestionRecord, answer: str) -> Dict[str, Any]:
    msg = _validate_answer_text(answer)
    if msg:
        return {
            "ok": False,
            "correct": False,
            "score": 0,
            "feedback": msg,
            "expected": q.correct_sentence,
        }

    correct = is_correct(answer, q.correct_sentence)
    feedback = ""
    if not correct and q.distractor and q.distractor.lower() in normalize(answer).split():
        feedback = f"'{q.distractor}' does not belong in this sentence."

    return {
        "ok": True,
        "correct": correct,
        "score": 1 if correct else 0,
        "feedback": feedback,
        "expected": q.correct_sentence,
    }


async def _questions_by_id() -> Dict[str, QuestionRecord]:
    try:
        return {q.id: q for q in await get_questions()}
    except LoadError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.post("/normalize", response_model=NormalizeResponse)
async def normalize_text(req: NormalizeRequest):
    return {"ok": True, "normalized": normalize(req.text)}


@router.post("/mark", response_model=MarkResponse)
async def mark(req: MarkRequest):
    q = (await _questions_by_id()).get(req.id)
    if not q:
        return {"ok": False, "correct": False, "score": 0, "feedback": "unknown question id"}
    return _mark_one(q, req.answer)


@router.post("/mark-batch", response_model=MarkBatchResponse)
async def mark_batch(req: MarkBatchRequest):
    questions_by_id = await _questions_by_id()
    results: List[Dict[str, Any]] = []
    correct_count = 0

    for it in req.items:
        q = questions_by_id.get(it.id)
        if not q:
            res = {
                "ok": False,
                "correct": False,
                "score": 0,
                "feedback": "unknown question id",
                "expected": None,
            }
        else:
            res = _mark_one(q, it.answer)
        results.append({"id": it.id, "response": res})
        if res.get("correct"):
            correct_count += 1

    return {
        "ok": True,
        "total": len(results),
        "correct": correct_count,
        "results": results,
    }
