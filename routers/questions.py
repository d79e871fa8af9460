from __future__ import annotations

import random as _rnd
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from bank import count_blanks, get_bank, get_questions
from errors import LoadError
from schemas.questions import Difficulty, QuestionOut, QuestionRecord
from selector import shuffle

router = APIRouter(tags=["questions"])


def _out(q: QuestionRecord) -> QuestionOut:
    return QuestionOut(
        id=q.id,
        context=q.context,
        template=q.template,
        difficulty=q.difficulty,
        blanks=count_blanks(q.template),
    )


async def _questions() -> List[QuestionRecord]:
    try:
        return await get_questions()
    except LoadError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get("/questions", response_model=List[QuestionOut])
async def list_questions(
    difficulty: Optional[Difficulty] = None,
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    random: bool = Query(default=False, description="If true, shuffle before limiting"),
):
    qs = await _questions()

    if difficulty:
        qs = [q for q in qs if q.difficulty == difficulty]

    if random:
        qs = shuffle(qs, _rnd.Random())

    if limit is not None:
        qs = qs[:limit]

    return [_out(q) for q in qs]


@router.get("/questions/{qid}", response_model=QuestionOut)
async def get_question_detail(qid: str):
    await _questions()
    q = get_bank().get(qid)
    if not q:
        raise HTTPException(status_code=404, detail="question not found")
    return _out(q)
