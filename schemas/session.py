# services/sentence-builder/schemas/session.py
from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.questions import Difficulty


class SessionState(str, Enum):
    LOBBY = "lobby"
    LOADING = "loading"
    QUIZ = "quiz"
    RESULT = "result"


class AnswerRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    question_id: str
    user_answer: str
    correct_answer: str
    is_correct: bool


class SessionResult(BaseModel):
    score: int
    total_questions: int
    percentage: int
    time_taken: int  # seconds used out of the budget
    answers: List[AnswerRecord]


class ReviewItem(AnswerRecord):
    context: str
    distractor: str


class AssemblerView(BaseModel):
    question_id: str
    context: str
    # literal text, or None where a blank sits
    parts: List[Optional[str]]
    slots: List[Optional[str]]
    pool: List[str]
    complete: bool
    preview: str


class SessionSnapshot(BaseModel):
    state: SessionState
    difficulty: Optional[Difficulty] = None
    index: Optional[int] = None
    total: int = 0
    answered: int = 0
    remaining_seconds: Optional[int] = None
    timer_active: bool = False
    current: Optional[AssemblerView] = None
    result: Optional[SessionResult] = None
    review: List[ReviewItem] = []
    last_error: Optional[str] = None


# ---------- Requests ----------


class StartRequest(BaseModel):
    difficulty: Difficulty


class PlaceRequest(BaseModel):
    word: str


class ClearRequest(BaseModel):
    slot: int = Field(ge=0)


class TickRequest(BaseModel):
    seconds: int = Field(default=1, ge=1, le=3600)
