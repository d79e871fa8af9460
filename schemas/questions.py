# services/sentence-builder/schemas/questions.py
from __future__ import annotations

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict


class Difficulty(str, Enum):
    MIDDLE_SCHOOL = "Middle School"
    HIGH_SCHOOL = "High School"
    UNIVERSITY = "University"


class QuestionRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    context: str
    template: str
    scrambled_words: Tuple[str, ...] = ()
    correct_sentence: str
    distractor: str
    difficulty: Difficulty


class QuestionOut(BaseModel):
    # answer fields stay server-side
    id: str
    context: str
    template: str
    difficulty: Difficulty
    blanks: int
