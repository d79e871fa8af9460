# services/sentence-builder/selector.py
from __future__ import annotations

import random
from typing import List, Optional, Protocol, Sequence, TypeVar

from errors import NoQuestionsError
from schemas.questions import Difficulty, QuestionRecord

T = TypeVar("T")


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


def shuffle(items: Sequence[T], rng: Optional[RandomSource] = None) -> List[T]:
    """
    Fisher-Yates over a working copy; `items` itself is left alone.
    Every permutation is equally likely given a uniform `rng`.
    """
    rng = rng or random.Random()
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = rng.randint(0, i)
        out[i], out[j] = out[j], out[i]
    return out


def select(
    pool: Sequence[QuestionRecord],
    difficulty: Difficulty,
    count: int,
    rng: Optional[RandomSource] = None,
) -> List[QuestionRecord]:
    difficulty = Difficulty(difficulty)
    filtered = [q for q in pool if q.difficulty == difficulty]
    if not filtered:
        raise NoQuestionsError(f"No questions available for difficulty: {difficulty.value}")
    return shuffle(filtered, rng)[: max(0, count)]
