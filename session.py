# services/sentence-builder/session.py
"""
Session state machine: Lobby -> Loading -> Quiz -> Result, and back.

Everything runs on one event loop. `start()`/`restart()` are the only
coroutines (they await the question loader); answers and timer ticks are
plain methods that run to completion, so whichever of "last answer" and
"timer hits zero" is delivered first wins, with no lock involved.
"""

from __future__ import annotations

import asyncio
import logging
import math
import random
from typing import Awaitable, Callable, List, Optional, Sequence

import bank
import config
from assembler import SentenceAssembler
from errors import NoQuestionsError, SessionStateError
from schemas.questions import Difficulty, QuestionRecord
from schemas.session import (
    AnswerRecord,
    AssemblerView,
    ReviewItem,
    SessionResult,
    SessionSnapshot,
    SessionState,
)
from scoring import is_correct
from selector import RandomSource, select

logger = logging.getLogger(__name__)

QuestionLoader = Callable[[], Awaitable[List[QuestionRecord]]]


def percentage(score: int, total: int) -> int:
    # half-up, so 12.5 -> 13
    if total <= 0:
        return 0
    return int(math.floor(score / total * 100 + 0.5))


def compute_result(answers: Sequence[AnswerRecord], total_questions: int, time_taken: int) -> SessionResult:
    """
    Score against the configured session size. Questions the timer cut off
    have no AnswerRecord and simply count as not correct.
    """
    score = sum(1 for a in answers if a.is_correct)
    return SessionResult(
        score=score,
        total_questions=total_questions,
        percentage=percentage(score, total_questions),
        time_taken=time_taken,
        answers=list(answers),
    )


class Session:
    def __init__(self, questions: Sequence[QuestionRecord], time_budget: int):
        self.questions = tuple(questions)
        self.index = 0
        self.answers: List[AnswerRecord] = []
        self.time_budget = time_budget
        self.remaining = time_budget

    @property
    def current(self) -> QuestionRecord:
        return self.questions[self.index]

    @property
    def is_last(self) -> bool:
        return self.index >= len(self.questions) - 1


class SessionMachine:
    def __init__(
        self,
        loader: QuestionLoader,
        total_questions: int = config.SESSION_QUESTIONS,
        time_budget: int = config.SESSION_TIME_SECONDS,
        rng: Optional[RandomSource] = None,
        assembler_rng: Optional[Callable[[], RandomSource]] = None,
    ):
        self._loader = loader
        self.total_questions = total_questions
        self.time_budget = time_budget
        self._rng = rng or random.Random(config.SHUFFLE_SEED)
        # each assembler gets its own source, never the selection one
        self._assembler_rng = assembler_rng or random.Random

        self.state = SessionState.LOBBY
        self.difficulty: Optional[Difficulty] = None
        self.session: Optional[Session] = None
        self.assembler: Optional[SentenceAssembler] = None
        self.result: Optional[SessionResult] = None
        self.last_error: Optional[str] = None

    # ------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------
    def _require(self, state: SessionState, trigger: str) -> None:
        if self.state != state:
            raise SessionStateError(
                f"cannot {trigger} while {self.state.value} (needs {state.value})"
            )

    @property
    def timer_active(self) -> bool:
        return self.state == SessionState.QUIZ

    # ------------------------------------------------------------
    # Lobby / Result -> Loading -> Quiz | Lobby
    # ------------------------------------------------------------
    async def start(self, difficulty: Difficulty) -> None:
        self._require(SessionState.LOBBY, "start")
        await self._load(Difficulty(difficulty))

    async def restart(self) -> None:
        self._require(SessionState.RESULT, "restart")
        await self._load(self.difficulty)

    def quit(self) -> None:
        self._require(SessionState.RESULT, "quit")
        self._clear()
        self.state = SessionState.LOBBY

    def _clear(self) -> None:
        self.session = None
        self.assembler = None
        self.result = None

    async def _load(self, difficulty: Difficulty) -> None:
        self._clear()
        self.difficulty = difficulty
        self.last_error = None
        self.state = SessionState.LOADING
        try:
            pool = await self._loader()
            if not pool:
                raise NoQuestionsError(
                    "No questions available. Make sure the question bank exists and is populated."
                )
            questions = select(pool, difficulty, self.total_questions, self._rng)
            if not questions:
                raise NoQuestionsError(
                    f"Session size is {self.total_questions}; nothing to ask."
                )
            session = Session(questions, self.time_budget)
            assembler = self._new_assembler(session.current)
        except Exception as e:
            self.state = SessionState.LOBBY
            self.last_error = str(e)
            logger.warning("session start failed (%s): %s", difficulty.value, e)
            raise

        # all-or-nothing: nothing is visible until the session is whole
        self.assembler = assembler
        self.session = session
        self.state = SessionState.QUIZ
        logger.info("session started: %d %s questions", len(questions), difficulty.value)

    def _new_assembler(self, question: QuestionRecord) -> SentenceAssembler:
        return SentenceAssembler(question, self._assembler_rng())

    # ------------------------------------------------------------
    # Quiz
    # ------------------------------------------------------------
    def place_word(self, word: str) -> Optional[int]:
        self._require(SessionState.QUIZ, "place a word")
        return self.assembler.place_word(word)

    def clear_slot(self, slot_index: int) -> Optional[str]:
        self._require(SessionState.QUIZ, "clear a slot")
        return self.assembler.clear_slot(slot_index)

    def submit(self) -> AnswerRecord:
        """Submit the sentence built in the current assembler."""
        self._require(SessionState.QUIZ, "submit")
        if not self.assembler.is_complete():
            raise SessionStateError("cannot submit an incomplete sentence")
        return self.submit_answer(self.assembler.build_answer())

    def submit_answer(self, user_answer: str) -> AnswerRecord:
        self._require(SessionState.QUIZ, "submit")
        session = self.session
        q = session.current
        record = AnswerRecord(
            question_id=q.id,
            user_answer=user_answer,
            correct_answer=q.correct_sentence,
            is_correct=is_correct(user_answer, q.correct_sentence),
        )
        session.answers.append(record)

        if session.is_last:
            self._finish()
        else:
            session.index += 1
            self.assembler = self._new_assembler(session.current)
        return record

    def tick(self, seconds: int = 1) -> None:
        """Advance the countdown. Ignored unless the timer is active."""
        if seconds < 0:
            raise ValueError("seconds must be >= 0")
        if not self.timer_active:
            return
        self.session.remaining = max(0, self.session.remaining - seconds)
        if self.session.remaining == 0:
            logger.info(
                "time up after %d of %d questions",
                len(self.session.answers),
                len(self.session.questions),
            )
            self._finish()

    def _finish(self) -> None:
        session = self.session
        self.result = compute_result(
            session.answers,
            self.total_questions,
            session.time_budget - session.remaining,
        )
        self.assembler = None
        self.state = SessionState.RESULT

    # ------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------
    def snapshot(self) -> SessionSnapshot:
        snap = SessionSnapshot(
            state=self.state,
            difficulty=self.difficulty,
            timer_active=self.timer_active,
            last_error=self.last_error,
        )
        session = self.session
        if session is None:
            return snap

        snap.total = len(session.questions)
        snap.answered = len(session.answers)
        snap.remaining_seconds = session.remaining

        if self.state == SessionState.QUIZ:
            snap.index = session.index
            a = self.assembler
            snap.current = AssemblerView(
                question_id=a.question.id,
                context=a.question.context,
                parts=list(a.parts),
                slots=list(a.slots),
                pool=list(a.pool),
                complete=a.is_complete(),
                preview=a.build_answer(),
            )
        elif self.state == SessionState.RESULT:
            snap.result = self.result
            by_id = {q.id: q for q in session.questions}
            snap.review = [
                ReviewItem(
                    **ans.model_dump(),
                    context=by_id[ans.question_id].context,
                    distractor=by_id[ans.question_id].distractor,
                )
                for ans in session.answers
            ]
        return snap


async def run_ticker(machine: Optional[SessionMachine] = None, interval: float = 1.0) -> None:
    """Deliver one tick per interval until cancelled; defaults to the live machine."""
    while True:
        await asyncio.sleep(interval)
        (machine or get_machine()).tick()


_machine = SessionMachine(bank.get_questions)


def get_machine() -> SessionMachine:
    return _machine


def set_machine(machine: SessionMachine) -> None:
    global _machine
    _machine = machine
