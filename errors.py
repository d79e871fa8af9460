from __future__ import annotations

from typing import Optional


class EngineError(Exception):
    """Base class for errors surfaced to callers of the exercise engine."""


class LoadError(EngineError):
    """The question-bank resource could not be fetched."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"could not load question bank from {source}: {reason}")
        self.source = source
        self.reason = reason


class NoQuestionsError(EngineError):
    """Nothing left to build a session from after filtering."""


class SessionStateError(EngineError):
    """A trigger arrived in a state that does not accept it."""


class ParseWarning(UserWarning):
    """
    A malformed or degraded line in the question bank.

    Never raised by the loader: instances are collected on the parse result
    and logged, and the load carries on.
    """

    def __init__(self, line_no: int, reason: str, raw: Optional[str] = None):
        super().__init__(f"line {line_no}: {reason}")
        self.line_no = line_no
        self.reason = reason
        self.raw = raw
