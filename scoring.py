# services/sentence-builder/scoring.py
from __future__ import annotations

import re

_PUNCT_RE = re.compile(r"[.?!,]")
_WS_RE = re.compile(r"\s+")


def collapse_whitespace(s: str) -> str:
    return _WS_RE.sub(" ", s).strip()


def normalize(s: str) -> str:
    """
    Canonical form used for comparison: strip . ? ! , then lower-case,
    collapse whitespace runs to one space and trim the ends.
    """
    return collapse_whitespace(_PUNCT_RE.sub("", s).lower())


def is_correct(user_answer: str, correct_sentence: str) -> bool:
    # exact match after normalization; no partial credit
    return normalize(user_answer) == normalize(correct_sentence)
