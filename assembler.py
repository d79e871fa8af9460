# services/sentence-builder/assembler.py
from __future__ import annotations

import random
import re
from typing import List, Optional

from schemas.questions import QuestionRecord
from scoring import collapse_whitespace
from selector import RandomSource, shuffle

_BLANK_SPLIT_RE = re.compile(r"(_{3,})")


def tokenize(template: str) -> List[Optional[str]]:
    """
    Split a template into literal segments and blanks (None), in order.
    e.g. "_____ _____ I'm _____" -> [None, " ", None, " I'm ", None]
    """
    parts: List[Optional[str]] = []
    for token in _BLANK_SPLIT_RE.split(template):
        if _BLANK_SPLIT_RE.fullmatch(token):
            parts.append(None)
        elif token:
            parts.append(token)
    return parts


class SentenceAssembler:
    """
    Interactive state for one question: the tokenized template, the words
    placed in each blank slot, and the pool of words not yet placed.

    One instance per question; the session swaps in a fresh one on every
    question change.
    """

    def __init__(self, question: QuestionRecord, rng: Optional[RandomSource] = None):
        self.question = question
        self.parts = tokenize(question.template)
        self.slots: List[Optional[str]] = [None] * sum(1 for p in self.parts if p is None)
        # own random source: display order never shares state with selection
        self.pool: List[str] = shuffle(
            [*question.scrambled_words, question.distractor],
            rng or random.Random(),
        )

    @property
    def slot_count(self) -> int:
        return len(self.slots)

    def place_word(self, word: str) -> Optional[int]:
        """Fill the first empty slot with `word`. Returns the slot index, or None if full."""
        slot = next((i for i, w in enumerate(self.slots) if w is None), None)
        if slot is None:
            return None
        self.slots[slot] = word
        if word in self.pool:
            self.pool.remove(word)
        return slot

    def clear_slot(self, slot_index: int) -> Optional[str]:
        """Empty a slot and hand its word back to the pool."""
        if not 0 <= slot_index < len(self.slots):
            raise IndexError(f"slot {slot_index} out of range (0..{len(self.slots) - 1})")
        word = self.slots[slot_index]
        if word is None:
            return None
        self.slots[slot_index] = None
        self.pool.append(word)
        return word

    def is_complete(self) -> bool:
        return all(w is not None for w in self.slots)

    def build_answer(self) -> str:
        out = []
        slots = iter(self.slots)
        for part in self.parts:
            if part is None:
                out.append(next(slots) or "")
            else:
                out.append(part)
        return collapse_whitespace("".join(out))
