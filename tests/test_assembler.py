import random

import pytest

from assembler import SentenceAssembler, tokenize
from schemas.questions import Difficulty, QuestionRecord


def _q(template="_____ _____ _____ _____.", words=("I", "am", "a", "student"), distractor="an"):
    return QuestionRecord(
        id="q1",
        context="Tell me about yourself.",
        template=template,
        scrambled_words=words,
        correct_sentence="I am a student.",
        distractor=distractor,
        difficulty=Difficulty.UNIVERSITY,
    )


def test_tokenize():
    assert tokenize("_____ _____ I'm _____") == [None, " ", None, " I'm ", None]
    assert tokenize("no blanks here") == ["no blanks here"]
    # two underscores are literal text
    assert tokenize("a __ b ___") == ["a __ b ", None]
    assert tokenize("______.") == [None, "."]


def test_pool_has_words_and_distractor():
    a = SentenceAssembler(_q(), random.Random(7))
    assert sorted(a.pool) == sorted(["I", "am", "a", "student", "an"])
    assert a.slot_count == 4
    assert a.slots == [None] * 4


def test_build_sentence_in_slot_order():
    a = SentenceAssembler(_q(), random.Random(7))
    for i, w in enumerate(["I", "am", "a", "student"]):
        assert not a.is_complete()
        assert a.place_word(w) == i
    assert a.is_complete()
    assert a.build_answer() == "I am a student."
    assert a.pool == ["an"]


def test_place_when_full_is_noop():
    a = SentenceAssembler(_q(), random.Random(7))
    for w in ["I", "am", "a", "student"]:
        a.place_word(w)
    slots, pool = list(a.slots), list(a.pool)
    assert a.place_word("an") is None
    assert a.slots == slots
    assert a.pool == pool


def test_place_word_missing_from_pool_still_fills():
    a = SentenceAssembler(_q(), random.Random(7))
    pool = list(a.pool)
    assert a.place_word("zebra") == 0
    assert a.slots[0] == "zebra"
    assert a.pool == pool


def test_place_removes_one_occurrence():
    a = SentenceAssembler(_q(template="_____ _____ _____.", words=("no", "no", "no"), distractor="yes"))
    a.place_word("no")
    assert sorted(a.pool) == ["no", "no", "yes"]


def test_clear_slot_returns_word_and_refills_first_gap():
    a = SentenceAssembler(_q(), random.Random(7))
    for w in ["I", "am", "a", "student"]:
        a.place_word(w)
    assert a.clear_slot(1) == "am"
    assert a.slots == ["I", None, "a", "student"]
    assert "am" in a.pool
    assert not a.is_complete()

    a.place_word("an")
    assert a.slots == ["I", "an", "a", "student"]
    assert a.build_answer() == "I an a student."


def test_clear_empty_slot_is_noop():
    a = SentenceAssembler(_q(), random.Random(7))
    pool = list(a.pool)
    assert a.clear_slot(2) is None
    assert a.pool == pool


def test_clear_slot_out_of_range():
    a = SentenceAssembler(_q(), random.Random(7))
    with pytest.raises(IndexError):
        a.clear_slot(4)
    with pytest.raises(IndexError):
        a.clear_slot(-1)


def test_incomplete_answer_has_gaps_collapsed():
    a = SentenceAssembler(_q(template="_____ _____ going _____ the store."), random.Random(7))
    a.place_word("She")
    assert a.build_answer() == "She going the store."


def test_literal_whitespace_collapsed():
    q = _q(template="  _____   _____\t_____ \n _____ . ")
    a = SentenceAssembler(q, random.Random(7))
    for w in ["I", "am", "a", "student"]:
        a.place_word(w)
    assert a.build_answer() == "I am a student ."
