import random

import pytest

import bank
import session
from bank import QuestionBank
from session import SessionMachine

BANK_TEXT = "\n".join(
    [
        "id|context|template|scrambledWords|correctSentence|distractor|difficulty",
        'u1|Tell me about yourself.|_____ _____ _____ _____.|["I","am","a","student"]|I am a student.|an|University',
        'u2|Where is Mia?|_____ _____ going _____ the store.|["She","is","to"]|She is going to the store.|at|University',
        'u3|The exam starts soon.|_____ _____ _____?|["Are","you","ready"]|Are you ready?|is|University',
        'h1|Is everyone in class?|_____ _____ here.|["We","are"]|We are here.|is|High School',
        "bad|only|five|fields|here",
    ]
)


@pytest.fixture
def bank_path(tmp_path):
    p = tmp_path / "questions.csv"
    p.write_text(BANK_TEXT, encoding="utf-8")
    return p


@pytest.fixture(autouse=True)
def fresh_engine(bank_path):
    """Each test gets its own bank and session machine."""
    old_bank, old_machine = bank.get_bank(), session.get_machine()
    bank.set_bank(QuestionBank(source=str(bank_path)))
    session.set_machine(SessionMachine(bank.get_questions, rng=random.Random(0)))
    yield
    bank.set_bank(old_bank)
    session.set_machine(old_machine)
