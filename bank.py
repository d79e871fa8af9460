# services/sentence-builder/bank.py

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional, Tuple

import httpx
from pydantic import TypeAdapter, ValidationError

import config
from errors import LoadError, ParseWarning
from schemas.questions import Difficulty, QuestionRecord

logger = logging.getLogger(__name__)

FIELD_DELIMITER = "|"
FIELD_COUNT = 7

_LINE_RE = re.compile(r"\r?\n")
_BLANK_RE = re.compile(r"_{3,}")
_WORDS_ADAPTER = TypeAdapter(List[str])


class ParseResult(NamedTuple):
    records: List[QuestionRecord]
    warnings: List[ParseWarning]


def count_blanks(template: str) -> int:
    return len(_BLANK_RE.findall(template))


def decode_words(raw: str) -> Tuple[bool, Tuple[str, ...]]:
    """
    Validate the scrambled-words field as a JSON array of strings.
    Returns (ok, words); words is empty whenever ok is False.
    """
    try:
        return True, tuple(_WORDS_ADAPTER.validate_json(raw))
    except ValidationError:
        return False, ()


def parse_bank(text: str) -> ParseResult:
    """
    Parse the pipe-delimited bank. Blank lines are dropped, then the first
    remaining line (the header) is discarded. Bad lines are skipped or
    degraded, never fatal.
    """
    lines = [ln for ln in _LINE_RE.split(text) if ln.strip()]

    records: List[QuestionRecord] = []
    warnings: List[ParseWarning] = []
    seen: Dict[str, int] = {}

    def warn(line_no: int, reason: str, raw: str) -> None:
        w = ParseWarning(line_no, reason, raw)
        warnings.append(w)
        logger.warning("question bank: %s", w)

    for line_no, line in enumerate(lines[1:], 1):
        values = line.split(FIELD_DELIMITER)
        if len(values) < FIELD_COUNT:
            warn(line_no, f"expected {FIELD_COUNT} fields, got {len(values)}", line)
            continue

        qid, context, template, words_raw, correct, distractor, difficulty = values[:FIELD_COUNT]

        ok, words = decode_words(words_raw)
        if not ok:
            warn(line_no, "scrambled words are not a JSON array of strings", line)

        try:
            tier = Difficulty(difficulty.strip())
        except ValueError:
            warn(line_no, f"unknown difficulty {difficulty.strip()!r}", line)
            continue

        if qid in seen:
            warn(line_no, f"duplicate id {qid!r} (first seen on line {seen[qid]})", line)
            continue

        blanks = count_blanks(template)
        if ok and blanks != len(words):
            # kept as-is; the data is not ours to fix
            warn(line_no, f"{blanks} blanks but {len(words)} scrambled words", line)

        seen[qid] = line_no
        records.append(
            QuestionRecord(
                id=qid,
                context=context,
                template=template,
                scrambled_words=words,
                correct_sentence=correct,
                distractor=distractor.strip(),
                difficulty=tier,
            )
        )

    return ParseResult(records, warnings)


def _is_url(source: str) -> bool:
    return source.startswith("http://") or source.startswith("https://")


async def fetch_text(
    source: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    timeout: Optional[float] = None,
) -> str:
    """Single fetch of the bank resource; any failure becomes a LoadError."""
    if not _is_url(source):
        try:
            return Path(source).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(source, f"{type(e).__name__}: {e}") from e

    t = config.FETCH_TIMEOUT_SECONDS if timeout is None else timeout
    try:
        if client is not None:
            r = await client.get(source, timeout=t)
        else:
            async with httpx.AsyncClient() as c:
                r = await c.get(source, timeout=t)
    except httpx.HTTPError as e:
        raise LoadError(source, f"{type(e).__name__}: {e}") from e

    if not r.is_success:
        raise LoadError(source, f"HTTP {r.status_code}")
    return r.text


async def load(
    source: str, *, client: Optional[httpx.AsyncClient] = None
) -> List[QuestionRecord]:
    text = await fetch_text(source, client=client)
    result = parse_bank(text)
    logger.info(
        "loaded %d questions from %s (%d warnings)",
        len(result.records),
        source,
        len(result.warnings),
    )
    return result.records


class QuestionBank:
    """Last successful load of the bank; a failed reload keeps the old one."""

    def __init__(self, source: Optional[str] = None, client: Optional[httpx.AsyncClient] = None):
        self.source = source or config.QUESTION_BANK_SOURCE
        self._client = client
        self._questions: Optional[List[QuestionRecord]] = None

    @property
    def loaded(self) -> bool:
        return self._questions is not None

    async def load(self) -> List[QuestionRecord]:
        if self._questions is None:
            await self.reload()
        return list(self._questions or [])

    async def reload(self) -> int:
        try:
            questions = await load(self.source, client=self._client)
        except LoadError:
            logger.error("question bank reload failed; keeping previous copy", exc_info=True)
            raise
        self._questions = questions
        return len(questions)

    def get(self, qid: str) -> Optional[QuestionRecord]:
        return next((q for q in self._questions or [] if q.id == qid), None)


_bank = QuestionBank()


def get_bank() -> QuestionBank:
    return _bank


def set_bank(bank: QuestionBank) -> None:
    global _bank
    _bank = bank


# Public API
async def get_questions() -> List[QuestionRecord]:
    return await _bank.load()


async def reload_bank() -> int:
    return await _bank.reload()
