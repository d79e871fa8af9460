# services/sentence-builder/schemas/marking.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

# ---------- Normalize ----------


class NormalizeRequest(BaseModel):
    text: str


class NormalizeResponse(BaseModel):
    ok: bool
    normalized: str


# ---------- Mark single ----------


class MarkRequest(BaseModel):
    id: str
    answer: str


class MarkResponse(BaseModel):
    ok: bool
    correct: bool
    score: int
    feedback: str
    expected: Optional[str] = None


# ---------- Mark batch ----------


class MarkBatchItem(BaseModel):
    id: str
    response: MarkResponse


class MarkBatchRequest(BaseModel):
    items: List[MarkRequest]


class MarkBatchResponse(BaseModel):
    ok: bool
    total: int
    correct: int
    results: List[MarkBatchItem]
