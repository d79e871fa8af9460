# services/sentence-builder/config.py
from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

_BASE = Path(__file__).resolve().parent

# A filesystem path or an http(s) URL; fetched once per (re)load.
QUESTION_BANK_SOURCE = os.getenv(
    "QUESTION_BANK_SOURCE", str(_BASE / "data" / "questions.csv")
)
FETCH_TIMEOUT_SECONDS = float(os.getenv("FETCH_TIMEOUT_SECONDS", "10"))

SESSION_QUESTIONS = int(os.getenv("SESSION_QUESTIONS", "9"))
SESSION_TIME_SECONDS = int(os.getenv("SESSION_TIME_SECONDS", "360"))  # 6 minutes

# Background ticker for the live timer; tests drive /session/tick instead.
AUTO_TICK = os.getenv("AUTO_TICK", "1").lower() not in ("0", "false", "no")


def _parse_seed(raw: Optional[str]) -> Optional[int]:
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        return None


# Seeds the selection shuffle only; assemblers always draw a fresh seed.
SHUFFLE_SEED = _parse_seed(os.getenv("SHUFFLE_SEED"))


def _parse_origins(raw: str) -> List[str]:
    return [o.strip() for o in raw.split(",") if o.strip()]


CORS_ORIGINS = _parse_origins(
    os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
)
