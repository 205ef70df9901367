from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any, Iterable

from contracts.tokens import Token

_WS_RE = re.compile(r"\s+")


def normalize_spaces(s: str | None) -> str:
    """Collapse every whitespace run to one space and trim."""
    return _WS_RE.sub(" ", "" if s is None else str(s)).strip()


def _safe_num(v: Any) -> float | None:
    if v is None or isinstance(v, bool):
        return None
    try:
        n = float(v)
    except (TypeError, ValueError, OverflowError):
        return None
    return n if math.isfinite(n) else None


def _safe_extent(v: Any) -> float:
    n = _safe_num(v)
    return n if n is not None and n > 0 else 0.0


def _as_mapping(candidate: Any) -> Mapping[str, Any] | None:
    if isinstance(candidate, Token):
        return candidate.to_dict()
    if isinstance(candidate, Mapping):
        return candidate
    return None


def normalize_tokens(candidates: Iterable[Any]) -> tuple[list[Token], list[dict[str, Any]]]:
    """
    Clean raw token candidates.

    Returns: (tokens, dropped) where dropped holds {"index", "reason"} records in input order.
    Never raises: anything that cannot become a Token is dropped.
    """

    tokens: list[Token] = []
    dropped: list[dict[str, Any]] = []

    for idx, candidate in enumerate(candidates):
        m = _as_mapping(candidate)
        if m is None:
            dropped.append({"index": idx, "reason": "NOT_A_TOKEN"})
            continue

        text = normalize_spaces(m.get("text"))
        if not text:
            dropped.append({"index": idx, "reason": "EMPTY_TEXT"})
            continue

        x = _safe_num(m.get("x"))
        if x is None:
            dropped.append({"index": idx, "reason": "NON_FINITE_X"})
            continue
        y = _safe_num(m.get("y"))
        if y is None:
            dropped.append({"index": idx, "reason": "NON_FINITE_Y"})
            continue

        # Older artifacts use the short keys w/h.
        width = m.get("width", m.get("w"))
        height = m.get("height", m.get("h"))

        tokens.append(Token(text=text, x=x, y=y, width=_safe_extent(width), height=_safe_extent(height)))

    return tokens, dropped
