from __future__ import annotations

import math
from collections import Counter

from .config import LayoutConfig
from .normalize import normalize_spaces

_DEFAULT_CONFIG = LayoutConfig()


def row_candidates(window_cells: list[list[str]]) -> list[list[str]]:
    return [r for r in window_cells if len(r) >= 2 and any(c for c in r)]


def most_common_column_count(rows: list[list[str]]) -> tuple[int, int] | None:
    """
    Return (column_count, frequency) of the most frequent row width.

    Ties resolve to the lowest column count so the answer never depends on input order.
    """

    if not rows:
        return None
    freq = Counter(len(r) for r in rows)
    best_count, best_freq = min(freq.items(), key=lambda kv: (-kv[1], kv[0]))
    return best_count, best_freq


def looks_like_table(window_cells: list[list[str]], config: LayoutConfig = _DEFAULT_CONFIG) -> bool:
    rows = row_candidates(window_cells)
    if len(rows) < config.table_min_rows:
        return False

    best = most_common_column_count(rows)
    if best is None:
        return False
    best_count, best_freq = best
    required = max(config.table_min_best_freq, math.floor(len(rows) * config.table_best_freq_ratio))
    return best_count >= 2 and best_freq >= required


def pad_table_rows(window_cells: list[list[str]]) -> list[list[str]]:
    """Pad every row to the window's widest row and drop rows with no text at all."""
    if not window_cells:
        return []
    max_cols = max(len(r) for r in window_cells)
    rows: list[list[str]] = []
    for r in window_cells:
        padded = [normalize_spaces(c) for c in r]
        padded.extend([""] * (max_cols - len(padded)))
        if any(padded):
            rows.append(padded)
    return rows
