from __future__ import annotations

from statistics import median_high

from contracts.tokens import Token

from .normalize import normalize_spaces


def _gap_after(cur: Token, nxt: Token) -> float:
    return nxt.x - cur.right()


def column_gap_threshold(tokens: list[Token], *, gap_multiplier: float, min_gap: float) -> float:
    # Zero/negative gaps are kerning or overlap, not spacing: they stay out of the median.
    positive = [g for g in (_gap_after(a, b) for a, b in zip(tokens, tokens[1:])) if g > 0]
    typical = median_high(positive) if positive else 0.0
    return max(min_gap, typical * gap_multiplier)


def split_line_into_cells(tokens: list[Token], *, gap_multiplier: float, min_gap: float) -> list[str]:
    """
    Split one x-sorted line into column cells wherever the horizontal gap between neighbouring
    tokens exceeds the line's threshold.
    """

    if len(tokens) <= 1:
        return [normalize_spaces(" ".join(t.text for t in tokens))]

    threshold = column_gap_threshold(tokens, gap_multiplier=gap_multiplier, min_gap=min_gap)

    cells: list[str] = []
    buf: list[str] = []
    for i, cur in enumerate(tokens):
        buf.append(cur.text)
        if i + 1 == len(tokens):
            break
        if _gap_after(cur, tokens[i + 1]) > threshold:
            cells.append(normalize_spaces(" ".join(buf)))
            buf = []
    if buf:
        cells.append(normalize_spaces(" ".join(buf)))

    return cells
