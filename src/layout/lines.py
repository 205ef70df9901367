from __future__ import annotations

from dataclasses import dataclass, field

from contracts.layout import Line
from contracts.tokens import Token


@dataclass(slots=True)
class _LineBuilder:
    y: float
    tokens: list[Token] = field(default_factory=list)


def group_tokens_into_lines(tokens: list[Token], *, y_tolerance: float) -> list[Line]:
    """
    Greedy, fixed-radius, single-pass line clustering.

    Tokens are visited top to bottom (y desc, then x asc). Each joins the first existing line
    whose representative y is within y_tolerance, otherwise it opens a new line at its own y.
    A line's representative y never moves and lines are never merged, so membership depends
    on the visiting order.
    """

    sweep = sorted(tokens, key=lambda t: (-t.y, t.x))
    builders: list[_LineBuilder] = []

    for tok in sweep:
        target: _LineBuilder | None = None
        for lb in builders:
            if abs(lb.y - tok.y) <= y_tolerance:
                target = lb
                break
        if target is None:
            target = _LineBuilder(y=tok.y)
            builders.append(target)
        target.tokens.append(tok)

    # sorted() is stable, so equal-x tokens keep their sweep order.
    lines = [Line(y=b.y, tokens=sorted(b.tokens, key=lambda t: t.x)) for b in builders]
    lines.sort(key=lambda ln: -ln.y)
    return lines
