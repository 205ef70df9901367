from __future__ import annotations

import re

from .config import LayoutConfig
from .normalize import normalize_spaces

_LETTER_RE = re.compile(r"[A-Za-z]")
_UPPER_RE = re.compile(r"[A-Z]")

_DEFAULT_CONFIG = LayoutConfig()


def uppercase_ratio(text: str) -> float:
    letters = len(_LETTER_RE.findall(text))
    if letters == 0:
        return 0.0
    return len(_UPPER_RE.findall(text)) / letters


def is_probably_header(text: str, config: LayoutConfig = _DEFAULT_CONFIG) -> bool:
    t = normalize_spaces(text)
    if len(t) <= config.header_min_length:
        return False
    if len(t) > config.header_max_length:
        return False
    return uppercase_ratio(t) > config.header_upper_ratio or ":" in t
