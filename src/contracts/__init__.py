"""
Canonical pipeline contracts.

These models are the schema boundary between the extraction stage (`pdf_tokens`) and the
layout stage (`layout`). Stage code should consume/produce these objects, not ad-hoc dicts.
"""

from .layout import (
    Block,
    BlockType,
    HeaderBlock,
    LayoutPage,
    LayoutResult,
    Line,
    ParagraphBlock,
    TableBlock,
    block_from_dict,
)
from .tokens import Token, TokenDocument, TokenPage

__all__ = [
    "Token",
    "TokenPage",
    "TokenDocument",
    "Line",
    "BlockType",
    "HeaderBlock",
    "ParagraphBlock",
    "TableBlock",
    "Block",
    "block_from_dict",
    "LayoutPage",
    "LayoutResult",
]
