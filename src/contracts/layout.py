from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from .tokens import Token


class BlockType(str, Enum):
    HEADER = "header"
    PARAGRAPH = "paragraph"
    TABLE = "table"


@dataclass(frozen=True, slots=True)
class Line:
    y: float  # representative baseline (first token that opened the line)
    tokens: list[Token]  # ascending x

    def texts(self) -> list[str]:
        return [t.text for t in self.tokens]


@dataclass(frozen=True, slots=True)
class HeaderBlock:
    text: str

    @property
    def type(self) -> BlockType:
        return BlockType.HEADER

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "text": self.text}


@dataclass(frozen=True, slots=True)
class ParagraphBlock:
    text: str

    @property
    def type(self) -> BlockType:
        return BlockType.PARAGRAPH

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "text": self.text}


@dataclass(frozen=True, slots=True)
class TableBlock:
    rows: list[list[str]]  # uniform width, no all-empty row
    approx_row_count: int  # lookahead window length before empty rows were dropped

    @property
    def type(self) -> BlockType:
        return BlockType.TABLE

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "rows": [list(r) for r in self.rows],
            "approx_row_count": self.approx_row_count,
        }


Block = Union[HeaderBlock, ParagraphBlock, TableBlock]


def block_from_dict(d: dict[str, Any]) -> Block:
    block_type = BlockType(str(d.get("type")))
    if block_type == BlockType.HEADER:
        return HeaderBlock(text=str(d["text"]))
    if block_type == BlockType.PARAGRAPH:
        return ParagraphBlock(text=str(d["text"]))
    rows_raw = d.get("rows") or []
    if not isinstance(rows_raw, list):
        raise TypeError("TableBlock.rows must be a list")
    return TableBlock(
        rows=[[str(c) for c in r] for r in rows_raw],
        approx_row_count=int(d.get("approx_row_count", len(rows_raw))),
    )


@dataclass(frozen=True, slots=True)
class LayoutPage:
    page_num: int
    blocks: list[Block]

    def to_dict(self) -> dict[str, Any]:
        return {
            "page_num": self.page_num,
            "block_count": len(self.blocks),
            "blocks": [b.to_dict() for b in self.blocks],
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "LayoutPage":
        blocks_raw = d.get("blocks") or []
        return LayoutPage(page_num=int(d["page_num"]), blocks=[block_from_dict(b) for b in blocks_raw])


@dataclass(frozen=True, slots=True)
class LayoutResult:
    ok: bool
    errors: list[str]
    meta: dict[str, Any]  # config + version, counts, dropped tokens, source extraction meta
    pages: list[LayoutPage]
    source_tokens_relpath: str | None
    doc_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "ok": self.ok,
            "errors": list(self.errors),
            "meta": dict(self.meta),
            "pages": [p.to_dict() for p in self.pages],
            "source_tokens_relpath": self.source_tokens_relpath,
        }
        if self.doc_id is not None:
            out["doc_id"] = self.doc_id
        return out

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "LayoutResult":
        pages_raw = d.get("pages") or []
        return LayoutResult(
            ok=bool(d.get("ok", False)),
            errors=[str(x) for x in (d.get("errors") or [])],
            meta=dict(d.get("meta") or {}),
            pages=[LayoutPage.from_dict(p) for p in pages_raw],
            source_tokens_relpath=(
                None if d.get("source_tokens_relpath") is None else str(d.get("source_tokens_relpath"))
            ),
            doc_id=(None if d.get("doc_id") is None else str(d.get("doc_id"))),
        )
