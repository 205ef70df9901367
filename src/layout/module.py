from __future__ import annotations

from collections import Counter
from typing import Any, Iterable

from contracts.layout import Block, LayoutPage, LayoutResult
from contracts.tokens import TokenDocument
from pdf_tokens.contracts import ExtractConfig
from pdf_tokens.module import run_extract_tokens_relpath

from .blocks import build_blocks_from_lines
from .config import LayoutConfig
from .lines import group_tokens_into_lines
from .normalize import normalize_tokens

_LAYOUT_VERSION = "text_layer_layout_v1"


def layout_page(raw_tokens: Iterable[Any], config: LayoutConfig) -> tuple[list[Block], dict[str, Any]]:
    """
    Run the full token -> line -> block reconstruction for one page.

    Returns: (blocks, page_meta). Total for any input: the worst case is an empty block list.
    """

    raw = list(raw_tokens)
    tokens, dropped = normalize_tokens(raw)
    lines = group_tokens_into_lines(tokens, y_tolerance=config.line_y_tolerance)
    blocks = build_blocks_from_lines(lines, config)

    by_type = Counter(b.type.value for b in blocks)
    page_meta: dict[str, Any] = {
        "counts": {
            "tokens_in": len(raw),
            "tokens_used": len(tokens),
            "lines": len(lines),
            "blocks": len(blocks),
            "headers": by_type.get("header", 0),
            "paragraphs": by_type.get("paragraph", 0),
            "tables": by_type.get("table", 0),
        },
        "dropped_tokens": dropped,
    }
    return blocks, page_meta


def layout_token_document(
    doc: TokenDocument,
    config: LayoutConfig,
    *,
    source_tokens_relpath: str | None = None,
) -> LayoutResult:
    config.validate()

    meta: dict[str, Any] = {
        "stage": "layout",
        "version": _LAYOUT_VERSION,
        "layout_config": config.to_dict(),
        "counts": {},
        "dropped_tokens": [],
        "source": dict(doc.meta),
    }
    if doc.error_details:
        meta["source"]["errors"] = [dict(e) for e in doc.error_details]

    pages: list[LayoutPage] = []
    for page in sorted(doc.pages, key=lambda p: p.page_num):
        blocks, page_meta = layout_page(page.tokens, config)
        pages.append(LayoutPage(page_num=page.page_num, blocks=blocks))
        meta["counts"][f"page_{page.page_num:03d}"] = page_meta["counts"]
        meta["dropped_tokens"].extend(
            {"page_num": page.page_num, **d} for d in page_meta["dropped_tokens"]
        )

    return LayoutResult(
        ok=doc.ok,
        errors=list(doc.errors),
        meta=meta,
        pages=pages,
        source_tokens_relpath=source_tokens_relpath,
        doc_id=doc.doc_id,
    )


def run_pdf_layout(
    *,
    extract_config: ExtractConfig,
    pdf_relpath: str,
    layout_config: LayoutConfig | None = None,
) -> LayoutResult:
    """
    PDF -> tokens -> blocks in one call.

    Extraction failures are carried through as ok=False with the extractor's error codes;
    pages extracted before a failure are still laid out.
    """

    extracted = run_extract_tokens_relpath(config=extract_config, pdf_relpath=pdf_relpath)
    return layout_token_document(extracted.to_token_document(), layout_config or LayoutConfig())
