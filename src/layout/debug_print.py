from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from contracts.layout import Block, HeaderBlock, LayoutResult, ParagraphBlock, TableBlock


def _load_json(p: Path) -> dict[str, Any]:
    return json.loads(p.read_text(encoding="utf-8"))


def render_block(b: Block) -> list[str]:
    if isinstance(b, HeaderBlock):
        return [f"# {b.text}"]
    if isinstance(b, ParagraphBlock):
        return [b.text]
    if isinstance(b, TableBlock):
        out = [f"[table rows={len(b.rows)} approx_row_count={b.approx_row_count}]"]
        out.extend(" | ".join(r) for r in b.rows)
        return out
    raise TypeError(f"Unknown block: {b!r}")


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="pdf-layout-debug-print")
    ap.add_argument("--layout", required=True, type=Path, help="Layout JSON artifact.")
    ap.add_argument("--max-blocks", type=int, default=0, help="If >0, truncate each page after N blocks.")
    args = ap.parse_args(argv)

    result = LayoutResult.from_dict(_load_json(args.layout))
    print(f"doc_id={result.doc_id or '<missing>'} ok={result.ok} errors={result.errors}")

    for page in result.pages:
        print(f"\n=== PAGE {page.page_num:03d} === blocks={len(page.blocks)}")
        for i, b in enumerate(page.blocks):
            if args.max_blocks and i >= args.max_blocks:
                print(f"... (truncated at {args.max_blocks})")
                break
            for text in render_block(b):
                print(text)
            print()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
