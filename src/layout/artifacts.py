from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from contracts.layout import BlockType, LayoutResult


def serialize_layout_result(result: LayoutResult) -> str:
    payload: dict[str, Any] = result.to_dict()
    return (
        json.dumps(payload, ensure_ascii=False, sort_keys=True, separators=(",", ":"), indent=2)
        + "\n"
    )


def write_layout_json_artifact(*, result: LayoutResult, out_file: Path) -> None:
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(serialize_layout_result(result), encoding="utf-8")


def layout_summary(result: LayoutResult) -> dict[str, Any]:
    blocks = [b for p in result.pages for b in p.blocks]
    return {
        "ok": result.ok,
        "pages": len(result.pages),
        "blocks": len(blocks),
        "tables": sum(1 for b in blocks if b.type == BlockType.TABLE),
        "errors": list(result.errors),
    }
