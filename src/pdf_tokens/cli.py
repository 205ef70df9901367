from __future__ import annotations

import argparse
import json
from pathlib import Path

from .artifacts import write_tokens_json
from .contracts import ExtractConfig
from .module import run_extract_tokens_relpath


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pdf-layout-tokens",
        description="Extract positioned text tokens from a PDF text layer into a JSON artifact.",
    )
    p.add_argument("--data-root", required=True, type=Path, help="Resolved DATA_ROOT path.")
    p.add_argument("--pdf-relpath", required=True, help="PDF path relative to --data-root.")
    p.add_argument("--output", required=True, type=Path, help="Output token JSON file.")
    p.add_argument("--max-pdf-bytes", type=int, default=40 * 1024 * 1024, help="Reject larger files.")
    p.add_argument("--timeout-s", type=float, default=60.0, help="Soft extraction budget, checked per page.")
    p.add_argument(
        "--page-selection",
        default=None,
        help='Optional page selection like "1,3-5". Default: all pages.',
    )
    p.add_argument(
        "--compute-source-sha256",
        action="store_true",
        help="Include SHA-256 of the source PDF in meta for auditing.",
    )
    p.add_argument("--record-timing", action="store_true", help="Include timing_ms in meta.")
    return p


def config_from_args(args: argparse.Namespace) -> ExtractConfig:
    return ExtractConfig(
        data_root=args.data_root,
        max_pdf_bytes=args.max_pdf_bytes,
        timeout_s=args.timeout_s,
        page_selection=args.page_selection,
        compute_source_sha256=args.compute_source_sha256,
        record_timing=args.record_timing,
    )


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)

    result = run_extract_tokens_relpath(config=config_from_args(args), pdf_relpath=args.pdf_relpath)
    write_tokens_json(result=result, out_file=args.output)

    summary = {
        "ok": result.ok,
        "doc_id": result.doc_id,
        "pages": len(result.pages),
        "tokens": sum(len(p.tokens) for p in result.pages),
        "errors": [e.code for e in result.errors],
    }
    print(json.dumps(summary, sort_keys=True, separators=(",", ":"), ensure_ascii=False))

    return 0 if result.ok else 2


if __name__ == "__main__":
    raise SystemExit(main())
