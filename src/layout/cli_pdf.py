from __future__ import annotations

import argparse
import json
from pathlib import Path

from pdf_tokens.cli import config_from_args

from .artifacts import layout_summary, write_layout_json_artifact
from .cli import add_layout_config_args, layout_config_from_args
from .module import run_pdf_layout


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pdf-layout-doc",
        description="PDF -> text-layer tokens -> headers/paragraphs/tables, in one step.",
    )
    p.add_argument("--data-root", required=True, type=Path, help="Resolved DATA_ROOT path.")
    p.add_argument("--pdf-relpath", required=True, help="PDF path relative to --data-root.")
    p.add_argument("--output", required=True, type=Path, help="Path to write the layout JSON artifact.")
    p.add_argument("--max-pdf-bytes", type=int, default=40 * 1024 * 1024)
    p.add_argument("--timeout-s", type=float, default=60.0)
    p.add_argument("--page-selection", default=None)
    p.add_argument("--compute-source-sha256", action="store_true")
    p.add_argument("--record-timing", action="store_true")
    add_layout_config_args(p)
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    result = run_pdf_layout(
        extract_config=config_from_args(args),
        pdf_relpath=args.pdf_relpath,
        layout_config=layout_config_from_args(args),
    )
    write_layout_json_artifact(result=result, out_file=args.output)
    print(json.dumps(layout_summary(result), sort_keys=True, separators=(",", ":"), ensure_ascii=False))
    return 0 if result.ok else 2


if __name__ == "__main__":
    raise SystemExit(main())
