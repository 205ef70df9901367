from __future__ import annotations

import argparse
import json
from pathlib import Path

from contracts.tokens import TokenDocument

from .artifacts import layout_summary, write_layout_json_artifact
from .config import LayoutConfig
from .module import layout_token_document


def add_layout_config_args(p: argparse.ArgumentParser) -> None:
    d = LayoutConfig()
    p.add_argument("--line-y-tolerance", type=float, default=d.line_y_tolerance)
    p.add_argument("--column-gap-multiplier", type=float, default=d.column_gap_multiplier)
    p.add_argument("--min-column-gap", type=float, default=d.min_column_gap)
    p.add_argument("--header-min-length", type=int, default=d.header_min_length)
    p.add_argument("--header-max-length", type=int, default=d.header_max_length)
    p.add_argument("--header-upper-ratio", type=float, default=d.header_upper_ratio)
    p.add_argument("--table-window-size", type=int, default=d.table_window_size)
    p.add_argument("--table-min-rows", type=int, default=d.table_min_rows)
    p.add_argument("--table-min-best-freq", type=int, default=d.table_min_best_freq)
    p.add_argument("--table-best-freq-ratio", type=float, default=d.table_best_freq_ratio)
    p.add_argument("--paragraph-max-lines", type=int, default=d.paragraph_max_lines)
    p.add_argument("--paragraph-break-cells", type=int, default=d.paragraph_break_cells)


def layout_config_from_args(args: argparse.Namespace) -> LayoutConfig:
    return LayoutConfig(
        line_y_tolerance=args.line_y_tolerance,
        column_gap_multiplier=args.column_gap_multiplier,
        min_column_gap=args.min_column_gap,
        header_min_length=args.header_min_length,
        header_max_length=args.header_max_length,
        header_upper_ratio=args.header_upper_ratio,
        table_window_size=args.table_window_size,
        table_min_rows=args.table_min_rows,
        table_min_best_freq=args.table_min_best_freq,
        table_best_freq_ratio=args.table_best_freq_ratio,
        paragraph_max_lines=args.paragraph_max_lines,
        paragraph_break_cells=args.paragraph_break_cells,
    )


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="pdf-layout",
        description="Reconstruct headers, paragraphs and tables from a token JSON artifact.",
    )
    p.add_argument("--input", required=True, type=Path, help="Path to the token JSON artifact.")
    p.add_argument("--output", required=True, type=Path, help="Path to write the layout JSON artifact.")
    add_layout_config_args(p)
    return p


def main(argv: list[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)

    raw = json.loads(args.input.read_text(encoding="utf-8"))
    doc = TokenDocument.from_dict(raw)

    result = layout_token_document(doc, layout_config_from_args(args), source_tokens_relpath=str(args.input))
    write_layout_json_artifact(result=result, out_file=args.output)

    print(json.dumps(layout_summary(result), sort_keys=True, separators=(",", ":"), ensure_ascii=False))
    return 0 if result.ok else 2


if __name__ == "__main__":
    raise SystemExit(main())
