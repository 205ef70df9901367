from __future__ import annotations

from contracts.layout import Block, HeaderBlock, Line, ParagraphBlock, TableBlock

from .columns import split_line_into_cells
from .config import LayoutConfig
from .headers import is_probably_header
from .normalize import normalize_spaces
from .tables import looks_like_table, pad_table_rows


def _full_text(cells: list[str]) -> str:
    return normalize_spaces(" ".join(cells))


def line_cells(lines: list[Line], config: LayoutConfig) -> list[list[str]]:
    return [
        split_line_into_cells(
            ln.tokens,
            gap_multiplier=config.column_gap_multiplier,
            min_gap=config.min_column_gap,
        )
        for ln in lines
    ]


def _table_window(cells: list[list[str]], start: int, config: LayoutConfig) -> list[list[str]]:
    # The window stops before the next header-like line so a table never swallows a section title.
    stop = min(len(cells), start + config.table_window_size)
    window: list[list[str]] = []
    for k in range(start, stop):
        if k > start and is_probably_header(_full_text(cells[k]), config):
            break
        window.append(cells[k])
    return window


def _collect_paragraph(cells: list[list[str]], start: int, config: LayoutConfig) -> tuple[str, int]:
    """
    Accumulate paragraph lines from `start`.

    Returns: (text, next_index). next_index may equal start; the caller guarantees progress.
    """

    para: list[str] = []
    j = start
    while j < len(cells):
        t = _full_text(cells[j])
        if not t:
            j += 1
            continue
        if para and is_probably_header(t, config):
            break
        # A wide line is left for the next iteration, which may open a table there.
        if para and len(cells[j]) >= config.paragraph_break_cells:
            break
        para.append(t)
        j += 1
        if len(para) >= config.paragraph_max_lines:
            break
    return normalize_spaces(" ".join(para)), j


def build_blocks_from_cells(cells: list[list[str]], config: LayoutConfig) -> list[Block]:
    """
    Assemble per-line cell arrays (page order, top first) into header, table and paragraph
    blocks. Content is grouped, never reordered.
    """

    blocks: list[Block] = []
    i = 0
    while i < len(cells):
        text = _full_text(cells[i])
        if not text:
            i += 1
            continue

        if is_probably_header(text, config):
            blocks.append(HeaderBlock(text=text))
            i += 1
            continue

        window = _table_window(cells, i, config)
        if looks_like_table(window, config):
            blocks.append(TableBlock(rows=pad_table_rows(window), approx_row_count=len(window)))
            i += len(window)
            continue

        para_text, j = _collect_paragraph(cells, i, config)
        blocks.append(ParagraphBlock(text=para_text))
        i = max(j, i + 1)

    return blocks


def build_blocks_from_lines(lines: list[Line], config: LayoutConfig) -> list[Block]:
    return build_blocks_from_cells(line_cells(lines, config), config)
