from __future__ import annotations

import random
import unittest

from contracts.layout import HeaderBlock, ParagraphBlock, TableBlock
from contracts.tokens import Token
from layout.blocks import build_blocks_from_cells
from layout.config import LayoutConfig
from layout.module import layout_page


def _table_row_tokens(r: int, y: float) -> list[Token]:
    # Three two-word cells; word gaps of 2-3 units, column gaps above 100.
    return [
        Token(text="item", x=50, y=y, width=20),
        Token(text=f"n{r}", x=73, y=y, width=15),
        Token(text=str(r), x=200, y=y, width=10),
        Token(text="kg", x=212, y=y + 0.4, width=10),
        Token(text=f"{r}.50", x=350, y=y, width=20),
        Token(text="USD", x=372, y=y, width=20),
    ]


def _price_list_page() -> list[Token]:
    tokens = [
        Token(text="PRICE", x=50, y=730, width=40),
        Token(text="LIST", x=95, y=730, width=30),
    ]
    for r in range(1, 6):
        tokens.extend(_table_row_tokens(r, 700 - (r - 1) * 12))
    tokens.append(Token(text="NOTES:", x=50, y=600, width=40))
    tokens.extend(
        [
            Token(text="prices", x=50, y=588, width=35),
            Token(text="include", x=88, y=588, width=40),
            Token(text="tax", x=131, y=588, width=18),
        ]
    )
    return tokens


class TestBlockAssemblyFromCells(unittest.TestCase):
    def setUp(self) -> None:
        self.cfg = LayoutConfig()

    def test_header_then_paragraph(self) -> None:
        blocks = build_blocks_from_cells([["INTRODUCTION"], ["Some text here"]], self.cfg)
        self.assertEqual(blocks, [HeaderBlock(text="INTRODUCTION"), ParagraphBlock(text="Some text here")])

    def test_paragraph_cap_splits_long_runs(self) -> None:
        cells = [[f"body line number {i}"] for i in range(10)]
        blocks = build_blocks_from_cells(cells, self.cfg)
        self.assertEqual(
            blocks,
            [
                ParagraphBlock(text=" ".join(f"body line number {i}" for i in range(8))),
                ParagraphBlock(text="body line number 8 body line number 9"),
            ],
        )

    def test_table_window_stops_at_header_and_pads_rows(self) -> None:
        cells = [
            ["Name", "Qty", "Price"],
            ["apple", "1", "0.50"],
            ["pear", "2", "1.25"],
            ["plum", "3", "0.75"],
            ["fig", "4"],
            [""],
            ["NOTES"],
            ["see attached list"],
        ]
        blocks = build_blocks_from_cells(cells, self.cfg)
        self.assertEqual(
            blocks,
            [
                TableBlock(
                    rows=[
                        ["Name", "Qty", "Price"],
                        ["apple", "1", "0.50"],
                        ["pear", "2", "1.25"],
                        ["plum", "3", "0.75"],
                        ["fig", "4", ""],
                    ],
                    approx_row_count=6,
                ),
                HeaderBlock(text="NOTES"),
                ParagraphBlock(text="see attached list"),
            ],
        )

    def test_wide_line_ends_paragraph(self) -> None:
        cells = [["intro text"], ["more text"], ["a", "b", "c"], ["d", "e", "f"]]
        blocks = build_blocks_from_cells(cells, self.cfg)
        self.assertEqual(
            blocks,
            [
                ParagraphBlock(text="intro text more text"),
                ParagraphBlock(text="a b c"),
                ParagraphBlock(text="d e f"),
            ],
        )

    def test_blank_lines_are_skipped(self) -> None:
        blocks = build_blocks_from_cells([[""], ["hello world"], [""], ["again here"]], self.cfg)
        self.assertEqual(blocks, [ParagraphBlock(text="hello world again here")])

    def test_always_makes_progress(self) -> None:
        cfg = LayoutConfig(paragraph_max_lines=1)
        cells = [[f"line {i}"] for i in range(5)]
        blocks = build_blocks_from_cells(cells, cfg)
        self.assertEqual(blocks, [ParagraphBlock(text=f"line {i}") for i in range(5)])

    def test_empty_page(self) -> None:
        self.assertEqual(build_blocks_from_cells([], self.cfg), [])
        self.assertEqual(build_blocks_from_cells([[""], [""]], self.cfg), [])


class TestLayoutPage(unittest.TestCase):
    def test_price_list_page(self) -> None:
        blocks, meta = layout_page([t.to_dict() for t in _price_list_page()], LayoutConfig())

        self.assertEqual(
            blocks,
            [
                HeaderBlock(text="PRICE LIST"),
                TableBlock(
                    rows=[[f"item n{r}", f"{r} kg", f"{r}.50 USD"] for r in range(1, 6)],
                    approx_row_count=5,
                ),
                HeaderBlock(text="NOTES:"),
                ParagraphBlock(text="prices include tax"),
            ],
        )
        self.assertEqual(meta["counts"]["lines"], 8)
        self.assertEqual(meta["counts"]["tables"], 1)
        self.assertEqual(meta["dropped_tokens"], [])

    def test_identical_input_gives_identical_blocks(self) -> None:
        tokens = _price_list_page()
        shuffled = list(tokens)
        random.Random(7).shuffle(shuffled)
        a, _ = layout_page(tokens, LayoutConfig())
        b, _ = layout_page(tokens, LayoutConfig())
        c, _ = layout_page(shuffled, LayoutConfig())
        self.assertEqual(a, b)
        self.assertEqual(a, c)

    def test_table_rows_have_uniform_width(self) -> None:
        blocks, _ = layout_page(_price_list_page(), LayoutConfig())
        for b in blocks:
            if isinstance(b, TableBlock):
                widths = {len(r) for r in b.rows}
                self.assertEqual(widths, {3})
                self.assertTrue(all(any(c for c in r) for r in b.rows))

    def test_degenerate_input_never_raises(self) -> None:
        blocks, meta = layout_page([None, {"text": "", "x": 1, "y": 1}, {"text": "x", "x": "?", "y": 0}], LayoutConfig())
        self.assertEqual(blocks, [])
        self.assertEqual(meta["counts"]["tokens_in"], 3)
        self.assertEqual(meta["counts"]["tokens_used"], 0)


if __name__ == "__main__":
    unittest.main()
