from __future__ import annotations

import unittest

from contracts.tokens import Token
from layout.columns import column_gap_threshold, split_line_into_cells


def _tok(text: str, x: float, width: float = 10.0) -> Token:
    return Token(text=text, x=x, y=0.0, width=width)


class TestColumnSplitting(unittest.TestCase):
    def test_break_falls_on_the_wide_gap(self) -> None:
        tokens = [_tok("A", 0), _tok("B", 50), _tok("C", 200)]
        # Gaps are 40 and 140; a 0.5 multiplier puts the threshold at 70.
        self.assertEqual(column_gap_threshold(tokens, gap_multiplier=0.5, min_gap=10), 70)
        cells = split_line_into_cells(tokens, gap_multiplier=0.5, min_gap=10)
        self.assertEqual(cells, ["A B", "C"])

    def test_word_spacing_sets_the_threshold(self) -> None:
        tokens = [_tok("w1", 0, 20), _tok("w2", 25, 20), _tok("w3", 50, 20), _tok("w4", 75, 20), _tok("Total", 200, 30)]
        cells = split_line_into_cells(tokens, gap_multiplier=2.2, min_gap=10)
        self.assertEqual(cells, ["w1 w2 w3 w4", "Total"])

    def test_overlapping_tokens_stay_out_of_the_median(self) -> None:
        tokens = [_tok("a", 0, 20), _tok("b", 15, 20), _tok("c", 40), _tok("d", 100)]
        # Positive gaps [5, 50] -> upper median 50 -> threshold 110; counting the overlap as 0 would split.
        self.assertAlmostEqual(column_gap_threshold(tokens, gap_multiplier=2.2, min_gap=10), 110.0)
        self.assertEqual(split_line_into_cells(tokens, gap_multiplier=2.2, min_gap=10), ["a b c d"])

    def test_floor_applies_without_positive_gaps(self) -> None:
        tokens = [_tok("a", 0, 20), _tok("b", 10, 20)]
        self.assertEqual(column_gap_threshold(tokens, gap_multiplier=2.2, min_gap=10), 10)

    def test_single_and_empty_lines(self) -> None:
        self.assertEqual(split_line_into_cells([_tok("  lone   word ", 5)], gap_multiplier=2.2, min_gap=10), ["lone word"])
        self.assertEqual(split_line_into_cells([], gap_multiplier=2.2, min_gap=10), [""])


if __name__ == "__main__":
    unittest.main()
