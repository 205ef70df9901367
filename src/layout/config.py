from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LayoutConfig:
    """
    Heuristic thresholds for token -> line -> block reconstruction.

    Units are PDF user-space units (points); y grows upward.
    """

    # Lines: a token joins the first line whose representative y is within this distance.
    line_y_tolerance: float = 2.8

    # Columns: split threshold = max(min_column_gap, median positive gap * multiplier)
    column_gap_multiplier: float = 2.2
    min_column_gap: float = 10.0

    # Headers: reject len <= header_min_length; accept len <= header_max_length with
    # uppercase ratio > header_upper_ratio or a colon.
    header_min_length: int = 3
    header_max_length: int = 60
    header_upper_ratio: float = 0.65

    # Tables
    table_window_size: int = 25
    table_min_rows: int = 4
    table_min_best_freq: int = 3
    table_best_freq_ratio: float = 0.6

    # Paragraphs
    paragraph_max_lines: int = 8
    paragraph_break_cells: int = 3  # a line this wide ends a non-empty paragraph

    def validate(self) -> None:
        if self.line_y_tolerance < 0:
            raise ValueError("line_y_tolerance must be >= 0")
        if self.column_gap_multiplier <= 0:
            raise ValueError("column_gap_multiplier must be > 0")
        if self.min_column_gap < 0:
            raise ValueError("min_column_gap must be >= 0")
        if self.header_min_length < 0:
            raise ValueError("header_min_length must be >= 0")
        if self.header_max_length <= self.header_min_length:
            raise ValueError("header_max_length must be > header_min_length")
        if not (0.0 <= self.header_upper_ratio <= 1.0):
            raise ValueError("header_upper_ratio must be within [0, 1]")
        if self.table_window_size < 1:
            raise ValueError("table_window_size must be >= 1")
        if self.table_min_rows < 1:
            raise ValueError("table_min_rows must be >= 1")
        if self.table_min_best_freq < 1:
            raise ValueError("table_min_best_freq must be >= 1")
        if not (0.0 <= self.table_best_freq_ratio <= 1.0):
            raise ValueError("table_best_freq_ratio must be within [0, 1]")
        if self.paragraph_max_lines < 1:
            raise ValueError("paragraph_max_lines must be >= 1")
        if self.paragraph_break_cells < 2:
            raise ValueError("paragraph_break_cells must be >= 2")

    def __post_init__(self) -> None:
        self.validate()

    def to_dict(self) -> dict[str, float | int]:
        return {
            "line_y_tolerance": self.line_y_tolerance,
            "column_gap_multiplier": self.column_gap_multiplier,
            "min_column_gap": self.min_column_gap,
            "header_min_length": self.header_min_length,
            "header_max_length": self.header_max_length,
            "header_upper_ratio": self.header_upper_ratio,
            "table_window_size": self.table_window_size,
            "table_min_rows": self.table_min_rows,
            "table_min_best_freq": self.table_min_best_freq,
            "table_best_freq_ratio": self.table_best_freq_ratio,
            "paragraph_max_lines": self.paragraph_max_lines,
            "paragraph_break_cells": self.paragraph_break_cells,
        }
