from __future__ import annotations

import ctypes
from pathlib import Path
from typing import Any

from .base import TokenExtractionEngine


class Pypdfium2Engine(TokenExtractionEngine):
    def backend_id(self) -> str:
        return "pypdfium2"

    def backend_version(self) -> str | None:
        try:
            import pypdfium2 as pdfium  # type: ignore

            return getattr(pdfium, "__version__", None)
        except ImportError:
            return None

    def _require_pdfium(self):
        try:
            import pypdfium2 as pdfium  # type: ignore

            return pdfium
        except ImportError as e:
            raise RuntimeError(
                "Missing dependency: pypdfium2 is required for text-layer extraction."
            ) from e

    def get_page_count(self, *, pdf_file: Path) -> int:
        pdfium = self._require_pdfium()
        doc = pdfium.PdfDocument(str(pdf_file))
        try:
            return len(doc)
        finally:
            doc.close()

    def extract_page_tokens(self, *, pdf_file: Path, page_num: int) -> list[dict[str, Any]]:
        pdfium = self._require_pdfium()
        doc = pdfium.PdfDocument(str(pdf_file))
        try:
            page_count = len(doc)
            if page_num < 1 or page_num > page_count:
                raise ValueError(f"Page out of range: {page_num} (1..{page_count})")

            page = doc[page_num - 1]
            textpage = page.get_textpage()
            try:
                # Each rect is one text object's run on a single baseline, the closest analogue
                # of a PDF text-show fragment.
                tokens: list[dict[str, Any]] = []
                for i in range(textpage.count_rects()):
                    left, bottom, right, top = textpage.get_rect(i)
                    text = textpage.get_text_bounded(left=left, bottom=bottom, right=right, top=top)
                    x, y = _run_origin(textpage, left, bottom, right, top)
                    tokens.append(
                        {
                            "text": text,
                            "x": x,
                            "y": y,
                            "width": float(right - x),
                            "height": float(top - bottom),
                        }
                    )
                return tokens
            finally:
                textpage.close()
                page.close()
        finally:
            doc.close()


def _run_origin(textpage, left: float, bottom: float, right: float, top: float) -> tuple[float, float]:
    """
    Baseline origin of the first glyph in a text rect.

    The rect itself is a glyph box, so its bottom moves with descenders; the origin does not.
    Falls back to the box's lower-left corner when no glyph is found at the rect's left edge.
    """

    import pypdfium2.raw as pdfium_c  # type: ignore

    x_tol = max(1.0, min(2.0, (right - left) / 2))
    y_tol = max(1.0, (top - bottom) / 2 + 1)
    index = textpage.get_index(left + 0.5, (bottom + top) / 2, x_tol, y_tol)
    if index is None or index < 0:
        return float(left), float(bottom)

    ox = ctypes.c_double()
    oy = ctypes.c_double()
    if not pdfium_c.FPDFText_GetCharOrigin(textpage.raw, index, ctypes.byref(ox), ctypes.byref(oy)):
        return float(left), float(bottom)
    return float(ox.value), float(oy.value)
