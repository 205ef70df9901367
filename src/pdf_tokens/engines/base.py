from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any


class TokenExtractionEngine(ABC):
    """
    Text-layer extraction backend.

    Engines must:
    - Emit positioned text fragments from the PDF's own text layer, in PDF user space (y up)
    - Be deterministic for a given input
    - Perform NO OCR, line grouping, layout inference, or filtering
    """

    @abstractmethod
    def backend_id(self) -> str:
        raise NotImplementedError

    def backend_version(self) -> str | None:
        return None

    @abstractmethod
    def get_page_count(self, *, pdf_file: Path) -> int:
        raise NotImplementedError

    @abstractmethod
    def extract_page_tokens(self, *, pdf_file: Path, page_num: int) -> list[dict[str, Any]]:
        """
        Return raw token dicts {"text", "x", "y", "width", "height"} for one 1-indexed page.
        """

        raise NotImplementedError
