"""
PDF text-layer token extraction.

Turns a PDF under an explicit data root into per-page raw tokens (text + baseline position):
- It reads the document's own text layer; it performs NO OCR.
- It does no line grouping or layout inference; that is the `layout` package's job.
- It enforces the input guards (extension, signature, size cap) and a soft per-page deadline.
"""

from .contracts import (
    ExtractConfig,
    ExtractedPage,
    ExtractEngineName,
    ExtractError,
    TokenExtractionResult,
)
from .module import parse_page_selection, run_extract_tokens_relpath

__all__ = [
    "ExtractConfig",
    "ExtractedPage",
    "ExtractEngineName",
    "ExtractError",
    "TokenExtractionResult",
    "parse_page_selection",
    "run_extract_tokens_relpath",
]
