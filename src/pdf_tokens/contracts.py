from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from contracts.tokens import TokenDocument, TokenPage


class ExtractEngineName(str, Enum):
    """
    Text-layer backend identifiers.
    """

    PYPDFIUM2 = "pypdfium2"


@dataclass(frozen=True, slots=True)
class ExtractError:
    code: str
    message: str
    detail: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class ExtractedPage:
    page_num: int  # 1-indexed
    tokens: list[dict[str, Any]]  # {"text", "x", "y", "width", "height"}, extractor order


@dataclass(frozen=True, slots=True)
class TokenExtractionResult:
    # Stable for identical (source_pdf_relpath + backend identifier + page selection).
    doc_id: str
    ok: bool
    engine: ExtractEngineName
    source_pdf_relpath: str
    pages: list[ExtractedPage]
    errors: list[ExtractError]
    meta: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_token_document(self) -> TokenDocument:
        return TokenDocument(
            doc_id=self.doc_id,
            ok=self.ok,
            errors=[e.code for e in self.errors],
            error_details=[asdict(e) for e in self.errors],
            meta=dict(self.meta),
            pages=[TokenPage(page_num=p.page_num, tokens=list(p.tokens)) for p in self.pages],
            source_pdf_relpath=self.source_pdf_relpath,
        )


@dataclass(frozen=True, slots=True)
class ExtractConfig:
    """
    Token extraction configuration.

    `data_root` must be passed explicitly; nothing here reads environment variables.
    `timeout_s` is a soft budget checked before each page, not a hard interrupt.
    """

    data_root: Path
    engine: ExtractEngineName = ExtractEngineName.PYPDFIUM2
    max_pdf_bytes: int = 40 * 1024 * 1024
    timeout_s: float = 60.0
    page_selection: str | None = None  # e.g. "1,3-5"; None => all pages
    compute_source_sha256: bool = False
    record_timing: bool = False  # timing_ms makes artifacts non-reproducible, so it is opt-in

    def __post_init__(self) -> None:
        if not isinstance(self.data_root, Path):
            raise TypeError("data_root must be pathlib.Path")
        if self.max_pdf_bytes <= 0:
            raise ValueError("max_pdf_bytes must be a positive integer")
        if self.timeout_s <= 0:
            raise ValueError("timeout_s must be > 0")
