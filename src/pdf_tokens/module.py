from __future__ import annotations

import hashlib
import json
import re
import time
from pathlib import Path
from typing import Any

from .contracts import (
    ExtractConfig,
    ExtractedPage,
    ExtractEngineName,
    ExtractError,
    TokenExtractionResult,
)
from .data_access import DataAccessError, has_pdf_signature, resolve_under_data_root, sha256_file
from .engines import Pypdfium2Engine, TokenExtractionEngine

_EXTRACT_MODE = "pdf_text_layer"


def _monotonic() -> float:
    return time.monotonic()


def _safe_pdf_stem(pdf_relpath: str) -> str:
    """
    Deterministic, filesystem-safe stem for readability.
    """
    s = pdf_relpath.replace("\\", "/").split("/")[-1]
    if s.lower().endswith(".pdf"):
        s = s[: -len(".pdf")]
    s = re.sub(r"[^A-Za-z0-9._-]+", "_", s)
    s = re.sub(r"_+", "_", s).strip("_")
    return s or "pdf"


def _canonical_page_selection(selection: str | None) -> str:
    if selection is None:
        return "all"
    s = "".join(selection.split())
    return s if s != "" else "all"


def _compute_doc_id(*, source_pdf_relpath: str, backend_id: str, page_selection: str | None) -> str:
    payload = {
        "source_pdf_relpath": source_pdf_relpath.replace("\\", "/"),
        "backend": backend_id,
        "page_selection": _canonical_page_selection(page_selection),
    }
    s = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    digest = hashlib.sha256(s.encode("utf-8")).hexdigest()
    return f"{_safe_pdf_stem(source_pdf_relpath)}_{digest[:12]}"


def parse_page_selection(selection: str | None, *, page_count: int) -> list[int]:
    """
    Parse "1,3-5" into a sorted list of unique 1-indexed page numbers.
    None or blank => all pages.
    """

    if selection is None or selection.strip() == "":
        return list(range(1, page_count + 1))

    pages: set[int] = set()
    for part in selection.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            a_str, b_str = part.split("-", 1)
            a = int(a_str.strip())
            b = int(b_str.strip())
            if a <= 0 or b <= 0:
                raise ValueError("page numbers must be >= 1")
            if b < a:
                raise ValueError(f"invalid range: {part!r}")
            pages.update(range(a, b + 1))
        else:
            p = int(part)
            if p <= 0:
                raise ValueError("page numbers must be >= 1")
            pages.add(p)

    ordered = sorted(pages)
    if ordered and ordered[-1] > page_count:
        raise ValueError(f"page selection out of bounds (1..{page_count})")
    return ordered


def _get_engine(engine: ExtractEngineName) -> TokenExtractionEngine:
    if engine == ExtractEngineName.PYPDFIUM2:
        return Pypdfium2Engine()
    raise ValueError(f"Unsupported extraction engine: {engine}")


def run_extract_tokens_relpath(*, config: ExtractConfig, pdf_relpath: str) -> TokenExtractionResult:
    """
    Extract raw positioned tokens, page by page, from a PDF under `config.data_root`.

    Never raises for bad input: every failure becomes ok=False with one coded error. Pages
    extracted before a deadline or backend failure are kept in the result.
    """

    started = _monotonic()
    engine = _get_engine(config.engine)
    doc_id = _compute_doc_id(
        source_pdf_relpath=pdf_relpath,
        backend_id=engine.backend_id(),
        page_selection=config.page_selection,
    )
    meta: dict[str, Any] = {
        "mode": _EXTRACT_MODE,
        "ocr_used": False,
        "backend": engine.backend_id(),
        "backend_version": engine.backend_version(),
        "page_selection": _canonical_page_selection(config.page_selection),
    }

    def _result(
        *, ok: bool, pages: list[ExtractedPage], errors: list[ExtractError]
    ) -> TokenExtractionResult:
        if config.record_timing:
            meta["timing_ms"] = int((_monotonic() - started) * 1000)
        return TokenExtractionResult(
            doc_id=doc_id,
            ok=ok,
            engine=config.engine,
            source_pdf_relpath=pdf_relpath,
            pages=sorted(pages, key=lambda p: p.page_num),
            errors=errors,
            meta=meta,
        )

    def _failed(
        code: str, message: str, detail: dict[str, Any], pages: list[ExtractedPage] | None = None
    ) -> TokenExtractionResult:
        error = ExtractError(code=code, message=message, detail=detail)
        return _result(ok=False, pages=pages or [], errors=[error])

    if not pdf_relpath.lower().endswith(".pdf"):
        return _failed(
            "EXTRACT_INPUT_NOT_PDF",
            "Only PDFs are accepted (by .pdf extension)",
            {"pdf_relpath": pdf_relpath},
        )

    try:
        pdf_file = resolve_under_data_root(data_root=config.data_root, relpath=pdf_relpath)
    except DataAccessError as e:
        return _failed(
            "EXTRACT_DATA_ACCESS_ERROR",
            str(e),
            {"data_root": str(config.data_root), "relpath": pdf_relpath},
        )

    if not pdf_file.is_file():
        return _failed("EXTRACT_INPUT_NOT_FOUND", "Input PDF not found", {"source_pdf_relpath": pdf_relpath})

    try:
        size = pdf_file.stat().st_size
        signed = has_pdf_signature(pdf_file)
    except OSError as e:
        return _failed(
            "EXTRACT_INPUT_UNREADABLE",
            "Input PDF could not be read",
            {"source_pdf_relpath": pdf_relpath, "error": repr(e)},
        )
    meta["bytes"] = size
    if size > config.max_pdf_bytes:
        return _failed(
            "EXTRACT_PDF_TOO_LARGE",
            "PDF too large",
            {"max_bytes": config.max_pdf_bytes, "content_length": size},
        )

    if not signed:
        return _failed(
            "EXTRACT_INPUT_NOT_PDF_CONTENT",
            "File does not carry a %PDF signature",
            {"source_pdf_relpath": pdf_relpath},
        )

    if config.compute_source_sha256:
        try:
            meta["source_sha256"] = sha256_file(pdf_file)
        except OSError as e:
            return _failed(
                "EXTRACT_INPUT_UNREADABLE",
                "Input PDF could not be read",
                {"source_pdf_relpath": pdf_relpath, "error": repr(e)},
            )

    try:
        page_count = engine.get_page_count(pdf_file=pdf_file)
    except Exception as e:
        return _failed(
            "EXTRACT_BACKEND_PAGECOUNT_FAILED",
            "Failed to read PDF page count",
            {"error": repr(e)},
        )
    meta["page_count"] = page_count

    try:
        pages_to_extract = parse_page_selection(config.page_selection, page_count=page_count)
    except ValueError as e:
        return _failed(
            "EXTRACT_BAD_PAGE_SELECTION",
            "Invalid page_selection",
            {"page_selection": config.page_selection, "error": str(e)},
        )

    deadline = started + config.timeout_s
    pages: list[ExtractedPage] = []
    for page_num in pages_to_extract:
        if _monotonic() > deadline:
            return _failed(
                "EXTRACT_TIMED_OUT",
                "Extraction timed out",
                {"processed_pages": len(pages), "page_count": page_count, "timeout_s": config.timeout_s},
                pages,
            )
        try:
            tokens = engine.extract_page_tokens(pdf_file=pdf_file, page_num=page_num)
        except Exception as e:
            return _failed(
                "EXTRACT_BACKEND_PAGE_FAILED",
                "Text extraction failed",
                {"page_num": page_num, "error": repr(e)},
                pages,
            )
        pages.append(ExtractedPage(page_num=page_num, tokens=list(tokens)))

    meta["processed_pages"] = len(pages)
    return _result(ok=True, pages=pages, errors=[])
