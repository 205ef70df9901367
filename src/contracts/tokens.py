from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Token:
    text: str
    x: float
    y: float
    width: float = 0.0
    height: float = 0.0

    def right(self) -> float:
        return self.x + self.width

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Token":
        return Token(
            text=str(d["text"]),
            x=float(d["x"]),
            y=float(d["y"]),
            width=float(d.get("width") or 0.0),
            height=float(d.get("height") or 0.0),
        )


@dataclass(frozen=True, slots=True)
class TokenPage:
    page_num: int  # 1-indexed
    # Raw token candidates exactly as emitted by the extractor; cleaned by layout.normalize.
    tokens: list[dict[str, Any]]

    def to_dict(self) -> dict[str, Any]:
        return {"page_num": self.page_num, "tokens": [dict(t) for t in self.tokens]}

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "TokenPage":
        tokens_raw = d.get("tokens") or []
        if not isinstance(tokens_raw, list):
            raise TypeError("TokenPage.tokens must be a list")
        return TokenPage(page_num=int(d["page_num"]), tokens=list(tokens_raw))


@dataclass(frozen=True, slots=True)
class TokenDocument:
    doc_id: str | None
    ok: bool
    errors: list[str]
    meta: dict[str, Any]
    pages: list[TokenPage]
    source_pdf_relpath: str | None
    # Full {code, message, detail} records when the producer emitted them; `errors` keeps the codes.
    error_details: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "doc_id": self.doc_id,
            "ok": self.ok,
            "errors": list(self.errors),
            "meta": dict(self.meta),
            "pages": [p.to_dict() for p in self.pages],
            "source_pdf_relpath": self.source_pdf_relpath,
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "TokenDocument":
        pages_raw = d.get("pages") or []
        if not isinstance(pages_raw, list):
            raise TypeError("TokenDocument.pages must be a list")

        # Extraction artifacts emit errors as {code, message, detail}; codes go to `errors`, the
        # full records to `error_details`.
        errors_raw = d.get("errors") or []
        if not isinstance(errors_raw, list):
            raise TypeError("TokenDocument.errors must be a list")

        errors: list[str] = []
        details: list[dict[str, Any]] = []
        for e in errors_raw:
            if isinstance(e, str):
                errors.append(e)
            elif isinstance(e, dict):
                if "code" not in e:
                    raise TypeError("TokenDocument.errors dict entries must include 'code'")
                errors.append(str(e["code"]))
                details.append(dict(e))
            else:
                raise TypeError("TokenDocument.errors entries must be str or dict-with-code")

        return TokenDocument(
            doc_id=(None if d.get("doc_id") is None else str(d.get("doc_id"))),
            ok=bool(d.get("ok", False)),
            errors=errors,
            meta=dict(d.get("meta") or {}),
            pages=[TokenPage.from_dict(p) for p in pages_raw],
            source_pdf_relpath=(
                None if d.get("source_pdf_relpath") is None else str(d.get("source_pdf_relpath"))
            ),
            error_details=details,
        )
