from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from typing import Any
from unittest.mock import patch

from pdf_tokens.artifacts import serialize_extraction_result
from pdf_tokens.contracts import ExtractConfig, TokenExtractionResult
from pdf_tokens.module import parse_page_selection, run_extract_tokens_relpath


class _FakeEngine:
    def __init__(self, page_count: int = 2, fail_on_page: int | None = None) -> None:
        self.page_count = page_count
        self.fail_on_page = fail_on_page

    def backend_id(self) -> str:
        return "fake_backend"

    def backend_version(self) -> str | None:
        return "0"

    def get_page_count(self, *, pdf_file: Path) -> int:
        return self.page_count

    def extract_page_tokens(self, *, pdf_file: Path, page_num: int) -> list[dict[str, Any]]:
        if page_num == self.fail_on_page:
            raise RuntimeError("corrupt content stream")
        return [
            {"text": f"PAGE {page_num}", "x": 40.0, "y": 760.0, "width": 50.0, "height": 12.0},
            {"text": "body text", "x": 40.0, "y": 740.0, "width": 60.0, "height": 10.0},
        ]


class TestExtractTokens(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.data_root = Path(self._tmp.name)
        (self.data_root / "input.pdf").write_bytes(b"%PDF-1.4 fake\n")
        (self.data_root / "renamed.pdf").write_bytes(b"PK\x03\x04 not a pdf")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, relpath: str = "input.pdf", engine: _FakeEngine | None = None, **cfg: Any) -> TokenExtractionResult:
        config = ExtractConfig(data_root=self.data_root, **cfg)
        with patch("pdf_tokens.module._get_engine", return_value=engine or _FakeEngine()):
            return run_extract_tokens_relpath(config=config, pdf_relpath=relpath)

    def test_result_bytes_stable_across_runs(self) -> None:
        r1 = self._run()
        r2 = self._run()

        self.assertTrue(r1.ok)
        self.assertEqual(serialize_extraction_result(r1), serialize_extraction_result(r2))

        d = json.loads(serialize_extraction_result(r1))
        self.assertTrue(d["doc_id"].startswith("input_"))
        self.assertEqual([p["page_num"] for p in d["pages"]], [1, 2])
        self.assertEqual(d["pages"][0]["tokens"][0]["text"], "PAGE 1")
        self.assertEqual(d["meta"]["page_count"], 2)
        self.assertEqual(d["meta"]["bytes"], len(b"%PDF-1.4 fake\n"))
        self.assertEqual(d["meta"]["mode"], "pdf_text_layer")
        self.assertFalse(d["meta"]["ocr_used"])
        self.assertNotIn("timing_ms", d["meta"])

    def test_page_selection(self) -> None:
        r = self._run(page_selection="2")
        self.assertTrue(r.ok)
        self.assertEqual([p.page_num for p in r.pages], [2])

        bad = self._run(page_selection="5")
        self.assertFalse(bad.ok)
        self.assertEqual([e.code for e in bad.errors], ["EXTRACT_BAD_PAGE_SELECTION"])

    def test_input_guards(self) -> None:
        cases = [
            ("input.txt", {}, "EXTRACT_INPUT_NOT_PDF"),
            ("../outside.pdf", {}, "EXTRACT_DATA_ACCESS_ERROR"),
            ("missing.pdf", {}, "EXTRACT_INPUT_NOT_FOUND"),
            ("input.pdf", {"max_pdf_bytes": 4}, "EXTRACT_PDF_TOO_LARGE"),
            ("renamed.pdf", {}, "EXTRACT_INPUT_NOT_PDF_CONTENT"),
        ]
        for relpath, cfg, code in cases:
            with self.subTest(code=code):
                r = self._run(relpath, **cfg)
                self.assertFalse(r.ok)
                self.assertEqual([e.code for e in r.errors], [code])
                self.assertEqual(r.pages, [])

        too_large = self._run(max_pdf_bytes=4)
        self.assertEqual(too_large.errors[0].detail, {"max_bytes": 4, "content_length": 14})

    def test_unreadable_input(self) -> None:
        with patch("pdf_tokens.module.has_pdf_signature", side_effect=PermissionError("denied")):
            r = self._run()
        self.assertFalse(r.ok)
        self.assertEqual([e.code for e in r.errors], ["EXTRACT_INPUT_UNREADABLE"])
        self.assertEqual(r.errors[0].detail["source_pdf_relpath"], "input.pdf")
        self.assertEqual(r.pages, [])

        with patch("pdf_tokens.module.sha256_file", side_effect=OSError("gone")):
            r = self._run(compute_source_sha256=True)
        self.assertEqual([e.code for e in r.errors], ["EXTRACT_INPUT_UNREADABLE"])

    def test_deadline_keeps_processed_pages(self) -> None:
        clock = iter([0.0, 0.0, 100.0])
        with patch("pdf_tokens.module._monotonic", side_effect=lambda: next(clock)):
            r = self._run(timeout_s=60.0)

        self.assertFalse(r.ok)
        self.assertEqual([e.code for e in r.errors], ["EXTRACT_TIMED_OUT"])
        self.assertEqual(r.errors[0].detail["processed_pages"], 1)
        self.assertEqual(r.errors[0].detail["page_count"], 2)
        self.assertEqual([p.page_num for p in r.pages], [1])

        doc = r.to_token_document()
        self.assertEqual(doc.errors, ["EXTRACT_TIMED_OUT"])
        self.assertEqual(doc.error_details[0]["detail"]["processed_pages"], 1)

    def test_backend_failure_keeps_processed_pages(self) -> None:
        r = self._run(engine=_FakeEngine(page_count=3, fail_on_page=2))
        self.assertFalse(r.ok)
        self.assertEqual([e.code for e in r.errors], ["EXTRACT_BACKEND_PAGE_FAILED"])
        self.assertEqual(r.errors[0].detail["page_num"], 2)
        self.assertEqual([p.page_num for p in r.pages], [1])

    def test_token_document_view(self) -> None:
        doc = self._run().to_token_document()
        self.assertTrue(doc.ok)
        self.assertEqual(doc.source_pdf_relpath, "input.pdf")
        self.assertEqual(len(doc.pages[1].tokens), 2)

    def test_config_validation(self) -> None:
        with self.assertRaises(ValueError):
            ExtractConfig(data_root=self.data_root, max_pdf_bytes=0)
        with self.assertRaises(TypeError):
            ExtractConfig(data_root=str(self.data_root))  # type: ignore[arg-type]


class TestParsePageSelection(unittest.TestCase):
    def test_ranges_and_singles(self) -> None:
        self.assertEqual(parse_page_selection("3, 1-2 ,2", page_count=5), [1, 2, 3])
        self.assertEqual(parse_page_selection(None, page_count=3), [1, 2, 3])
        self.assertEqual(parse_page_selection("  ", page_count=2), [1, 2])

    def test_invalid(self) -> None:
        for sel in ("0", "3-1", "x", "6"):
            with self.subTest(sel=sel):
                with self.assertRaises(ValueError):
                    parse_page_selection(sel, page_count=5)


if __name__ == "__main__":
    unittest.main()
