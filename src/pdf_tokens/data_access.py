from __future__ import annotations

import hashlib
from pathlib import Path

PDF_SIGNATURE = b"%PDF"


class DataAccessError(Exception):
    pass


def resolve_under_data_root(*, data_root: Path, relpath: str) -> Path:
    """
    Resolve a relative path under an explicit, resolved data_root.

    Absolute paths and anything escaping data_root (e.g. via "..") are rejected.
    """

    if relpath.startswith(("/", "\\")) or (":" in relpath and "\\" in relpath):
        raise DataAccessError(f"Expected a relative path under data_root, got: {relpath!r}")

    root = data_root.expanduser().resolve()
    candidate = (root / relpath).resolve()

    if not candidate.is_relative_to(root):
        raise DataAccessError(f"Path traversal or external reference detected: relpath={relpath!r}")

    return candidate


def has_pdf_signature(path: Path, *, search_bytes: int = 1024) -> bool:
    # Some producers put junk before the header; readers accept it within the first KiB.
    with path.open("rb") as f:
        head = f.read(search_bytes)
    return PDF_SIGNATURE in head


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()
