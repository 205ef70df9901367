"""
Text-layer layout reconstruction.

Positioned tokens -> lines (vertical proximity) -> cells (horizontal gaps) -> blocks
(header / paragraph / table). Pure and synchronous per page: no I/O, no shared state.
No font or style information is used; tables are detected heuristically.
"""

from .config import LayoutConfig
from .module import layout_page, layout_token_document, run_pdf_layout

__all__ = ["LayoutConfig", "layout_page", "layout_token_document", "run_pdf_layout"]
