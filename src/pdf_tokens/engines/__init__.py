from .base import TokenExtractionEngine
from .pypdfium2_engine import Pypdfium2Engine

__all__ = ["TokenExtractionEngine", "Pypdfium2Engine"]
