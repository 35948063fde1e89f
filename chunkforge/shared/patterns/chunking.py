"""
Chunking strategy interface.

A strategy turns the extracted text of one page or document into an
ordered list of Chunk records:

    raw text ──> IChunkingStrategy.chunk(text, page_number, start_index) ──> [Chunk, ...]

``start_index`` lets a caller chunk pages one at a time and still get one
global index sequence. SemanticChunker is the implementation shipped with
ChunkForge.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from chunkforge.chunking.models import Chunk


class IChunkingStrategy(ABC):
    """Contract for chunkers: ``chunk`` and ``get_strategy_name`` are required."""

    @abstractmethod
    def chunk(
        self, text: str, page_number: Optional[int] = None, start_index: int = 0
    ) -> List["Chunk"]:
        """Split text into chunks numbered from ``start_index``."""

    @abstractmethod
    def get_strategy_name(self) -> str:
        """Short identifier such as ``"semantic"``."""

    def get_config(self) -> Dict[str, Any]:
        return {"strategy": self.get_strategy_name(), "class": type(self).__name__}

    def validate_text(self, text: str) -> bool:
        """False for empty or whitespace-only text."""
        return bool(text) and not text.isspace()

    def estimate_chunks(self, text: str) -> int:
        """Rough chunk count for progress display; strategies refine this."""
        return int(self.validate_text(text))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(strategy={self.get_strategy_name()})"
