"""Chunk records produced by the semantic chunker.

Chunks serialize with camelCase keys because that is the shape the
document store and embedding collaborators persist:

    {
        "content": "...",
        "metadata": {
            "chunkIndex": 0,
            "pageNumber": 1,
            "contentType": "text",
            "confidence": "high",
            "hasOverlap": false,
            "originalLength": 812
        }
    }
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, NamedTuple, Optional

from chunkforge.ingest.refiners.element_classifier import BlockKind


class ConfidenceLevel(str, Enum):
    """Three-level discretization of a detector or split confidence."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def from_score(cls, score: float) -> ConfidenceLevel:
        """Map a [0, 1] score: above 0.7 is high, above 0.4 medium, else low."""
        if score > 0.7:
            return cls.HIGH
        if score > 0.4:
            return cls.MEDIUM
        return cls.LOW


@dataclass
class ChunkMetadata:
    """Position and provenance of a chunk.

    Attributes:
        chunk_index: Position in the output sequence
        content_type: Category of the source block
        confidence: Discretized confidence of the block or split
        page_number: Caller-supplied page number, if any
        has_overlap: True when text from the previous chunk was prepended
        original_length: Content length before overlap was added
    """

    chunk_index: int
    content_type: BlockKind
    confidence: ConfidenceLevel
    page_number: Optional[int] = None
    has_overlap: bool = False
    original_length: int = 0

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"chunkIndex": self.chunk_index}
        if self.page_number is not None:
            data["pageNumber"] = self.page_number
        data.update(
            {
                "contentType": self.content_type.value,
                "confidence": self.confidence.value,
                "hasOverlap": self.has_overlap,
                "originalLength": self.original_length,
            }
        )
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChunkMetadata:
        return cls(
            chunk_index=int(data["chunkIndex"]),
            content_type=BlockKind(data["contentType"]),
            confidence=ConfidenceLevel(data["confidence"]),
            page_number=data.get("pageNumber"),
            has_overlap=bool(data.get("hasOverlap", False)),
            original_length=int(data.get("originalLength", 0)),
        )


@dataclass
class Chunk:
    """A bounded unit of text emitted for embedding and retrieval."""

    content: str
    metadata: ChunkMetadata

    @property
    def chunk_index(self) -> int:
        return self.metadata.chunk_index

    @property
    def content_type(self) -> BlockKind:
        return self.metadata.content_type

    def to_dict(self) -> Dict[str, Any]:
        return {"content": self.content, "metadata": self.metadata.to_dict()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Chunk:
        return cls(
            content=data["content"],
            metadata=ChunkMetadata.from_dict(data["metadata"]),
        )

    def to_legacy_dict(self) -> Dict[str, Any]:
        """Reduced view with only the content, page number and index."""
        return {
            "content": self.content,
            "metadata": {
                "pageNumber": self.metadata.page_number,
                "chunkIndex": self.metadata.chunk_index,
            },
        }


class PageText(NamedTuple):
    """One page of a multi-page document."""

    text: str
    page_number: int


@dataclass
class ChunkPiece:
    """Split output before indices and page numbers are assigned."""

    content: str
    content_type: BlockKind
    confidence: ConfidenceLevel
