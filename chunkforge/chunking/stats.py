"""Aggregate statistics over a chunk list, for tuning and observability."""

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Sequence

from chunkforge.chunking.models import Chunk


@dataclass
class ChunkingStats:
    """Summary of a chunking run.

    Attributes:
        total_chunks: Number of chunks
        avg_chunk_size: Mean content length, rounded half up
        min_chunk_size: Shortest content length
        max_chunk_size: Longest content length
        content_types: Chunk count per content type
        confidence_levels: Chunk count per confidence level
    """

    total_chunks: int = 0
    avg_chunk_size: int = 0
    min_chunk_size: int = 0
    max_chunk_size: int = 0
    content_types: Dict[str, int] = field(default_factory=dict)
    confidence_levels: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalChunks": self.total_chunks,
            "avgChunkSize": self.avg_chunk_size,
            "minChunkSize": self.min_chunk_size,
            "maxChunkSize": self.max_chunk_size,
            "contentTypes": dict(self.content_types),
            "confidenceLevels": dict(self.confidence_levels),
        }


def get_chunking_stats(chunks: Sequence[Chunk]) -> ChunkingStats:
    """Compute size and category statistics for chunks.

    Sizes are content lengths including any overlap. An empty sequence
    returns zeroed stats.
    """
    if not chunks:
        return ChunkingStats()

    sizes = [len(chunk.content) for chunk in chunks]
    content_types = Counter(chunk.metadata.content_type.value for chunk in chunks)
    confidence_levels = Counter(chunk.metadata.confidence.value for chunk in chunks)

    return ChunkingStats(
        total_chunks=len(chunks),
        avg_chunk_size=int(math.floor(sum(sizes) / len(sizes) + 0.5)),
        min_chunk_size=min(sizes),
        max_chunk_size=max(sizes),
        content_types=dict(content_types),
        confidence_levels=dict(confidence_levels),
    )
