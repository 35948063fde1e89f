"""
Chunking layer for ChunkForge.

    semantic_chunker  SemanticChunker, semantic_chunk, semantic_chunk_multi_page
    block_splitters   Per-type splitting of oversized blocks
    models            Chunk, ChunkMetadata, ConfidenceLevel, PageText
    stats             get_chunking_stats
"""

from chunkforge.chunking.models import Chunk, ChunkMetadata, ConfidenceLevel, PageText
from chunkforge.chunking.semantic_chunker import (
    SemanticChunker,
    semantic_chunk,
    semantic_chunk_multi_page,
)
from chunkforge.chunking.stats import ChunkingStats, get_chunking_stats

__all__ = [
    "Chunk",
    "ChunkMetadata",
    "ConfidenceLevel",
    "PageText",
    "SemanticChunker",
    "semantic_chunk",
    "semantic_chunk_multi_page",
    "ChunkingStats",
    "get_chunking_stats",
]
