"""Strategy interfaces."""

from chunkforge.shared.patterns.chunking import IChunkingStrategy

__all__ = ["IChunkingStrategy"]
