"""Shared CLI infrastructure."""

from chunkforge.cli.core.command_base import ChunkForgeCommand

__all__ = ["ChunkForgeCommand"]
