"""ChunkForge command-line interface."""
