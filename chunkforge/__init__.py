"""ChunkForge - structure-aware text chunking for retrieval pipelines.

Cleans noisy extracted document text, classifies paragraph blocks as
headings, tables, lists or prose, and splits them into bounded chunks
with textual overlap, ready for embedding and vector search.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
