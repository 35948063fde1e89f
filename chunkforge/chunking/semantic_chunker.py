"""Structure-aware semantic chunking strategy.

Splits document text into retrieval-sized chunks that respect the
document's structure: tables are split between rows and keep their
header, lists are split between items, and prose is split between
sentences.

Pipeline (each call is independent and side-effect free):

    preprocess_text → segment_into_blocks → split_block (per block)
        → index + page stamp → overlap → min-size filter → renumber

Usage:
    from chunkforge.chunking import semantic_chunk

    chunks = semantic_chunk(text, page_number=1)
    for chunk in chunks:
        print(chunk.metadata.chunk_index, chunk.metadata.content_type, chunk.content)
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from chunkforge.chunking.block_splitters import split_block
from chunkforge.chunking.models import (
    Chunk,
    ChunkMetadata,
    ChunkPiece,
    ConfidenceLevel,
    PageText,
)
from chunkforge.core.config import CHUNKER_PREPROCESS_OPTIONS, DEFAULT_CONFIG, ChunkingConfig
from chunkforge.ingest.refiners.element_classifier import segment_into_blocks
from chunkforge.ingest.refiners.text_cleaners import preprocess_text
from chunkforge.shared.patterns.chunking import IChunkingStrategy

__all__ = [
    "Chunk",
    "ChunkMetadata",
    "ConfidenceLevel",
    "PageText",
    "SemanticChunker",
    "semantic_chunk",
    "semantic_chunk_multi_page",
]

OVERLAP_SEPARATOR = "\n\n"
# Prefix length compared when deciding whether overlap is already present
OVERLAP_GUARD_LENGTH = 50

PageInput = Union[PageText, Tuple[str, int], Mapping[str, Any]]


class _Logger:
    """Lazy logger holder."""

    _instance = None

    @classmethod
    def get(cls):
        """Get logger (lazy-loaded)."""
        if cls._instance is None:
            from chunkforge.core.logging import get_logger

            cls._instance = get_logger(__name__)
        return cls._instance


class SemanticChunker(IChunkingStrategy):
    """Chunk text by structural block type with bounded overlap.

    The chunker never raises on malformed text: empty or whitespace-only
    input, or input that is entirely header/footer noise, yields ``[]``.
    """

    def __init__(self, config: Optional[ChunkingConfig] = None) -> None:
        self.config = config or DEFAULT_CONFIG

    def get_strategy_name(self) -> str:
        return "semantic"

    def get_config(self) -> Dict[str, Any]:
        return {**super().get_config(), **self.config.to_dict()}

    def estimate_chunks(self, text: str) -> int:
        if not self.validate_text(text):
            return 0
        return max(1, len(text) // self.config.max_chunk_size + 1)

    def chunk(
        self, text: str, page_number: Optional[int] = None, start_index: int = 0
    ) -> List[Chunk]:
        """Chunk one page or document.

        Args:
            text: Raw extracted text
            page_number: Stamped onto every chunk when given
            start_index: Index of the first returned chunk

        Returns:
            Chunks with contiguous indices starting at ``start_index``
        """
        log = _Logger.get()
        cleaned = preprocess_text(text or "", CHUNKER_PREPROCESS_OPTIONS)
        blocks = segment_into_blocks(cleaned)
        if not blocks:
            log.debug("No content blocks found", page=page_number)
            return []

        chunks: List[Chunk] = []
        for block in blocks:
            pieces = split_block(block, self.config)
            if len(pieces) > 1:
                log.debug(
                    "Split oversized block",
                    type=block.type.value,
                    length=len(block.text),
                    pieces=len(pieces),
                )
            base = start_index + len(chunks)
            chunks.extend(
                self._to_chunk(piece, base + offset, page_number)
                for offset, piece in enumerate(pieces)
            )

        chunks = self._add_overlap(chunks)
        kept = self._filter_small(chunks)

        log.debug(
            "Chunked text",
            page=page_number,
            blocks=len(blocks),
            chunks=len(kept),
            dropped=len(chunks) - len(kept),
        )
        return renumber(kept, start_index)

    @staticmethod
    def _to_chunk(piece: ChunkPiece, index: int, page_number: Optional[int]) -> Chunk:
        return Chunk(
            content=piece.content,
            metadata=ChunkMetadata(
                chunk_index=index,
                content_type=piece.content_type,
                confidence=piece.confidence,
                page_number=page_number,
                has_overlap=False,
                original_length=len(piece.content),
            ),
        )

    def _add_overlap(self, chunks: List[Chunk]) -> List[Chunk]:
        """Prepend the tail of each chunk's predecessor.

        The tail is taken from the predecessor's content before any overlap
        was added to it. Skipped when the chunk already starts with it.
        """
        overlap_size = self.config.overlap_size
        if len(chunks) <= 1 or overlap_size == 0:
            return chunks

        result = [chunks[0]]
        for previous, chunk in zip(chunks, chunks[1:]):
            overlap = previous.content[-overlap_size:]
            if chunk.content.startswith(overlap[:OVERLAP_GUARD_LENGTH]):
                result.append(chunk)
                continue
            result.append(
                Chunk(
                    content=overlap + OVERLAP_SEPARATOR + chunk.content,
                    metadata=ChunkMetadata(
                        chunk_index=chunk.metadata.chunk_index,
                        content_type=chunk.metadata.content_type,
                        confidence=chunk.metadata.confidence,
                        page_number=chunk.metadata.page_number,
                        has_overlap=True,
                        original_length=chunk.metadata.original_length,
                    ),
                )
            )
        return result

    def _filter_small(self, chunks: List[Chunk]) -> List[Chunk]:
        minimum = self.config.min_chunk_size
        return [c for c in chunks if len(c.content.strip()) >= minimum]


def renumber(chunks: Iterable[Chunk], start_index: int = 0) -> List[Chunk]:
    """Assign contiguous indices in order, starting at ``start_index``."""
    result = list(chunks)
    for offset, chunk in enumerate(result):
        chunk.metadata.chunk_index = start_index + offset
    return result


def semantic_chunk(
    text: str,
    page_number: Optional[int] = None,
    config: ChunkingConfig = DEFAULT_CONFIG,
) -> List[Chunk]:
    """Chunk text with the semantic strategy.

    Convenience function for a single page or document.

    Args:
        text: Raw extracted text
        page_number: Optional page number stamped on every chunk
        config: Size budgets (defaults 1000/200/2000/100)

    Returns:
        Chunks indexed from 0; ``[]`` for empty input
    """
    return SemanticChunker(config).chunk(text, page_number)


def _normalize_page(page: PageInput) -> PageText:
    if isinstance(page, PageText):
        return page
    if isinstance(page, Mapping):
        number = page.get("page_number", page.get("pageNumber"))
        return PageText(page.get("text", ""), number)
    text, number = page
    return PageText(text, number)


def semantic_chunk_multi_page(
    pages: Sequence[PageInput],
    config: ChunkingConfig = DEFAULT_CONFIG,
    max_workers: Optional[int] = None,
) -> List[Chunk]:
    """Chunk each page independently and number chunks across the document.

    Pages may be ``PageText`` values, ``(text, page_number)`` tuples or
    mappings with ``text`` and ``page_number`` (or ``pageNumber``) keys.

    Args:
        pages: Pages in document order
        config: Size budgets shared by every page
        max_workers: Chunk pages on a thread pool of this size; sequential
            when None or 1

    Returns:
        All chunks in page order, indexed 0..N-1
    """
    chunker = SemanticChunker(config)
    normalized = [_normalize_page(page) for page in pages]

    def run(page: PageText) -> List[Chunk]:
        return chunker.chunk(page.text, page.page_number)

    if max_workers and max_workers > 1 and len(normalized) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            per_page = list(executor.map(run, normalized))
    else:
        per_page = [run(page) for page in normalized]

    return renumber(chunk for page_chunks in per_page for chunk in page_chunks)
