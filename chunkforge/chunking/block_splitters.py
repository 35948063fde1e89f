"""Per-type splitting of oversized content blocks.

A block that fits its budget is emitted whole. Otherwise it is split on
the boundaries that keep it meaningful for its type:

- table: rows, with the header re-emitted at the top of every piece
- list: items (lines); an item is never split
- text/heading: sentences, with a too-small tail merged backwards

Splitters never cut inside a row, item or sentence, so a single unit
larger than the budget is emitted as-is.
"""

import re
from typing import Callable, Dict, List

from chunkforge.chunking.models import ChunkPiece, ConfidenceLevel
from chunkforge.core.config import ChunkingConfig
from chunkforge.ingest.refiners.element_classifier import BlockKind, ContentBlock

# A run ending in terminal punctuation, or an unpunctuated tail
_SENTENCE = re.compile(r"[^.!?]*[.!?]+|[^.!?]+$")
_HEADER_SEPARATOR_CHARS = ("-", "=")


def budget_for(block: ContentBlock, config: ChunkingConfig) -> int:
    if block.type is BlockKind.TABLE:
        return config.table_max_size
    return config.max_chunk_size


def split_sentences(text: str) -> List[str]:
    """Split on terminal punctuation; text without any is one sentence."""
    return _SENTENCE.findall(text) or [text]


def split_table(block: ContentBlock, config: ChunkingConfig) -> List[ChunkPiece]:
    """Split a table by rows, repeating the header in every piece.

    The header is the first line, plus the second when it contains "-" or
    "=" (a separator row). A piece is closed when the next row would push
    it past ``table_max_size`` and it already holds at least one row.
    """
    lines = block.text.split("\n")
    header_lines = lines[:1]
    if len(lines) > 1 and any(c in lines[1] for c in _HEADER_SEPARATOR_CHARS):
        header_lines.append(lines[1])

    header = "\n".join(header_lines)
    pieces: List[ChunkPiece] = []
    current = header

    for line in lines[len(header_lines):]:
        candidate = current + "\n" + line
        if len(candidate) > config.table_max_size and current != header:
            pieces.append(ChunkPiece(current, BlockKind.TABLE, ConfidenceLevel.HIGH))
            current = header + "\n" + line
        else:
            current = candidate

    if len(current) > len(header):
        pieces.append(ChunkPiece(current, BlockKind.TABLE, ConfidenceLevel.HIGH))

    return pieces


def split_list(block: ContentBlock, config: ChunkingConfig) -> List[ChunkPiece]:
    """Split a list between items, skipping blank lines."""
    pieces: List[ChunkPiece] = []
    current = ""

    for line in block.text.split("\n"):
        if not line.strip():
            continue

        candidate = f"{current}\n{line}" if current else line
        if len(candidate) > config.max_chunk_size and current:
            pieces.append(ChunkPiece(current, BlockKind.LIST, ConfidenceLevel.HIGH))
            current = line
        else:
            current = candidate

    if current:
        pieces.append(ChunkPiece(current, BlockKind.LIST, ConfidenceLevel.HIGH))

    return pieces


def split_text(block: ContentBlock, config: ChunkingConfig) -> List[ChunkPiece]:
    """Split prose greedily on sentence boundaries.

    A piece is closed when the next sentence would push it past
    ``max_chunk_size`` and it already meets ``min_chunk_size``. A final
    remainder below the minimum is appended to the previous piece, or
    kept with low confidence when it is the only piece.
    """
    level = ConfidenceLevel.HIGH if block.confidence > 0.7 else ConfidenceLevel.MEDIUM
    pieces: List[ChunkPiece] = []
    current = ""

    for sentence in split_sentences(block.text):
        stripped = sentence.strip()
        if not stripped:
            continue

        candidate = f"{current} {stripped}" if current else stripped
        if len(candidate) > config.max_chunk_size and len(current) >= config.min_chunk_size:
            pieces.append(ChunkPiece(current, block.type, level))
            current = stripped
        else:
            current = candidate

    if not current:
        return pieces

    if len(current) >= config.min_chunk_size:
        pieces.append(ChunkPiece(current, block.type, level))
    elif pieces:
        pieces[-1].content += " " + current
    else:
        pieces.append(ChunkPiece(current, block.type, ConfidenceLevel.LOW))

    return pieces


SPLITTERS: Dict[BlockKind, Callable[[ContentBlock, ChunkingConfig], List[ChunkPiece]]] = {
    BlockKind.TABLE: split_table,
    BlockKind.LIST: split_list,
    BlockKind.TEXT: split_text,
    BlockKind.HEADING: split_text,
}


def split_block(block: ContentBlock, config: ChunkingConfig) -> List[ChunkPiece]:
    """Emit a block whole when it fits its budget, otherwise split it by type."""
    if len(block.text) <= budget_for(block, config):
        return [
            ChunkPiece(
                block.text, block.type, ConfidenceLevel.from_score(block.confidence)
            )
        ]
    return SPLITTERS[block.type](block, config)
