"""
Tests for the semantic chunker.

Test Strategy
-------------
- Concrete scenarios pin exact chunk counts and sizes
- Property tests check index contiguity, size bounds, minimum size and
  table header preservation over a mixed document
- Malformed input never raises

Organization
------------
- TestScenarios: hand-computed end-to-end cases
- TestOverlap: overlap injection and its duplicate guard
- TestProperties: invariants over a mixed document
- TestMultiPage: semantic_chunk_multi_page
- TestSemanticChunker: strategy interface
"""

import pytest

from chunkforge.chunking import (
    Chunk,
    ChunkMetadata,
    ConfidenceLevel,
    PageText,
    SemanticChunker,
    semantic_chunk,
    semantic_chunk_multi_page,
)
from chunkforge.chunking.semantic_chunker import renumber
from chunkforge.core.config import ChunkingConfig
from chunkforge.ingest.refiners.element_classifier import BlockKind

SMALL = ChunkingConfig(
    max_chunk_size=200, overlap_size=50, table_max_size=300, min_chunk_size=40
)

TABLE_HEADER = "Item|Value|Status\n----|-----|------"


def table_block(rows: int = 40) -> str:
    return TABLE_HEADER + "\n" + "\n".join(
        f"Row {i}|value {i}|ok" for i in range(1, rows + 1)
    )


def mixed_document() -> str:
    prose = " ".join(
        f"Worked on project number {i} with the platform team." for i in range(1, 31)
    )
    bullets = "\n".join(
        f"• Delivered feature {i} for the billing system" for i in range(1, 21)
    )
    return "\n\n".join(["PROFESSIONAL EXPERIENCE", prose, bullets, table_block()])


def make_chunk(content: str, index: int = 0) -> Chunk:
    return Chunk(
        content=content,
        metadata=ChunkMetadata(
            chunk_index=index,
            content_type=BlockKind.TEXT,
            confidence=ConfidenceLevel.HIGH,
            original_length=len(content),
        ),
    )


class TestScenarios:
    """Hand-computed end-to-end cases."""

    def test_empty_input(self):
        assert semantic_chunk("") == []

    @pytest.mark.parametrize(
        "text", ["   \n\n  ", "\n", "....", "|||", "12\n\nPage 3", "-\n\n•", "a" * 5]
    )
    def test_malformed_input_never_raises(self, text):
        assert isinstance(semantic_chunk(text), list)

    def test_noise_only_document(self):
        assert semantic_chunk("Confidential\n\n7\n\nhttps://example.com") == []

    def test_repeated_sentences_split_in_two(self, long_sentences_text):
        chunks = semantic_chunk(
            long_sentences_text,
            config=ChunkingConfig(max_chunk_size=1000, min_chunk_size=100),
        )

        assert len(chunks) == 2
        first, second = chunks
        assert len(first.content) == 998
        assert first.metadata.has_overlap is False
        assert second.metadata.original_length == 500
        assert second.metadata.has_overlap is True
        assert len(second.content) == 200 + 2 + 500
        assert [c.metadata.content_type for c in chunks] == [BlockKind.TEXT] * 2
        assert [c.metadata.confidence for c in chunks] == [ConfidenceLevel.HIGH] * 2

    def test_small_pipe_table_single_chunk(self):
        text = "Name|Age\n---|---\nAlice|30\nBob|25\nCarol|22"

        chunks = semantic_chunk(text, config=ChunkingConfig(min_chunk_size=10))

        assert len(chunks) == 1
        assert chunks[0].content == text
        assert chunks[0].metadata.content_type is BlockKind.TABLE
        # 75/120 from the table detector
        assert chunks[0].metadata.confidence is ConfidenceLevel.MEDIUM

    def test_small_table_below_default_minimum_dropped(self):
        assert semantic_chunk("Name|Age\n---|---\nAlice|30\nBob|25\nCarol|22") == []

    def test_page_number_stamped(self, long_sentences_text):
        chunks = semantic_chunk(long_sentences_text, page_number=3)

        assert chunks
        assert {c.metadata.page_number for c in chunks} == {3}

    def test_link_lines_kept_inside_paragraphs(self):
        text = (
            "Portfolio and contact details for recent client projects:\n"
            "https://example.com/portfolio/2024\n"
            "jane@example.com\n\n"
            "https://example.com/only"
        )

        chunks = semantic_chunk(text, config=ChunkingConfig(min_chunk_size=10))

        # a paragraph that is only a link is page furniture
        assert len(chunks) == 1
        assert "https://example.com/portfolio/2024\njane@example.com" in chunks[0].content
        assert "/only" not in chunks[0].content


class TestOverlap:
    """Tests for overlap injection."""

    def test_overlap_rescues_small_chunk(self):
        long_paragraph = ("Alpha sentence number one goes here. " * 5).strip()
        closing = "short closing remark that is under the minimum size."
        text = f"{long_paragraph}\n\n{closing}"

        with_overlap = semantic_chunk(text)
        without_overlap = semantic_chunk(text, config=ChunkingConfig(overlap_size=0))

        assert len(with_overlap) == 2
        assert with_overlap[1].content == f"{long_paragraph}\n\n{closing}"
        assert with_overlap[1].metadata.original_length == len(closing)
        assert len(without_overlap) == 1

    def test_overlap_taken_from_original_predecessor(self):
        chunker = SemanticChunker(ChunkingConfig(overlap_size=5))
        chunks = [make_chunk("a" * 30, 0), make_chunk("b" * 30, 1), make_chunk("c" * 30, 2)]

        result = chunker._add_overlap(chunks)

        assert result[1].content == "aaaaa\n\n" + "b" * 30
        assert result[2].content == "bbbbb\n\n" + "c" * 30
        assert [c.metadata.has_overlap for c in result] == [False, True, True]

    def test_existing_overlap_not_duplicated(self):
        chunker = SemanticChunker(ChunkingConfig(overlap_size=10))
        chunks = [make_chunk("hello world tail", 0), make_chunk("world tail continues", 1)]

        result = chunker._add_overlap(chunks)

        assert result[1].content == "world tail continues"
        assert result[1].metadata.has_overlap is False

    def test_zero_overlap_skipped(self):
        chunker = SemanticChunker(ChunkingConfig(overlap_size=0))
        chunks = [make_chunk("a" * 30, 0), make_chunk("b" * 30, 1)]

        assert chunker._add_overlap(chunks) == chunks

    def test_single_chunk_skipped(self):
        chunks = [make_chunk("only")]

        assert SemanticChunker()._add_overlap(chunks) == chunks


class TestProperties:
    """Invariants over a mixed heading/prose/list/table document."""

    @pytest.fixture
    def chunks(self):
        return semantic_chunk(mixed_document(), config=SMALL)

    def test_all_types_present(self, chunks):
        types = {c.metadata.content_type for c in chunks}

        assert {BlockKind.TEXT, BlockKind.LIST, BlockKind.TABLE} <= types

    def test_indices_contiguous_from_zero(self, chunks):
        assert [c.metadata.chunk_index for c in chunks] == list(range(len(chunks)))

    def test_indices_start_at_base(self):
        chunks = SemanticChunker(SMALL).chunk(mixed_document(), start_index=5)

        assert [c.metadata.chunk_index for c in chunks] == list(
            range(5, 5 + len(chunks))
        )

    def test_size_bound(self, chunks):
        for chunk in chunks:
            if chunk.metadata.content_type is BlockKind.TABLE:
                bound = SMALL.table_max_size + SMALL.overlap_size + 2
            else:
                bound = (
                    SMALL.max_chunk_size + SMALL.overlap_size + SMALL.min_chunk_size + 3
                )
            assert len(chunk.content) <= bound

    def test_minimum_size(self, chunks):
        assert all(len(c.content.strip()) >= SMALL.min_chunk_size for c in chunks)

    def test_original_length_excludes_overlap(self, chunks):
        for chunk in chunks:
            if chunk.metadata.has_overlap:
                assert len(chunk.content) > chunk.metadata.original_length
            else:
                assert len(chunk.content) == chunk.metadata.original_length

    def test_table_header_in_every_table_chunk(self):
        config = ChunkingConfig(
            max_chunk_size=200, overlap_size=0, table_max_size=300, min_chunk_size=40
        )

        chunks = semantic_chunk(table_block(), config=config)

        assert len(chunks) > 1
        assert all(c.content.startswith(TABLE_HEADER + "\n") for c in chunks)

    def test_deterministic(self):
        first = [c.to_dict() for c in semantic_chunk(mixed_document(), config=SMALL)]
        second = [c.to_dict() for c in semantic_chunk(mixed_document(), config=SMALL)]

        assert first == second


class TestMultiPage:
    """Tests for semantic_chunk_multi_page."""

    def test_global_renumbering(self):
        chunks = semantic_chunk_multi_page(
            [{"text": "X", "pageNumber": 1}, {"text": "Y", "pageNumber": 2}],
            config=ChunkingConfig(min_chunk_size=1),
        )

        assert [c.content for c in chunks] == ["X", "Y"]
        assert [c.metadata.chunk_index for c in chunks] == [0, 1]
        assert [c.metadata.page_number for c in chunks] == [1, 2]
        assert all(c.metadata.content_type is BlockKind.HEADING for c in chunks)
        # each page is chunked alone, so no overlap across pages
        assert not any(c.metadata.has_overlap for c in chunks)

    def test_page_input_forms(self, long_sentences_text):
        pages = [
            PageText(long_sentences_text, 1),
            (long_sentences_text, 2),
            {"text": long_sentences_text, "page_number": 3},
        ]

        chunks = semantic_chunk_multi_page(pages)

        assert [c.metadata.page_number for c in chunks] == [1, 1, 2, 2, 3, 3]
        assert [c.metadata.chunk_index for c in chunks] == list(range(6))

    def test_thread_pool_matches_sequential(self):
        pages = [(mixed_document(), n) for n in range(1, 5)]

        sequential = semantic_chunk_multi_page(pages, config=SMALL)
        parallel = semantic_chunk_multi_page(pages, config=SMALL, max_workers=4)

        assert [c.to_dict() for c in parallel] == [c.to_dict() for c in sequential]

    def test_empty_pages(self):
        assert semantic_chunk_multi_page([]) == []
        assert semantic_chunk_multi_page([("", 1), ("  ", 2)]) == []


class TestSemanticChunker:
    """Tests for the strategy interface."""

    def test_strategy_name_and_repr(self):
        chunker = SemanticChunker()

        assert chunker.get_strategy_name() == "semantic"
        assert repr(chunker) == "SemanticChunker(strategy=semantic)"

    def test_config_includes_sizes(self):
        config = SemanticChunker(SMALL).get_config()

        assert config["strategy"] == "semantic"
        assert config["class"] == "SemanticChunker"
        assert config["max_chunk_size"] == 200

    def test_estimate_chunks(self):
        chunker = SemanticChunker()

        assert chunker.estimate_chunks("") == 0
        assert chunker.estimate_chunks("x" * 2500) == 3

    def test_validate_text(self):
        chunker = SemanticChunker()

        assert chunker.validate_text("Some content") is True
        assert chunker.validate_text("   ") is False

    def test_renumber(self):
        chunks = renumber([make_chunk("a", 7), make_chunk("b", 3)], start_index=1)

        assert [c.metadata.chunk_index for c in chunks] == [1, 2]
