"""
Tests for per-type block splitting.

Organization
------------
- TestSplitSentences
- TestSplitTable: header repetition and row boundaries
- TestSplitList: item boundaries
- TestSplitText: greedy sentence packing and remainder handling
- TestSplitBlock: single-fit pass-through and dispatch
"""

import pytest

from chunkforge.chunking.block_splitters import (
    budget_for,
    split_block,
    split_list,
    split_sentences,
    split_table,
    split_text,
)
from chunkforge.chunking.models import ChunkPiece, ConfidenceLevel
from chunkforge.core.config import ChunkingConfig
from chunkforge.ingest.refiners.element_classifier import BlockKind, ContentBlock


def make_block(text: str, kind: BlockKind = BlockKind.TEXT, confidence: float = 1.0):
    return ContentBlock(text, kind, confidence, 0, text.count("\n"))


THREE_SENTENCES = "Sentence one is here. Sentence two is here. End."


class TestSplitSentences:
    """Tests for split_sentences."""

    def test_terminal_punctuation_and_tail(self):
        assert split_sentences("One. Two! Three? tail") == [
            "One.",
            " Two!",
            " Three?",
            " tail",
        ]

    def test_repeated_punctuation_stays_together(self):
        assert split_sentences("Wait... what?") == ["Wait...", " what?"]

    def test_no_punctuation_is_one_sentence(self):
        assert split_sentences("no punctuation at all") == ["no punctuation at all"]

    def test_empty(self):
        assert split_sentences("") == [""]


class TestSplitTable:
    """Tests for split_table."""

    def test_header_repeated_in_every_piece(self):
        rows = "\n".join(f"Row {i}|value {i}" for i in range(1, 21))
        block = make_block(f"Item|Value\n----|-----\n{rows}", BlockKind.TABLE, 0.6)

        pieces = split_table(block, ChunkingConfig(table_max_size=80, min_chunk_size=0))

        assert len(pieces) > 1
        for piece in pieces:
            assert piece.content.startswith("Item|Value\n----|-----\n")
            assert len(piece.content) <= 80
            assert piece.confidence is ConfidenceLevel.HIGH
            assert piece.content_type is BlockKind.TABLE

    def test_rows_are_never_lost_or_split(self):
        rows = [f"Row {i}|value {i}" for i in range(1, 21)]
        block = make_block("Item|Value\n----|-----\n" + "\n".join(rows), BlockKind.TABLE)

        pieces = split_table(block, ChunkingConfig(table_max_size=80))

        emitted = [
            line for piece in pieces for line in piece.content.split("\n")[2:]
        ]
        assert emitted == rows

    def test_second_line_without_separator_is_data(self):
        block = make_block("a|b\n1|2\n3|4", BlockKind.TABLE)

        pieces = split_table(block, ChunkingConfig(table_max_size=7))

        assert [p.content for p in pieces] == ["a|b\n1|2", "a|b\n3|4"]

    def test_equals_separator_and_oversized_row(self):
        """A row that alone exceeds the budget is emitted as-is."""
        block = make_block("Name|Age\n===|===\nAl|3\nBo|4", BlockKind.TABLE)

        pieces = split_table(block, ChunkingConfig(table_max_size=20))

        assert [p.content for p in pieces] == [
            "Name|Age\n===|===\nAl|3",
            "Name|Age\n===|===\nBo|4",
        ]

    def test_header_only_yields_nothing(self):
        assert split_table(make_block("a|b", BlockKind.TABLE), ChunkingConfig()) == []


class TestSplitList:
    """Tests for split_list."""

    def test_splits_between_items(self):
        block = make_block("• aaaa\n• bbbb\n\n• cccc", BlockKind.LIST)

        pieces = split_list(block, ChunkingConfig(max_chunk_size=14))

        assert pieces == [
            ChunkPiece("• aaaa\n• bbbb", BlockKind.LIST, ConfidenceLevel.HIGH),
            ChunkPiece("• cccc", BlockKind.LIST, ConfidenceLevel.HIGH),
        ]

    def test_oversized_item_kept_whole(self):
        item = "• " + "x" * 30
        block = make_block(f"{item}\n• short", BlockKind.LIST)

        pieces = split_list(block, ChunkingConfig(max_chunk_size=10))

        assert [p.content for p in pieces] == [item, "• short"]


class TestSplitText:
    """Tests for split_text."""

    def test_small_remainder_merged_into_previous(self):
        config = ChunkingConfig(max_chunk_size=25, min_chunk_size=20)

        pieces = split_text(make_block(THREE_SENTENCES), config)

        assert [p.content for p in pieces] == [
            "Sentence one is here.",
            "Sentence two is here. End.",
        ]

    def test_merge_can_be_the_only_piece(self):
        config = ChunkingConfig(max_chunk_size=45, min_chunk_size=20)

        pieces = split_text(make_block(THREE_SENTENCES), config)

        assert [p.content for p in pieces] == [THREE_SENTENCES]
        assert pieces[0].confidence is ConfidenceLevel.HIGH

    def test_accumulates_until_minimum_met(self):
        """A piece below the minimum is never closed, even past the max."""
        config = ChunkingConfig(max_chunk_size=25, min_chunk_size=30)

        pieces = split_text(make_block(THREE_SENTENCES), config)

        assert [p.content for p in pieces] == [THREE_SENTENCES]

    def test_lone_small_text_kept_with_low_confidence(self):
        pieces = split_text(make_block("Tiny."), ChunkingConfig())

        assert pieces == [ChunkPiece("Tiny.", BlockKind.TEXT, ConfidenceLevel.LOW)]

    def test_medium_confidence_for_weak_blocks(self):
        block = make_block(THREE_SENTENCES, BlockKind.HEADING, 0.6)
        config = ChunkingConfig(max_chunk_size=25, min_chunk_size=20)

        pieces = split_text(block, config)

        assert {p.confidence for p in pieces} == {ConfidenceLevel.MEDIUM}
        assert {p.content_type for p in pieces} == {BlockKind.HEADING}

    def test_blank_text(self):
        assert split_text(make_block("   "), ChunkingConfig()) == []


class TestSplitBlock:
    """Tests for split_block."""

    def test_budget_per_type(self):
        config = ChunkingConfig(max_chunk_size=10, table_max_size=30)

        assert budget_for(make_block("a", BlockKind.TABLE), config) == 30
        assert budget_for(make_block("a", BlockKind.LIST), config) == 10

    @pytest.mark.parametrize(
        "kind,confidence,expected",
        [
            (BlockKind.TEXT, 1.0, ConfidenceLevel.HIGH),
            (BlockKind.TABLE, 0.625, ConfidenceLevel.MEDIUM),
            (BlockKind.HEADING, 0.7, ConfidenceLevel.MEDIUM),
            (BlockKind.LIST, 0.39, ConfidenceLevel.LOW),
        ],
    )
    def test_fitting_block_emitted_whole(self, kind, confidence, expected):
        block = make_block("short block", kind, confidence)

        assert split_block(block, ChunkingConfig()) == [
            ChunkPiece("short block", kind, expected)
        ]

    def test_table_uses_table_budget(self):
        text = "a|b\n" + "\n".join(f"{i}|{i}" for i in range(30))
        block = make_block(text, BlockKind.TABLE)

        pieces = split_block(block, ChunkingConfig(max_chunk_size=20, table_max_size=500))

        assert len(pieces) == 1

    def test_oversized_dispatches_by_type(self):
        block = make_block("• one\n• two", BlockKind.LIST)

        pieces = split_block(block, ChunkingConfig(max_chunk_size=6))

        assert [p.content for p in pieces] == ["• one", "• two"]
