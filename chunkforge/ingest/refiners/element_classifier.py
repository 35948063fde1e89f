"""
Element Classifier for Structural Block Typing.

Classifies paragraph-level spans of cleaned text as heading, table, list or
plain text using weighted heuristic scores. No layout information is
available, so every detector returns a confidence rather than a certainty.

Scoring
-------
Each detector adds points for the signals it finds and divides by the
maximum attainable score. The weights and thresholds below are tuned
together; changing one changes which blocks the chunker treats as tables
or lists.

    Table    max 120, matched when confidence > 0.4
    List     max 115, matched when confidence > 0.35
    Heading  max 120, matched when confidence > 0.4

Classification is first-match-wins over ``CLASSIFIERS`` after the
header/footer exclusion check; anything unmatched is plain text with
confidence 1.0.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Tuple

from chunkforge.core.logging import get_logger

logger = get_logger(__name__)

TABLE_THRESHOLD = 0.4
LIST_THRESHOLD = 0.35
HEADING_THRESHOLD = 0.4

_PARAGRAPH_BREAK = re.compile(r"\n\n+")

# Table signals
_WIDE_GAP = re.compile(r"\s{3,}")
_DIGIT = re.compile(r"[0-9]")

# List signals
_NUMBERED_ITEM = re.compile(r"\s*[0-9]+[.)]\s+")
_BULLET_ITEM = re.compile(r"\s*[•\-*○►▪]\s+")
_INDENTED = re.compile(r"\s{2,}")

# Heading signals
_UPPERCASE_LETTER = re.compile(r"[A-Z]")
_TITLE_CASE = re.compile(r"[A-Z][a-z]")
_SECTION_KEYWORD = re.compile(
    r"(summary|skills|experience|education|projects|certifications"
    r"|about|overview|background|qualifications)",
    re.IGNORECASE,
)
_MARKDOWN_EMPHASIS = re.compile(r"[#*]{1,3}\s")

# Header/footer noise, matched against the stripped span
_PAGE_MARKER = re.compile(r"^(page\s+)?[0-9]+(\s*/\s*[0-9]+)?$", re.IGNORECASE)
_BOILERPLATE_PREFIX = re.compile(
    r"^(confidential|draft|proprietary|copyright|©|[0-9]{4})", re.IGNORECASE
)
_BOILERPLATE_MAX_LENGTH = 30
_LINK_ONLY = re.compile(
    r"^(https?://\S+|www\.\S+|[A-Za-z0-9_.-]+@[A-Za-z0-9_.-]+\.[A-Za-z0-9_]+)$",
    re.IGNORECASE,
)


class BlockKind(str, Enum):
    """Structural category of a content block or chunk."""

    TEXT = "text"
    TABLE = "table"
    LIST = "list"
    HEADING = "heading"


@dataclass(frozen=True)
class DetectionResult:
    """Outcome of one structural detector.

    Attributes:
        matched: True when confidence is above the detector's threshold
        confidence: Normalized score in [0, 1]
    """

    matched: bool
    confidence: float

    @classmethod
    def score(cls, points: int, max_points: int, threshold: float) -> DetectionResult:
        confidence = points / max_points
        return cls(matched=confidence > threshold, confidence=confidence)


NO_MATCH = DetectionResult(matched=False, confidence=0.0)


@dataclass(frozen=True)
class ContentBlock:
    """A classified paragraph of the cleaned document.

    Attributes:
        text: Stripped paragraph text
        type: Structural category
        confidence: Detector score in [0, 1]; 0 marks header/footer noise
        start_line: First line offset in the cleaned document (0-based)
        end_line: Last line offset in the cleaned document
    """

    text: str
    type: BlockKind
    confidence: float
    start_line: int
    end_line: int

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "text": self.text,
            "type": self.type.value,
            "confidence": self.confidence,
            "startLine": self.start_line,
            "endLine": self.end_line,
        }


def _non_empty_lines(text: str) -> List[str]:
    return [line for line in text.split("\n") if line.strip()]


def detect_table(text: str) -> DetectionResult:
    """Score text as a table.

    Signals: pipe-delimited lines, tab-delimited lines, lines with wide
    space gaps, uniform line width and numeric density.
    """
    lines = _non_empty_lines(text)
    if len(lines) < 2:
        return NO_MATCH

    total = len(lines)
    score = 0

    pipe_lines = sum(1 for line in lines if "|" in line)
    if pipe_lines >= 3:
        score += 30
        if pipe_lines / total > 0.7:
            score += 20

    tab_lines = sum(1 for line in lines if "\t" in line)
    if tab_lines >= 3:
        score += 20

    spaced_lines = sum(1 for line in lines if _WIDE_GAP.search(line))
    if spaced_lines >= 3:
        score += 15
        if spaced_lines / total > 0.6:
            score += 10

    # Mean absolute deviation of row width
    avg_length = sum(len(line) for line in lines) / total
    deviation = sum(abs(len(line) - avg_length) for line in lines) / total
    if deviation < avg_length * 0.3:
        score += 15

    numeric_lines = sum(1 for line in lines if _DIGIT.search(line))
    if numeric_lines / total > 0.5:
        score += 10

    return DetectionResult.score(score, 120, TABLE_THRESHOLD)


def detect_list(text: str) -> DetectionResult:
    """Score text as a numbered or bulleted list."""
    lines = _non_empty_lines(text)
    if len(lines) < 2:
        return NO_MATCH

    total = len(lines)
    score = 0

    numbered = sum(1 for line in lines if _NUMBERED_ITEM.match(line))
    if numbered >= 2:
        score += 40
        if numbered / total > 0.7:
            score += 20

    bulleted = sum(1 for line in lines if _BULLET_ITEM.match(line))
    if bulleted >= 2:
        score += 30
        if bulleted / total > 0.7:
            score += 15

    indented = sum(1 for line in lines if _INDENTED.match(line))
    if indented / total > 0.5:
        score += 10

    return DetectionResult.score(score, 115, LIST_THRESHOLD)


def detect_heading(text: str) -> DetectionResult:
    """Score a single-line span as a section heading.

    Multi-line spans never match.
    """
    lines = _non_empty_lines(text.strip())
    if len(lines) != 1:
        return NO_MATCH

    line = lines[0]
    score = 0

    if len(line) < 60:
        score += 20
        if len(line) < 40:
            score += 10

    if line == line.upper() and _UPPERCASE_LETTER.search(line):
        score += 30
    elif _TITLE_CASE.match(line):
        score += 20

    if not line.endswith((".", "!", "?")):
        score += 15

    if _SECTION_KEYWORD.match(line):
        score += 25

    if _MARKDOWN_EMPHASIS.match(line) or "**" in line:
        score += 20

    return DetectionResult.score(score, 120, HEADING_THRESHOLD)


def detect_header_footer(text: str) -> bool:
    """True when the span is running page furniture rather than content.

    Matches bare page markers ("12", "Page 3", "4/10"), short
    confidentiality/copyright/year lines, and spans that are only a URL
    or an email address.
    """
    stripped = text.strip()

    if _PAGE_MARKER.match(stripped):
        return True

    if 0 < len(stripped) < _BOILERPLATE_MAX_LENGTH and _BOILERPLATE_PREFIX.match(stripped):
        return True

    return bool(_LINK_ONLY.match(stripped))


# First match wins; header/footer exclusion runs before any of these
CLASSIFIERS: Tuple[Tuple[BlockKind, Callable[[str], DetectionResult]], ...] = (
    (BlockKind.HEADING, detect_heading),
    (BlockKind.TABLE, detect_table),
    (BlockKind.LIST, detect_list),
)


def analyze_content_block(text: str, start_line: int, end_line: int) -> ContentBlock:
    """Classify one span.

    Header/footer noise comes back as text with confidence 0; unmatched
    spans come back as text with confidence 1.0.
    """
    if detect_header_footer(text):
        return ContentBlock(text, BlockKind.TEXT, 0.0, start_line, end_line)

    for kind, detector in CLASSIFIERS:
        result = detector(text)
        if result.matched:
            return ContentBlock(text, kind, result.confidence, start_line, end_line)

    return ContentBlock(text, BlockKind.TEXT, 1.0, start_line, end_line)


def segment_into_blocks(text: str) -> List[ContentBlock]:
    """Split cleaned text on blank lines and classify each paragraph.

    Line offsets advance by the paragraph's line count plus two for the
    consumed separator. Header/footer blocks (confidence 0) are dropped.

    Args:
        text: Preprocessed document text

    Returns:
        Blocks in document order
    """
    blocks: List[ContentBlock] = []
    line_number = 0
    dropped = 0

    for paragraph in _PARAGRAPH_BREAK.split(text):
        stripped = paragraph.strip()
        if not stripped:
            continue

        line_count = stripped.count("\n") + 1
        block = analyze_content_block(
            stripped, line_number, line_number + line_count - 1
        )

        if block.confidence > 0:
            blocks.append(block)
        else:
            dropped += 1

        line_number += line_count + 2

    logger.debug("Segmented document", blocks=len(blocks), dropped=dropped)
    return blocks
