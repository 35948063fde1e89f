"""
Text Cleaning Functions for Extracted Document Text.

Provides the preprocessing pipeline that runs before segmentation:
- normalize_whitespace: Unify line endings, collapse space/tab runs and blank lines
- remove_pdf_artifacts: Zero-width chars, soft hyphens, line-wrap hyphens, form feeds
- remove_page_numbers: Drop standalone page-number lines
- remove_standalone_links: Drop lines that are only a URL or an email address
- remove_repeated_sections: Drop running headers/footers seen more than twice
- normalize_lists: Canonical "• " bullets and "N. " numbered markers

Every stage is a total function over strings. ``preprocess_text`` runs them
in a fixed order; ``quick_clean`` runs only the first two.

List-marker rewriting matches only horizontal whitespace around a marker, so
the blank line between a heading or paragraph and the list that follows it
is preserved and the two stay separate blocks.

The letter-case boundary rule in ``remove_pdf_artifacts`` ("FooBar" ->
"Foo Bar") is approximate and lossy: it also splits legitimate CamelCase
names such as "JavaScript" or "iPhone". It is applied unconditionally.
"""

import re
from collections import Counter
from typing import Any, Dict, List, Optional

from chunkforge.core.config import PreprocessOptions
from chunkforge.ingest.refinement import IRefiner, RefinedText
from chunkforge.ingest.refiners.ocr_cleanup import fix_ocr_errors


# Whitespace
_SPACE_RUN = re.compile(r" +")
_TAB_RUN = re.compile(r"\t+")
_BLANK_LINE_RUN = re.compile(r"\n{4,}")

# PDF artifacts
_ZERO_WIDTH = re.compile("[\u200b-\u200d\ufeff]")
_SOFT_HYPHEN = "\u00ad"
_LINE_WRAP_HYPHEN = re.compile(r"([A-Za-z0-9_])-\s+([A-Za-z0-9_])")
_CASE_BOUNDARY = re.compile(r"([a-z])([A-Z])")

# Line filters, matched against the stripped line
PAGE_NUMBER_LINE = re.compile(r"^(page\s+)?[0-9]+(\s*(/|of)\s*[0-9]+)?$", re.IGNORECASE)
BARE_NUMBER_LINE = re.compile(r"^[0-9]{1,3}$")
URL_LINE = re.compile(r"^https?://\S+$")
EMAIL_LINE = re.compile(r"^[A-Za-z0-9_.-]+@[A-Za-z0-9_.-]+\.[A-Za-z0-9_]+$")

# List markers; indentation and separator are horizontal whitespace only so
# a marker never swallows the blank line that separates it from a paragraph
_GLYPH_BULLET = re.compile(r"^[^\S\n]*[•●○◦▪▫■□★☆►▸]+[^\S\n]+", re.MULTILINE)
_DASH_BULLET = re.compile(r"^[^\S\n]*[-–—]+[^\S\n]+", re.MULTILINE)
_NUMBERED_MARKER = re.compile(r"^[^\S\n]*([0-9]+)[.)][^\S\n]+", re.MULTILINE)

# Repeated-line candidates: 5 < len(stripped line) < 100
REPEATED_MIN_EXCLUSIVE = 5
REPEATED_MAX_EXCLUSIVE = 100
REPEATED_MAX_OCCURRENCES = 2


def is_page_number_line(line: str) -> bool:
    """True for lines like "12", "Page 3", "4 of 10" or "5/12"."""
    stripped = line.strip()
    return bool(PAGE_NUMBER_LINE.match(stripped) or BARE_NUMBER_LINE.match(stripped))


def is_standalone_link_line(line: str) -> bool:
    """True when the whole line is a single URL or email address."""
    stripped = line.strip()
    return bool(URL_LINE.match(stripped) or EMAIL_LINE.match(stripped))


def normalize_whitespace(text: str) -> str:
    """Unify line endings and collapse whitespace runs.

    CRLF and CR become LF, runs of spaces become one space, runs of tabs
    become one tab, and four or more newlines become exactly three.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _SPACE_RUN.sub(" ", text)
    text = _TAB_RUN.sub("\t", text)
    return _BLANK_LINE_RUN.sub("\n\n\n", text)


def remove_pdf_artifacts(text: str) -> str:
    """Strip artifacts left behind by PDF text extraction."""
    text = _ZERO_WIDTH.sub("", text)
    text = text.replace(_SOFT_HYPHEN, "")
    text = _LINE_WRAP_HYPHEN.sub(r"\1\2", text)
    text = _CASE_BOUNDARY.sub(r"\1 \2", text)
    return text.replace("\f", "\n\n")


def remove_page_numbers(text: str) -> str:
    return "\n".join(line for line in text.split("\n") if not is_page_number_line(line))


def remove_standalone_links(text: str) -> str:
    return "\n".join(
        line for line in text.split("\n") if not is_standalone_link_line(line)
    )


def find_repeated_lines(text: str) -> set[str]:
    """Return stripped lines that occur more than twice in the document.

    Only lines whose stripped length is between 6 and 99 characters count;
    shorter lines are too generic and longer ones are real content.
    """
    counts = Counter(
        stripped
        for stripped in (line.strip() for line in text.split("\n"))
        if REPEATED_MIN_EXCLUSIVE < len(stripped) < REPEATED_MAX_EXCLUSIVE
    )
    return {line for line, count in counts.items() if count > REPEATED_MAX_OCCURRENCES}


def remove_repeated_sections(text: str) -> str:
    """Drop every occurrence of running header/footer lines."""
    repeated = find_repeated_lines(text)
    if not repeated:
        return text
    return "\n".join(line for line in text.split("\n") if line.strip() not in repeated)


def normalize_lists(text: str) -> str:
    """Rewrite bullet glyphs and dashes to "• " and "1)" markers to "1. "."""
    text = _GLYPH_BULLET.sub("• ", text)
    text = _DASH_BULLET.sub("• ", text)
    return _NUMBERED_MARKER.sub(r"\1. ", text)


def _line_count(text: str) -> int:
    return text.count("\n") + 1


def _run_pipeline(
    text: str, options: PreprocessOptions, changes: Optional[List[str]] = None
) -> str:
    def note(message: str) -> None:
        if changes is not None:
            changes.append(message)

    result = normalize_whitespace(text)

    cleaned = remove_pdf_artifacts(result)
    if cleaned != result:
        note("Removed PDF extraction artifacts")
    result = cleaned

    if options.remove_page_numbers:
        cleaned = remove_page_numbers(result)
        removed = _line_count(result) - _line_count(cleaned)
        if removed:
            note(f"Removed {removed} page number lines")
        result = cleaned

    if options.remove_links:
        cleaned = remove_standalone_links(result)
        removed = _line_count(result) - _line_count(cleaned)
        if removed:
            note(f"Removed {removed} standalone link lines")
        result = cleaned

    if options.remove_repeated:
        cleaned = remove_repeated_sections(result)
        removed = _line_count(result) - _line_count(cleaned)
        if removed:
            note(f"Removed {removed} repeated boilerplate lines")
        result = cleaned

    cleaned = normalize_lists(result)
    if cleaned != result:
        note("Normalized list markers")
    result = cleaned

    if options.fix_ocr:
        cleaned = fix_ocr_errors(result)
        if cleaned != result:
            note("Applied OCR character fixes")
        result = cleaned

    return normalize_whitespace(result).strip()


def preprocess_text(text: str, options: Optional[PreprocessOptions] = None) -> str:
    """Run the full cleanup pipeline.

    Stages run in a fixed order: whitespace, artifacts, page numbers, links,
    repeated lines, list markers, OCR fixes, whitespace again, then trim.
    Page-number, link and repeated-line removal are on by default; OCR
    fixing is off unless ``options.fix_ocr`` is set.

    Args:
        text: Raw extracted text
        options: Stage switches (defaults to ``PreprocessOptions()``)

    Returns:
        Cleaned text. Deterministic and side-effect free.
    """
    return _run_pipeline(text, options or PreprocessOptions())


def quick_clean(text: str) -> str:
    """Cheap pass: artifact removal followed by whitespace normalization."""
    return normalize_whitespace(remove_pdf_artifacts(text))


class TextCleanerRefiner(IRefiner):
    """Refiner wrapper around :func:`preprocess_text`.

    Reports one change entry per stage that altered the text.

    Examples:
        >>> cleaner = TextCleanerRefiner()
        >>> result = cleaner.refine("Intro\\n\\n12\\n\\n- first item")
        >>> result.refined
        'Intro\\n\\n\\n• first item'
        >>> result.changes
        ['Removed 1 page number lines', 'Normalized list markers']
    """

    def __init__(self, options: Optional[PreprocessOptions] = None) -> None:
        self.options = options or PreprocessOptions()

    def is_available(self) -> bool:
        """Always available - uses only standard library."""
        return True

    def refine(
        self, text: str, metadata: Optional[Dict[str, Any]] = None
    ) -> RefinedText:
        """Clean text and record what each stage did.

        Args:
            text: Text to clean
            metadata: Optional metadata (not used)

        Returns:
            RefinedText with cleaned text and change log
        """
        if not text:
            return RefinedText(original=text, refined=text)

        changes: List[str] = []
        refined = _run_pipeline(text, self.options, changes)
        return RefinedText(original=text, refined=refined, changes=changes)
