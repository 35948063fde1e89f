"""
OCR Confusable-Character Refiner.

Disambiguates isolated characters that OCR engines commonly confuse:
- Standalone "l" (lowercase L) read where "I" was meant
- Standalone "0" (zero) read where "O" was meant
- "1" (one) inside or at the edge of a word read where "l" was meant

These rules are guesses from word-boundary context and will corrupt text
that genuinely contains those tokens (e.g. "0 errors"). They never run as
part of the default preprocessing; callers opt in with
``PreprocessOptions(fix_ocr=True)`` or by adding ``OCRCleanupRefiner`` to a
refinement pipeline.
"""

import re
from typing import Any, Dict, List, Optional, Pattern, Tuple

from chunkforge.ingest.refinement import IRefiner, RefinedText


# (pattern, replacement, description), applied in order.
# Word characters are ASCII only; whitespace is any Unicode space (NBSP included).
OCR_RULES: List[Tuple[Pattern[str], str, str]] = [
    (re.compile(r"(?<![A-Za-z0-9_])l(?![A-Za-z0-9_])"), "I", "standalone l -> I"),
    (re.compile(r"(?<![A-Za-z0-9_])0(?![A-Za-z0-9_])"), "O", "standalone 0 -> O"),
    (re.compile(r"([a-z])1([a-z])"), r"\1l\2", "1 between letters -> l"),
    (re.compile(r"([A-Za-z0-9_])1\s"), r"\1l ", "trailing 1 -> l"),
    (re.compile(r"\s1([A-Za-z0-9_])"), r" l\1", "leading 1 -> l"),
]


def _apply_rules(text: str) -> Tuple[str, List[Tuple[str, int]]]:
    counts: List[Tuple[str, int]] = []
    for pattern, replacement, description in OCR_RULES:
        text, count = pattern.subn(replacement, text)
        if count:
            counts.append((description, count))
    return text, counts


def fix_ocr_errors(text: str) -> str:
    """Apply the OCR confusable-character rules to text.

    Lossy: only call this on text known to come from OCR.

    Examples:
        >>> fix_ocr_errors("he1lo wor1d")
        'hello world'
    """
    return _apply_rules(text)[0]


class OCRCleanupRefiner(IRefiner):
    """Refiner wrapper around :func:`fix_ocr_errors`.

    Examples:
        >>> refiner = OCRCleanupRefiner()
        >>> refiner.refine("l am 0K").refined
        'I am 0K'
    """

    def is_available(self) -> bool:
        """Always available - uses only standard library."""
        return True

    def refine(
        self, text: str, metadata: Optional[Dict[str, Any]] = None
    ) -> RefinedText:
        if not text:
            return RefinedText(original=text, refined=text)

        result, counts = _apply_rules(text)
        changes = [f"Fixed {count} OCR confusables ({desc})" for desc, count in counts]
        return RefinedText(original=text, refined=result, changes=changes)
