"""
Text refinement before chunking.

A refiner takes extracted text and returns a RefinedText: the input, the
output and a human-readable change log ("Removed 3 page number lines").
TextRefinementPipeline runs refiners in order, feeding each one the
previous output:

    pipeline = TextRefinementPipeline([TextCleanerRefiner(), OCRCleanupRefiner()])
    result = pipeline.refine(extracted_text)
    result.refined      # text handed to segment_into_blocks
    result.changes      # ["Normalized whitespace", "Fixed OCR confusables", ...]

Refiners are total over strings for any input the chunker can see. A
refiner that does raise is a bug, and the pipeline lets the exception
propagate.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from chunkforge.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class RefinedText:
    """Output of one refiner or a whole pipeline."""

    original: str
    refined: str
    changes: List[str] = field(default_factory=list)

    @property
    def was_modified(self) -> bool:
        return self.original != self.refined

    @property
    def change_count(self) -> int:
        return len(self.changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original_length": len(self.original),
            "refined_length": len(self.refined),
            "changes": self.changes,
            "was_modified": self.was_modified,
        }


class IRefiner(ABC):
    """A single cleanup step over extracted text."""

    @abstractmethod
    def refine(self, text: str, metadata: Optional[Dict[str, Any]] = None) -> RefinedText:
        """Return the refined text with a log of what changed.

        Args:
            text: Text to refine
            metadata: Source information (file name, page) for refiners that use it
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the refiner can run in this environment."""

    @property
    def name(self) -> str:
        return type(self).__name__

    def get_metadata(self) -> Dict[str, Any]:
        return {"name": self.name, "available": self.is_available()}

    def __repr__(self) -> str:
        state = "available" if self.is_available() else "unavailable"
        return f"{self.name}({state})"


class TextRefinementPipeline:
    """Runs refiners in order; unavailable ones are dropped up front."""

    def __init__(self, refiners: List[IRefiner]) -> None:
        self.refiners = refiners
        self.active_refiners = [r for r in refiners if r.is_available()]
        skipped = len(refiners) - len(self.active_refiners)
        if skipped:
            logger.debug("Skipping unavailable refiners", count=skipped)

    def refine(self, text: str, metadata: Optional[Dict[str, Any]] = None) -> RefinedText:
        """Apply every active refiner and merge their change logs.

        Blank input is returned untouched without calling any refiner.
        """
        if not text.strip() or not self.active_refiners:
            return RefinedText(original=text, refined=text)

        current = text
        changes: List[str] = []
        for refiner in self.active_refiners:
            step = refiner.refine(current, metadata or {})
            logger.debug(
                "Refiner applied",
                refiner=refiner.name,
                changes=step.change_count,
                chars_removed=len(current) - len(step.refined),
            )
            current = step.refined
            changes.extend(step.changes)

        return RefinedText(original=text, refined=current, changes=changes)

    def get_summary(self) -> Dict[str, Any]:
        return {
            "total_refiners": len(self.refiners),
            "active_refiners": len(self.active_refiners),
            "refiners": [r.get_metadata() for r in self.active_refiners],
        }
