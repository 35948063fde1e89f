"""
Chunking and preprocessing configuration.

Provides the size budgets used by the chunker and the switches for the
text cleanup that runs before segmentation.
"""

from dataclasses import dataclass, fields, replace
from typing import Any

from chunkforge.core.exceptions import ConfigValidationError


@dataclass(frozen=True)
class ChunkingConfig:
    """Chunk size budgets, in characters.

    Attributes:
        max_chunk_size: Max size for text, heading and list chunks
        overlap_size: Trailing characters of a chunk copied into the next one
        table_max_size: Budget for table chunks (rows are indivisible)
        min_chunk_size: Chunks shorter than this are merged or dropped
    """

    max_chunk_size: int = 1000
    overlap_size: int = 200
    table_max_size: int = 2000
    min_chunk_size: int = 100

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            # bool is an int subclass but never a size
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigValidationError(
                    f"{f.name} must be an integer, got {value!r}",
                    field=f.name,
                    value=value,
                )

        for name in ("max_chunk_size", "table_max_size"):
            if getattr(self, name) <= 0:
                raise ConfigValidationError(
                    f"{name} must be positive, got {getattr(self, name)}",
                    field=name,
                    value=getattr(self, name),
                )

        for name in ("overlap_size", "min_chunk_size"):
            if getattr(self, name) < 0:
                raise ConfigValidationError(
                    f"{name} must not be negative, got {getattr(self, name)}",
                    field=name,
                    value=getattr(self, name),
                )

    def with_overrides(self, **overrides: Any) -> "ChunkingConfig":
        """Return a copy with the given fields replaced.

        None values are ignored so CLI options can be passed straight through.
        """
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            name = sorted(unknown)[0]
            raise ConfigValidationError(
                f"Unknown chunking option: {name}", field=name, value=overrides[name]
            )
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self

    def to_dict(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_CONFIG = ChunkingConfig()


@dataclass(frozen=True)
class PreprocessOptions:
    """Switches for the optional preprocessing stages.

    Whitespace normalization, artifact removal and list-marker
    normalization always run.
    """

    remove_repeated: bool = True
    remove_page_numbers: bool = True
    fix_ocr: bool = False  # lossy, opt-in only
    remove_links: bool = True

    def to_dict(self) -> dict[str, bool]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


# Profile the chunker preprocesses with: links are kept as retrieval content
CHUNKER_PREPROCESS_OPTIONS = PreprocessOptions(
    remove_repeated=True,
    remove_page_numbers=True,
    fix_ocr=False,
    remove_links=False,
)
