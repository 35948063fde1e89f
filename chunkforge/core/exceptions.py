"""
Exception hierarchy for ChunkForge.

    ChunkForgeError
    ├── ProcessingError
    │   ├── ExtractionError      CF-PROC-001  input file yields no text
    │   └── ChunkingError        CF-PROC-002  nothing survived chunking
    └── ValidationError
        └── ConfigValidationError  CF-VAL-001  bad size, YAML or override

The chunking pipeline never raises for malformed text; empty or noisy
input degrades to an empty chunk list. These exceptions are raised at the
edges: when a configuration is built, and when the CLI reads a file or
requires at least one chunk.

Every error carries an ``error_code`` plus ``why_it_happened`` and
``how_to_fix`` texts, which the CLI renders as a panel. Messages are
sanitized on construction so home directories and credentials do not end
up in terminal output or logs.
"""

import re
from typing import Any, Callable, Dict, List, Optional, Pattern, Tuple, Union

_HOME_DIRS: List[Tuple[Pattern[str], str]] = [
    (re.compile(r"[A-Za-z]:\\Users\\[^\\]+"), "<user-home>"),
    (re.compile(r"/(?:home|Users)/[^/]+"), "<user-home>"),
]

_Replacement = Union[str, Callable[["re.Match[str]"], str]]
_SECRETS: List[Tuple[Pattern[str], _Replacement]] = [
    (re.compile(r"(sk-|pk-|api_key[=:]\s*)[a-zA-Z0-9_-]{20,}"), r"\1<api-key>"),
    (re.compile(r"Bearer\s+[a-zA-Z0-9_.-]+"), "Bearer <token>"),
    (re.compile(r"://[^:/\s]+:[^@\s]+@"), "://<user>:<pass>@"),
    (re.compile(r"[A-Za-z]:\\[^\s\"']+"), lambda m: sanitize_path(m.group(0))),
    (re.compile(r"/(?:home|Users)/[^\s\"']+"), lambda m: sanitize_path(m.group(0))),
]


def sanitize_path(path: str) -> str:
    """Replace a user's home directory with ``<user-home>``."""
    for pattern, replacement in _HOME_DIRS:
        path = pattern.sub(replacement, path)
    return path


def sanitize_message(message: str) -> str:
    """Mask API keys, bearer tokens, URL credentials and home paths."""
    for pattern, replacement in _SECRETS:
        message = pattern.sub(replacement, message)
    return message


def get_root_cause(exc: BaseException) -> BaseException:
    """Follow __cause__ (preferred) and __context__ to the first error."""
    seen = {id(exc)}
    current = exc
    while True:
        parent = current.__cause__ or current.__context__
        if parent is None or id(parent) in seen:
            return current
        seen.add(id(parent))
        current = parent


class ChunkForgeError(Exception):
    """Base class for every ChunkForge error.

    Subclasses set the class-level defaults; any of them can be overridden
    per instance.
    """

    error_code: str = "CF-ERR-000"
    why_it_happened: str = "An unexpected error occurred"
    how_to_fix: List[str] = ["Check the error message for details"]

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        super().__init__(sanitize_message(message))
        if error_code is not None:
            self.error_code = error_code
        if why_it_happened is not None:
            self.why_it_happened = why_it_happened
        if how_to_fix is not None:
            self.how_to_fix = how_to_fix

    @property
    def user_message(self) -> str:
        return str(self)

    def get_root_cause(self) -> BaseException:
        return get_root_cause(self)


class ProcessingError(ChunkForgeError):
    """A document could not be turned into chunks."""

    error_code = "CF-PROC-000"
    why_it_happened = "Document processing failed"
    how_to_fix = [
        "Check that the file is readable text",
        "Run 'chunkforge clean' to see what preprocessing produces",
    ]


class ExtractionError(ProcessingError):
    """
    No usable text could be read from an input.

    Raised for empty or whitespace-only files and for CSV content that
    cannot be parsed into rows.
    """

    error_code = "CF-PROC-001"
    why_it_happened = (
        "The input has no text to chunk. The file may be empty, contain only "
        "whitespace, or be a CSV file whose rows could not be parsed"
    )
    how_to_fix = [
        "Check that the file opens correctly in a text editor",
        "Extract text from PDFs before chunking (e.g., with a PDF-to-text tool)",
        "For CSV input, make sure every row has no more cells than the header",
    ]


class ChunkingError(ProcessingError):
    """
    The caller required chunks but none survived.

    The chunker itself returns an empty list; the CLI turns that into this
    error so the user sees why nothing was produced.
    """

    error_code = "CF-PROC-002"
    why_it_happened = (
        "Every block was classified as header/footer noise or fell below "
        "the minimum chunk size"
    )
    how_to_fix = [
        "Ensure the document has sufficient content (at least a few sentences)",
        "Lower min_chunk_size if the document is very short",
        "Run 'chunkforge classify' to see how blocks were detected",
    ]


class ValidationError(ChunkForgeError):
    """Input or configuration values are out of range."""

    error_code = "CF-VAL-000"
    why_it_happened = "A value failed validation"
    how_to_fix = ["Check the error message for the rejected value"]


class ConfigValidationError(ValidationError):
    """
    A configuration value is invalid.

    Attributes:
        field: Name of the offending setting, when known
        value: The rejected value
    """

    error_code = "CF-VAL-001"
    why_it_happened = (
        "A chunking setting is invalid. The value came from chunkforge.yaml, "
        "a CHUNKFORGE_* environment variable or a command-line option"
    )
    how_to_fix = [
        "Check chunkforge.yaml for syntax errors",
        "Sizes must be whole numbers; max sizes must be positive",
        "Check CHUNKFORGE_* environment variables",
    ]

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


def _info(code: str, why: str, *fixes: str) -> Dict[str, Any]:
    return {"error_code": code, "why_it_happened": why, "how_to_fix": list(fixes)}


# Built-in exceptions the CLI can meet while reading and writing files.
# Looked up along the exception's MRO, so subclasses share their parent's entry.
STANDARD_ERROR_INFO: Dict[type, Dict[str, Any]] = {
    FileNotFoundError: _info(
        "CF-FILE-001",
        "The specified file or directory could not be found",
        "Check that the file path is correct",
        "Ensure you have read permissions for the file",
    ),
    PermissionError: _info(
        "CF-FILE-002",
        "You don't have permission to access this file or directory",
        "Check file permissions: ls -la <file>",
        "Choose an --output location you can write to",
    ),
    UnicodeDecodeError: _info(
        "CF-FILE-003",
        "The file is not valid UTF-8 text",
        "Convert the file to UTF-8",
        "Extract text from binary formats before chunking",
    ),
    ValueError: _info(
        "CF-VAL-002",
        "An invalid value was provided",
        "Check the error message for the expected value format",
    ),
    OSError: _info(
        "CF-SYS-001",
        "A system-level error occurred",
        "Check disk space and permissions",
    ),
}

_UNKNOWN_ERROR_INFO = _info(
    "CF-ERR-999",
    "An unexpected error occurred",
    "Check the error message for details",
    "Re-run with --verbose to see the traceback",
)


def get_error_info(exc: BaseException) -> Dict[str, Any]:
    """Map any exception to ``error_code``, ``why_it_happened`` and ``how_to_fix``."""
    if isinstance(exc, ChunkForgeError):
        return {
            "error_code": exc.error_code,
            "why_it_happened": exc.why_it_happened,
            "how_to_fix": exc.how_to_fix,
        }
    for cls in type(exc).__mro__:
        if cls in STANDARD_ERROR_INFO:
            return STANDARD_ERROR_INFO[cls]
    return _UNKNOWN_ERROR_INFO
