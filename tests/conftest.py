"""
Shared pytest fixtures for ChunkForge tests.

Fixture Organization
--------------------
- **temp_dir**: Temporary directory for file operations
- **isolated_env**: Working directory and environment free of config files
  and CHUNKFORGE_* overrides
- **sample texts**: Resume, report and table fragments used across the
  chunking and classification tests
"""

import os
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from chunkforge.cli import console as cli_console


# ============================================================================
# Path and Directory Fixtures
# ============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory (cleaned up after test)
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test from an empty directory with no CHUNKFORGE_* variables."""
    for name in list(os.environ):
        if name.startswith("CHUNKFORGE_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture(autouse=True)
def reset_verbose_mode() -> Generator[None, None, None]:
    """Keep the CLI --verbose flag from leaking between tests."""
    yield
    cli_console.set_verbose_mode(False)


# ============================================================================
# Sample Text Fixtures
# ============================================================================


@pytest.fixture
def resume_text() -> str:
    return (
        "John Smith\n"
        "john.smith@example.com | 555-123-4567\n"
        "\n"
        "EXPERIENCE\n"
        "\n"
        "Senior Engineer at Acme Corp. Led the migration of billing services "
        "to a new platform. Reduced deploy times by half across the team.\n"
        "\n"
        "Skills: Python, SQL, Kubernetes\n"
    )


@pytest.fixture
def table_text() -> str:
    return "Name | Age | City\n---- | --- | ----\nAlice | 30 | NYC\nBob | 25 | LA"


@pytest.fixture
def long_sentences_text() -> str:
    """1500 characters of short sentences, no paragraph breaks."""
    return "A. B. C. D. " * 125
