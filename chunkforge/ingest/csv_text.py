"""
CSV to Text Rendering.

Tabular uploads are chunked as text: each data row becomes one line of
``key: value`` pairs so that every chunk carries its column names.

    name,role          →   name: Ada, role: Engineer
    Ada,Engineer           name: Lin, role: Designer
    Lin,Designer

Delimiter detection: tab when the content holds a
tab and no comma, comma otherwise.
"""

import csv
import io
from dataclasses import dataclass, field
from typing import Dict, List

from chunkforge.core.exceptions import ExtractionError
from chunkforge.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class CsvDocument:
    """Rendered CSV content.

    Attributes:
        text: One ``key: value, key: value`` line per data row
        columns: Header names, trimmed
        row_count: Number of data rows rendered
        rows: Parsed rows keyed by column name
    """

    text: str
    columns: List[str] = field(default_factory=list)
    row_count: int = 0
    rows: List[Dict[str, str]] = field(default_factory=list)


def detect_delimiter(content: str) -> str:
    return "\t" if "\t" in content and "," not in content else ","


def render_row(row: Dict[str, str]) -> str:
    return ", ".join(f"{key}: {value}" for key, value in row.items())


def csv_to_text(content: str) -> CsvDocument:
    """Parse CSV content with a header row and render it as text.

    Cells are trimmed and blank lines skipped.

    Args:
        content: Raw CSV file content

    Returns:
        CsvDocument with the rendered text and parsed rows

    Raises:
        ExtractionError: If the content is not valid CSV or a row has more
            cells than the header
    """
    delimiter = detect_delimiter(content)
    reader = csv.reader(io.StringIO(content), delimiter=delimiter)

    try:
        records = [
            [cell.strip() for cell in record]
            for record in reader
            if any(cell.strip() for cell in record)
        ]
    except csv.Error as e:
        raise ExtractionError(f"Could not parse CSV content: {e}") from e

    if not records:
        return CsvDocument(text="")

    columns = records[0]
    rows: List[Dict[str, str]] = []
    for line_number, record in enumerate(records[1:], start=2):
        if len(record) > len(columns):
            raise ExtractionError(
                f"CSV row {line_number} has {len(record)} cells but the header "
                f"has {len(columns)} columns"
            )
        padded = record + [""] * (len(columns) - len(record))
        rows.append(dict(zip(columns, padded)))

    logger.debug(
        "Parsed CSV",
        delimiter="tab" if delimiter == "\t" else "comma",
        columns=len(columns),
        rows=len(rows),
    )

    return CsvDocument(
        text="\n".join(render_row(row) for row in rows),
        columns=columns,
        row_count=len(rows),
        rows=rows,
    )
