"""
CSV parsing for uploaded datasets.

Handles the quirks of catalogue exports: commented preambles (the NASA
Exoplanet Archive prefixes downloads with '#' lines), unknown delimiters
and trailing blank columns.
"""

import io
import re
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from exohunt.utils.logging import get_logger

log = get_logger(__name__)

CANDIDATE_DELIMITERS: tuple[str, ...] = (",", ";", "\t", "|")
COMMENT_PREFIX = "#"
QUOTE_CHAR = '"'

_LINE_BREAK = re.compile(r"\r?\n")


@dataclass
class ParsedCSV:
    """
    Result of parsing CSV text.

    Attributes:
        headers: Column headers as written, in file order (blank headers
            removed, duplicates kept).
        rows: One dict per data row, raw header -> cell string.
        delimiter: Detected delimiter.
        errors: Parser errors; empty on success.
    """

    headers: list[str] = field(default_factory=list)
    rows: list[dict[str, str]] = field(default_factory=list)
    delimiter: str = ","
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Whether parsing succeeded."""
        return not self.errors


def strip_comment_lines(text: str) -> list[str]:
    """
    Drop comment lines and blank lines, keep everything else verbatim.

    Only ``\\n`` and ``\\r\\n`` end a line. A line that starts inside a quoted
    field (an odd number of quote characters so far) is a continuation of
    the previous row and is always kept, even when blank or starting with
    ``#``.
    """
    kept: list[str] = []
    in_quotes = False
    for line in _LINE_BREAK.split(text):
        if in_quotes or (
            line.strip() and not line.lstrip().startswith(COMMENT_PREFIX)
        ):
            kept.append(line)
            if line.count(QUOTE_CHAR) % 2:
                in_quotes = not in_quotes
    return kept


def detect_delimiter(header_line: str) -> str:
    """
    Pick the candidate delimiter that occurs most often in the header line.

    Falls back to a comma for single-column files.
    """
    counts = {delim: header_line.count(delim) for delim in CANDIDATE_DELIMITERS}
    best = max(counts, key=lambda delim: counts[delim])
    return best if counts[best] > 0 else ","


def _rows_by_header(
    header_row: list[str], data: pd.DataFrame, keep: list[int]
) -> list[dict[str, str]]:
    """Key data rows by raw header; a repeated header keeps its first non-empty cell."""
    rows: list[dict[str, str]] = []
    for values in data.itertuples(index=False, name=None):
        row: dict[str, str] = {}
        for position in keep:
            header = header_row[position]
            if not row.get(header):
                row[header] = values[position]
        rows.append(row)
    return rows


def parse_csv_text(text: str) -> ParsedCSV:
    """
    Parse CSV text with a header row.

    Every cell is read as a string; missing trailing cells become empty
    strings. Headers are kept exactly as written, duplicates included.
    Errors are reported in the result rather than raised.

    Args:
        text: Full CSV content.

    Returns:
        ParsedCSV with headers and rows, or with errors set.
    """
    lines = strip_comment_lines(text)
    if not lines:
        return ParsedCSV(errors=["No header row found"])

    delimiter = detect_delimiter(lines[0])

    try:
        # header=None: pandas would otherwise rename duplicates to "name.1"
        df = pd.read_csv(
            io.StringIO("\n".join(lines)),
            sep=delimiter,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        log.warning("CSV parse failed", delimiter=delimiter, error=str(e))
        return ParsedCSV(delimiter=delimiter, errors=[str(e).strip()])

    df = df.fillna("")
    header_row = [str(cell) for cell in df.iloc[0]]

    keep = [i for i, header in enumerate(header_row) if header.strip()]
    if len(keep) < len(header_row):
        log.debug(
            "Dropping columns with blank headers",
            positions=[i for i in range(len(header_row)) if i not in keep],
        )
    headers = [header_row[i] for i in keep]

    duplicates = sorted({h for h in headers if headers.count(h) > 1})
    if duplicates:
        log.warning("Duplicate headers", headers=duplicates)

    rows = _rows_by_header(header_row, df.iloc[1:], keep)

    log.info("Parsed CSV", rows=len(rows), columns=len(headers), delimiter=delimiter)
    return ParsedCSV(headers=headers, rows=rows, delimiter=delimiter)


def read_csv_file(path: Path) -> ParsedCSV:
    """
    Read and parse a CSV file.

    Args:
        path: Path to the CSV file.

    Returns:
        ParsedCSV; unreadable files are reported as errors.
    """
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        return ParsedCSV(errors=[f"Could not read {path.name}: {e}"])
    return parse_csv_text(text)
