"""Tests for CSV parsing."""

from collections.abc import Callable
from pathlib import Path

from exohunt.ingestion import parse_csv_text, read_csv_file
from exohunt.ingestion.csv_reader import detect_delimiter, strip_comment_lines


class TestCommentHandling:
    """Tests for comment and blank line removal."""

    def test_comment_and_blank_lines_removed(self) -> None:
        """Test that '#' lines and blank lines are dropped."""
        text = "# preamble\n\na,b\n  # indented comment\n1,2\n\n"
        assert strip_comment_lines(text) == ["a,b", "1,2"]

    def test_hash_inside_values_is_kept(self) -> None:
        """Test that only leading '#' marks a comment."""
        parsed = parse_csv_text("name,koi_teq\nKOI #1,300\n")
        assert parsed.rows == [{"name": "KOI #1", "koi_teq": "300"}]

    def test_quoted_continuation_line_kept(self) -> None:
        """Test that a line inside a quoted cell is never taken for a comment."""
        text = 'name,note\nK1,"line1\n# line2"\n# real comment\nK2,x\n'
        assert strip_comment_lines(text) == [
            "name,note",
            'K1,"line1',
            '# line2"',
            "K2,x",
        ]

    def test_only_newlines_split_lines(self) -> None:
        """Test that Unicode line separators stay inside their line."""
        assert strip_comment_lines("a\r\nb\u2028c\fd\n") == ["a", "b\u2028c\fd"]


class TestDelimiterDetection:
    """Tests for detect_delimiter()."""

    def test_common_delimiters(self) -> None:
        """Test comma, semicolon, tab and pipe."""
        assert detect_delimiter("a,b,c") == ","
        assert detect_delimiter("a;b;c") == ";"
        assert detect_delimiter("a\tb\tc") == "\t"
        assert detect_delimiter("a|b|c") == "|"

    def test_single_column_defaults_to_comma(self) -> None:
        """Test fallback when no candidate occurs."""
        assert detect_delimiter("koi_teq") == ","


class TestParseCsvText:
    """Tests for parse_csv_text()."""

    def test_parses_koi_export(self, koi_csv_text: str) -> None:
        """Test a commented archive export."""
        parsed = parse_csv_text(koi_csv_text)

        assert parsed.ok
        assert parsed.delimiter == ","
        assert parsed.headers == [
            "kepoi_name",
            "koi_disposition",
            "koi_period",
            "koi_prad",
            "koi_teq",
            "koi_score",
        ]
        assert len(parsed.rows) == 3
        assert parsed.rows[0]["koi_teq"] == "793"

    def test_cells_stay_strings_and_blanks_stay_empty(
        self, koi_csv_text: str
    ) -> None:
        """Test that no type inference or NaN conversion happens."""
        parsed = parse_csv_text(koi_csv_text)
        assert parsed.rows[2]["koi_teq"] == ""
        assert parsed.rows[0]["koi_period"] == "9.488"

    def test_semicolon_file(self) -> None:
        """Test a European-style export."""
        parsed = parse_csv_text("pl_name;pl_eqt\nTOI-700 d;268\n")
        assert parsed.delimiter == ";"
        assert parsed.rows == [{"pl_name": "TOI-700 d", "pl_eqt": "268"}]

    def test_blank_header_columns_are_dropped(self) -> None:
        """Test trailing delimiters producing unnamed columns."""
        parsed = parse_csv_text("koi_teq,koi_prad,\n300,1.2,\n")
        assert parsed.headers == ["koi_teq", "koi_prad"]
        assert parsed.rows == [{"koi_teq": "300", "koi_prad": "1.2"}]

    def test_short_rows_are_padded(self) -> None:
        """Test that missing trailing cells become empty strings."""
        parsed = parse_csv_text("koi_teq,koi_prad\n300\n")
        assert parsed.rows == [{"koi_teq": "300", "koi_prad": ""}]

    def test_duplicate_headers_kept_verbatim(self) -> None:
        """Test that a repeated header is not renamed."""
        parsed = parse_csv_text("koi_teq,koi_teq,koi_prad\n,300,1.2\n400,500,\n")

        assert parsed.headers == ["koi_teq", "koi_teq", "koi_prad"]
        assert parsed.rows == [
            {"koi_teq": "300", "koi_prad": "1.2"},
            {"koi_teq": "400", "koi_prad": ""},
        ]

    def test_multiline_quoted_cell(self) -> None:
        """Test a quoted cell spanning a line that starts with '#'."""
        parsed = parse_csv_text('name,note\nK1,"line1\n# line2"\n')
        assert parsed.ok
        assert parsed.rows == [{"name": "K1", "note": "line1\n# line2"}]

    def test_line_separator_inside_cell_preserved(self) -> None:
        """Test that U+2028 in a value is not turned into a newline."""
        parsed = parse_csv_text('name,note\nK1,"a\u2028b"\n')
        assert parsed.rows == [{"name": "K1", "note": "a\u2028b"}]

    def test_crlf_line_endings(self) -> None:
        """Test Windows line endings."""
        parsed = parse_csv_text("koi_teq,koi_prad\r\n300,1.2\r\n")
        assert parsed.rows == [{"koi_teq": "300", "koi_prad": "1.2"}]

    def test_header_only(self) -> None:
        """Test a file without data rows."""
        parsed = parse_csv_text("koi_teq,koi_prad\n")
        assert parsed.ok
        assert parsed.headers == ["koi_teq", "koi_prad"]
        assert parsed.rows == []

    def test_empty_text_is_an_error(self) -> None:
        """Test that a file with only comments is rejected."""
        parsed = parse_csv_text("# nothing here\n\n")
        assert not parsed.ok
        assert parsed.errors == ["No header row found"]

    def test_too_many_fields_is_an_error(self) -> None:
        """Test that a row wider than the header is reported."""
        parsed = parse_csv_text("a,b\n1,2\n1,2,3\n")
        assert not parsed.ok
        assert parsed.errors
        assert parsed.rows == []


class TestReadCsvFile:
    """Tests for read_csv_file()."""

    def test_reads_file_with_bom(self, tmp_path: Path) -> None:
        """Test that a UTF-8 BOM does not leak into the first header."""
        path = tmp_path / "bom.csv"
        path.write_bytes("﻿koi_teq\n300\n".encode())
        parsed = read_csv_file(path)
        assert parsed.headers == ["koi_teq"]

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that an unreadable file is reported, not raised."""
        parsed = read_csv_file(tmp_path / "missing.csv")
        assert not parsed.ok
        assert "missing.csv" in parsed.errors[0]

    def test_reads_written_file(
        self, write_csv: Callable[[str, str], Path], koi_csv_text: str
    ) -> None:
        """Test reading a fixture file from disk."""
        parsed = read_csv_file(write_csv(koi_csv_text, "koi.csv"))
        assert len(parsed.rows) == 3
