"""
Data ingestion layer for reading uploaded datasets.

All CSV reading happens through this module so every caller sees the
same comment handling and delimiter detection.
"""

from exohunt.ingestion.csv_reader import ParsedCSV, parse_csv_text, read_csv_file

__all__ = ["ParsedCSV", "parse_csv_text", "read_csv_file"]
