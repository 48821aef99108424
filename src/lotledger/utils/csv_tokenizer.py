"""Tokenizer for quoted, comma-separated export text."""

import csv
import io


def tokenize_csv(text: str) -> list[list[str]]:
    """Split raw CSV text into rows of fields.

    Fields wrapped in double quotes may contain commas, line breaks and
    doubled ("") quotes. Both LF and CRLF line endings are accepted.
    Blank or whitespace-only lines are dropped, so empty input yields no
    rows.

    Raises:
        ValueError: If the text cannot be read as CSV at all
    """
    if not text or not text.strip():
        return []

    rows: list[list[str]] = []
    reader = csv.reader(io.StringIO(text, newline=""))
    try:
        for fields in reader:
            if _is_blank(fields):
                continue
            rows.append(fields)
    except csv.Error as e:
        raise ValueError(f"Unreadable CSV at line {reader.line_num}: {e}") from e
    return rows


def _is_blank(fields: list[str]) -> bool:
    return len(fields) <= 1 and not "".join(fields).strip()
