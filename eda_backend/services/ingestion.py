"""
CSV file ingestion and parsing.

Handles the upload gate and turns uploaded CSV bytes into records for the
profiler:
- Rejects files that are not .csv or exceed the size limit
- Decodes the content, trying several encodings
- Parses with pandas, keeping every cell as text so the profiler decides types
"""
from io import StringIO
from typing import List, Optional

import pandas as pd

from eda_backend import config
from eda_backend.models import RawRecord


class IngestionError(ValueError):
    """Base class for uploads rejected before profiling."""


class UnsupportedFileError(IngestionError):
    pass


class FileTooLargeError(IngestionError):
    pass


class CsvParseError(IngestionError):
    pass


def validate_upload(filename: Optional[str], size: int) -> None:
    """
    Check the upload gate: file extension and size.

    Args:
        filename: Name of the uploaded file
        size: Size of the content in bytes

    Raises:
        UnsupportedFileError: If the file is not a CSV file
        FileTooLargeError: If the content exceeds MAX_UPLOAD_BYTES
    """
    if not filename or not filename.lower().endswith(config.ALLOWED_EXTENSIONS):
        raise UnsupportedFileError("Please upload a CSV file")
    if size > config.MAX_UPLOAD_BYTES:
        raise FileTooLargeError(f"File size must be less than {config.MAX_UPLOAD_MB}MB")


def decode_content(content: bytes) -> str:
    """
    Decode uploaded bytes, trying each encoding of CSV_ENCODINGS in turn.

    latin-1 maps every byte, so the last attempt never fails.
    """
    for encoding in config.CSV_ENCODINGS:
        try:
            text = content.decode(encoding)
            if encoding != config.CSV_ENCODINGS[0]:
                print(f"[INGESTION] Decoded upload with fallback encoding: {encoding}")
            return text
        except UnicodeDecodeError:
            print(f"[INGESTION] Encoding {encoding} failed, trying next...")
    return content.decode("latin-1")


def parse_csv_text(text: str) -> List[RawRecord]:
    """
    Parse CSV text into records (column name -> cell text).

    Every cell stays a string; missing trailing fields become empty strings.
    Header names are whitespace-trimmed and blank lines are skipped.

    Args:
        text: Decoded CSV content

    Returns:
        List of dictionaries, one per data row. Empty when the text has no header.

    Raises:
        CsvParseError: If pandas cannot parse the content
    """
    if not text.strip():
        return []

    try:
        df = pd.read_csv(
            StringIO(text),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        return []
    except (pd.errors.ParserError, ValueError) as e:
        raise CsvParseError(f"Error parsing CSV: {e}") from e

    df.columns = [str(col).strip() for col in df.columns]
    # Short rows are padded with NaN by pandas even with keep_default_na=False
    df = df.fillna("")
    return df.to_dict(orient="records")


def read_csv_records(filename: Optional[str], content: bytes) -> List[RawRecord]:
    """
    Validate, decode and parse an uploaded CSV file.

    Args:
        filename: Name of the uploaded file
        content: Raw file bytes

    Returns:
        List of records ready for profiling

    Raises:
        IngestionError: If the upload is rejected or cannot be parsed
    """
    validate_upload(filename, len(content))
    records = parse_csv_text(decode_content(content))
    print(f"[INGESTION] Parsed {len(records)} rows from {filename}")
    return records
