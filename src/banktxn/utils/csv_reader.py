"""Raw CSV reading into header-keyed rows."""

import csv
import io
import logging

from banktxn.domain.entities import CSVData, CSVRow

logger = logging.getLogger(__name__)


def read_csv(content: bytes, file_name: str, format_key: str) -> CSVData:
    """Parse CSV file contents into rows keyed by header name.

    The first row is the header. Each following row becomes a ``CSVRow`` whose
    line number is its 1-based position after the header. Cell values and
    headers are trimmed. Cells under a blank header are dropped but still
    occupy their column position. Rows shorter than the header simply lack the
    trailing columns; cells beyond the last header are ignored.

    Blank lines are deliberately tolerated: they are skipped rather than emitted
    as empty rows that would fail the required-value checks, and they still
    count towards the line numbers of the rows that follow.

    Args:
        content: Raw file bytes (UTF-8, optional BOM)
        file_name: Name of the file, kept for error reporting
        format_key: Format key the file is imported with

    Returns:
        CSVData with an empty row list for empty or header-only files

    Raises:
        UnicodeDecodeError: If the content is not valid UTF-8
        csv.Error: If the content is not well-formed CSV
    """
    text = content.decode("utf-8-sig")
    reader = csv.reader(io.StringIO(text, newline=""))

    headers = next(reader, None)
    if headers is None:
        logger.info("Ignoring empty csv file: %s", file_name)
        return CSVData(file_name=file_name, format=format_key)

    headers = [h.strip() for h in headers]
    rows = []
    for line_number, cells in enumerate(reader, start=1):
        if not cells:
            continue
        values = {
            header: cell.strip()
            for header, cell in zip(headers, cells)
            if header
        }
        rows.append(CSVRow(line_number=line_number, values=values))

    return CSVData(file_name=file_name, format=format_key, rows=rows)
