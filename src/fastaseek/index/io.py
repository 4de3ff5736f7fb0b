"""
Index persistence.

The side-table is plain text, one record per line, five tab-separated
fields and no header row::

    name<TAB>length<TAB>offset<TAB>line_length<TAB>byte_length
"""

from __future__ import annotations
import logging
import re
from contextlib import nullcontext
from pathlib import Path
from typing import IO, TextIO, Union

from fastaseek.core.errors import FastaError, FormatError
from fastaseek.core.fasta import ENCODING
from fastaseek.core.models import IndexEntry, IndexTable
from fastaseek.core.result import Result, try_fasta

logger = logging.getLogger(__name__)

PathOrStream = Union[Path, str, IO[str]]

FIELD_COUNT = 5

# same separators that end a record name in the FASTA header
_FIELD_SEPARATOR = re.compile(r"[ \t\r\n]+")


def format_entry(entry: IndexEntry) -> str:
    """Render one entry as an index line (terminator included)."""
    return "\t".join(str(field) for field in entry.to_fields()) + "\n"


def parse_entry(line: str, line_num: int = 1) -> IndexEntry:
    """
    Parse one index line.

    Fields are separated by runs of space, tab, CR or LF; exactly five are required and the
    last four must be integers.

    Raises:
        FormatError: If the line is malformed
    """
    parts = _FIELD_SEPARATOR.split(line.strip(" \t\r\n"))
    if len(parts) != FIELD_COUNT:
        raise FormatError(
            f"Invalid index line {line_num}: expected {FIELD_COUNT} fields, got {len(parts)}"
        )

    name = parts[0]
    try:
        length, offset, line_length, byte_length = (int(part) for part in parts[1:])
    except ValueError:
        raise FormatError(f"Invalid index line {line_num}: non-integer field in {line.strip()!r}")

    try:
        return IndexEntry(name, length, offset, line_length, byte_length)
    except ValueError as e:
        raise FormatError(f"Invalid index line {line_num}: {e}")


def _open_for(target: PathOrStream, mode: str):
    if isinstance(target, (str, Path)):
        return open(target, mode, encoding=ENCODING, newline="\n" if "w" in mode else None)
    return nullcontext(target)


def _write(table: IndexTable, destination: PathOrStream) -> PathOrStream:
    if isinstance(destination, (str, Path)):
        Path(destination).parent.mkdir(parents=True, exist_ok=True)
    with _open_for(destination, "w") as f:
        for entry in table:
            try:
                f.write(format_entry(entry))
            except UnicodeError as e:
                raise FormatError(f"Cannot encode index entry {entry.name!r}: {e}")
    return destination


def write_index(table: IndexTable, destination: PathOrStream) -> Result[PathOrStream, FastaError]:
    """
    Persist an index table, overwriting the destination.

    Args:
        table: Index to write
        destination: Output path or writable text stream

    Returns:
        Ok(destination) on success, Err(IoError) on failure,
        Err(FormatError) if a name is not latin-1 encodable
    """
    result = try_fasta(_write, table, destination)
    if result.is_ok():
        logger.info(f"Wrote {len(table)} index entries to {destination}")
    return result


def _read_entries(f: TextIO) -> IndexTable:
    entries: list[IndexEntry] = []
    for line_num, line in enumerate(f, 1):
        if not line.strip(" \t\r\n"):
            # a blank line ends the table
            break
        entries.append(parse_entry(line, line_num))
    return IndexTable(entries)


def _load(source: PathOrStream) -> IndexTable:
    with _open_for(source, "r") as f:
        try:
            return _read_entries(f)
        except UnicodeError as e:
            raise FormatError(f"Invalid index encoding: {e}")


def load_index(source: PathOrStream) -> Result[IndexTable, FastaError]:
    """
    Load a persisted index table.

    Lines are read until end of input or the first blank line. A single
    malformed line aborts the whole load; entries are kept in file order.
    Index files are read as latin-1, the same decoding used for record names.

    Args:
        source: Index path or readable text stream

    Returns:
        Ok(IndexTable), Err(FormatError) for a malformed line,
        Err(IoError) if the index cannot be read
    """
    result = try_fasta(_load, source)
    if result.is_ok():
        logger.debug(f"Loaded {len(result.unwrap())} index entries from {source}")
    else:
        logger.error(f"Failed to load index {source}: {result.unwrap_err()}")
    return result

