"""
FASTA index construction.

Scans a FASTA file once and records, for every record, where its sequence
body starts and how many characters it holds. Line geometry is measured a
single time from the first sequence line of the file and stamped on every
entry: the format assumes one wrapping width for the whole file.
"""

from __future__ import annotations
import logging
from typing import BinaryIO

from fastaseek.core.errors import FastaError, FormatError
from fastaseek.core.fasta import HEADER_MARKER, iter_records, parse_name, rewind
from fastaseek.core.models import IndexEntry, IndexTable
from fastaseek.core.result import Result, try_fasta

logger = logging.getLogger(__name__)


def _is_visible(byte: int) -> bool:
    """Printable and not a space, like C's isgraph()."""
    return 0x21 <= byte <= 0x7E


def _measure_line_geometry(stream: BinaryIO) -> tuple[int, int]:
    rewind(stream)

    header = stream.readline()
    if not header:
        raise FormatError("could not read a header from FASTA file")
    if not header.startswith(HEADER_MARKER):
        raise FormatError(f"expected header ('>'), instead: {header[:1].decode('latin-1')!r}")
    if not header.endswith(b"\n"):
        raise FormatError("FASTA file ends right after the first header")

    line = stream.readline()
    line_length = sum(1 for byte in line if _is_visible(byte))
    byte_length = len(line)
    if not line.endswith(b"\n"):
        # the terminator is counted even when the file ends mid-line
        byte_length += 1

    logger.debug(f"Measured line geometry: {line_length} visible / {byte_length} raw bytes per line")
    return line_length, byte_length


def measure_line_geometry(stream: BinaryIO) -> Result[tuple[int, int], FastaError]:
    """
    Measure (line_length, byte_length) from the first record's first sequence line.

    Args:
        stream: Seekable binary FASTA stream (rewound before reading)

    Returns:
        Ok((line_length, byte_length)), or Err(FormatError/IoError)
    """
    return try_fasta(_measure_line_geometry, stream)


def _build_table(stream: BinaryIO) -> IndexTable:
    line_length, byte_length = _measure_line_geometry(stream)

    entries: list[IndexEntry] = []
    for record in iter_records(stream):
        entries.append(
            IndexEntry(
                name=parse_name(record.header),
                length=len(record.sequence),
                offset=record.offset,
                line_length=line_length,
                byte_length=byte_length,
            )
        )

    logger.info(f"Indexed {len(entries)} FASTA records")
    return IndexTable(entries)


def build_index(stream: BinaryIO) -> Result[IndexTable, FastaError]:
    """
    Build an index table from a FASTA stream.

    The stream is rewound first and scanned twice: once to measure line
    geometry and once to walk every record. On any failure no table is
    returned, so a half-built index can never be used.

    Args:
        stream: Seekable binary FASTA stream

    Returns:
        Ok(IndexTable) with one entry per record in file order,
        Err(FormatError) for malformed headers or records,
        Err(IoError) when the stream cannot be rewound or read

    Example:
        >>> with open("reference.fa", "rb") as f:
        ...     table = build_index(f).unwrap()
        >>> table[0].length
        60
    """
    result = try_fasta(_build_table, stream)
    if result.is_err():
        logger.error(f"Index build failed: {result.unwrap_err()}")
    return result
