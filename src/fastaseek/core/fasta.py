"""
Low-level FASTA reading primitives.

All readers work on a seekable binary stream so that byte offsets reported
by ``tell()`` are exact file positions. Bytes are decoded as latin-1, which
maps every byte to exactly one character and keeps sequence lengths equal
to byte counts.
"""

from __future__ import annotations
import re
from typing import BinaryIO, Iterator, NamedTuple, Optional

from fastaseek.core.errors import FormatError, IoError


HEADER_MARKER = b">"
ENCODING = "latin-1"

# Header names end at space, tab, CR or LF; other bytes belong to the name.
_NAME_PATTERN = re.compile(rb"[ \t\r\n]*([^ \t\r\n]+)")


class RawRecord(NamedTuple):
    """One record as seen by a sequential scan."""
    header: bytes
    offset: int
    sequence: bytes


def rewind(stream: BinaryIO) -> None:
    """Seek back to the first byte, raising IoError if the stream cannot seek."""
    try:
        stream.seek(0)
    except (OSError, ValueError) as e:
        raise IoError(f"could not rewind FASTA file: {e}") from e


def read_header(stream: BinaryIO) -> Optional[bytes]:
    """
    Read the next header line.

    Returns:
        The raw header line (terminator included), or None at end of input

    Raises:
        FormatError: If the next line does not start with '>'
    """
    line = stream.readline()
    if not line:
        return None
    if not line.startswith(HEADER_MARKER):
        raise FormatError(f"expected header ('>'), instead: {line[:1].decode(ENCODING)!r}")
    return line


def parse_name(header: bytes) -> str:
    """
    Extract the record name from a header line.

    The name is the first run of non-whitespace characters after the '>'.

    Raises:
        FormatError: If the header carries no name
    """
    match = _NAME_PATTERN.match(header, len(HEADER_MARKER))
    if match is None:
        raise FormatError("could not parse record name from FASTA header")
    return match.group(1).decode(ENCODING)


def read_sequence(stream: BinaryIO, count: Optional[int] = None) -> bytes:
    """
    Read wrapped sequence lines and join them without terminators.

    Reading stops at the next header (left unread), at end of input, or
    once at least ``count`` characters have been collected. Whole lines are
    consumed, so the result may exceed ``count``.
    """
    chunks: list[bytes] = []
    total = 0
    while count is None or total < count:
        line_start = stream.tell()
        line = stream.readline()
        if not line:
            break
        if line.startswith(HEADER_MARKER):
            stream.seek(line_start)
            break
        chunk = line.rstrip(b"\r\n")
        chunks.append(chunk)
        total += len(chunk)
    return b"".join(chunks)


def iter_records(stream: BinaryIO) -> Iterator[RawRecord]:
    """
    Scan the whole stream from the start, yielding every record in order.

    Raises:
        IoError: If the stream cannot be rewound
        FormatError: If a record does not start with a header line
    """
    rewind(stream)
    while True:
        header = read_header(stream)
        if header is None:
            return
        offset = stream.tell()
        yield RawRecord(header, offset, read_sequence(stream))
