"""
Access strategies for an open FASTA stream.

A session is in exactly one of two modes:

  IndexedMode    - an IndexTable is loaded; positions are translated to
                   byte offsets and read with a single seek.
  SequentialMode - no index; every query rescans the file from the start.

Both modes raise FastaError subclasses; the owning session turns them
into Err results. Neither mode owns the stream, it is passed in per call.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import BinaryIO, Union

from fastaseek.core.errors import (
    IoError,
    NotFoundError,
    NotIndexedError,
    OutOfRangeError,
)
from fastaseek.core.fasta import ENCODING, RawRecord, iter_records, parse_name, read_sequence
from fastaseek.core.models import IndexEntry, IndexTable

logger = logging.getLogger(__name__)


def _seek(stream: BinaryIO, offset: int) -> None:
    try:
        stream.seek(offset)
    except (OSError, ValueError) as e:
        raise IoError(f"could not seek to byte {offset} in FASTA file: {e}") from e


@dataclass(frozen=True)
class IndexedMode:
    """Random access through a loaded index table."""

    table: IndexTable

    def _entry(self, ref_id: int) -> IndexEntry:
        if not self.table.contains(ref_id):
            raise OutOfRangeError(
                f"invalid record id {ref_id}: index holds {len(self.table)} records"
            )
        return self.table[ref_id]

    def get_length(self, stream: BinaryIO, ref_id: int) -> int:
        return self._entry(ref_id).length

    def get_name(self, stream: BinaryIO, ref_id: int) -> str:
        return self._entry(ref_id).name

    def find(self, stream: BinaryIO, name: str) -> int:
        ref_id = self.table.find(name)
        if ref_id is None:
            raise NotFoundError(f"no record named {name!r} in index")
        return ref_id

    def get_base(self, stream: BinaryIO, ref_id: int, position: int) -> str:
        """
        Read one base with a single seek.

        ``position == length`` passes validation and returns whatever byte
        follows the last base (a line terminator, the next '>' or an empty
        string at end of file).
        """
        entry = self._entry(ref_id)
        if not 0 <= position <= entry.length:
            raise OutOfRangeError(
                f"invalid position {position} for record {entry.name!r} (length {entry.length})"
            )

        _seek(stream, entry.seek_offset(position))
        return stream.read(1).decode(ENCODING)

    def get_sequence(self, stream: BinaryIO, ref_id: int, start: int, stop: int) -> str:
        """Return bases start..stop (0-based, both inclusive)."""
        entry = self._entry(ref_id)
        if start < 0 or start > stop or stop > entry.length:
            raise OutOfRangeError(
                f"invalid start/stop {start}, {stop} for record {entry.name!r} "
                f"(length {entry.length})"
            )

        # de-wrapping has to walk the lines, so only the start is seeked to
        _seek(stream, entry.offset)
        sequence = read_sequence(stream, stop + 1)
        return sequence[start:stop + 1].decode(ENCODING)


@dataclass(frozen=True)
class SequentialMode:
    """Linear-scan fallback used when no index is available."""

    def _scan_to(self, stream: BinaryIO, ref_id: int) -> RawRecord:
        if ref_id >= 0:
            for current_id, record in enumerate(iter_records(stream)):
                if current_id == ref_id:
                    return record
        raise NotFoundError(f"record {ref_id} not found in FASTA file")

    def get_length(self, stream: BinaryIO, ref_id: int) -> int:
        raise NotIndexedError("record lengths require an index; create or load one first")

    def get_name(self, stream: BinaryIO, ref_id: int) -> str:
        return parse_name(self._scan_to(stream, ref_id).header)

    def find(self, stream: BinaryIO, name: str) -> int:
        for ref_id, record in enumerate(iter_records(stream)):
            if parse_name(record.header) == name:
                return ref_id
        raise NotFoundError(f"no record named {name!r} in FASTA file")

    def get_base(self, stream: BinaryIO, ref_id: int, position: int) -> str:
        logger.debug(f"No index loaded, scanning for record {ref_id}")
        sequence = self._scan_to(stream, ref_id).sequence
        if not 0 <= position < len(sequence):
            raise NotFoundError(
                f"position {position} beyond record {ref_id} (length {len(sequence)})"
            )
        return sequence[position:position + 1].decode(ENCODING)

    def get_sequence(self, stream: BinaryIO, ref_id: int, start: int, stop: int) -> str:
        logger.debug(f"No index loaded, scanning for record {ref_id}")
        sequence = self._scan_to(stream, ref_id).sequence
        if start < 0 or start > stop or stop > len(sequence):
            raise NotFoundError(
                f"range {start}-{stop} beyond record {ref_id} (length {len(sequence)})"
            )
        return sequence[start:stop + 1].decode(ENCODING)


AccessMode = Union[IndexedMode, SequentialMode]


def mode_for(table: IndexTable) -> AccessMode:
    """Pick the access mode a table supports: an empty table means no index."""
    if table.is_empty():
        return SequentialMode()
    return IndexedMode(table)
