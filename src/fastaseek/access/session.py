"""
FASTA sessions.

A FastaSession owns one open data-file handle and the access mode that
answers queries against it. Sessions are not thread-safe: every query
moves the shared file cursor.

Usage:
    >>> result = open_fasta("reference.fa", "reference.fa.fai")
    >>> with result.unwrap() as fasta:
    ...     fasta.get_sequence(0, 100, 199).unwrap()
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import BinaryIO, Optional

from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord

from fastaseek.access.modes import AccessMode, IndexedMode, SequentialMode, mode_for
from fastaseek.core.errors import FastaError, IoError
from fastaseek.core.models import IndexTable
from fastaseek.core.result import Result, Ok, Err, try_fasta
from fastaseek.index.builder import build_index
from fastaseek.index.io import load_index, write_index

logger = logging.getLogger(__name__)


class FastaSession:
    """
    Random-access reader over one FASTA file.

    Created by open_fasta(). Released by close() or by leaving a ``with``
    block; closing is idempotent.
    """

    def __init__(self, data_path: Path, stream: BinaryIO, mode: Optional[AccessMode] = None) -> None:
        self.data_path = data_path
        self._stream: Optional[BinaryIO] = stream
        self._mode: AccessMode = mode if mode is not None else SequentialMode()

    def __enter__(self) -> FastaSession:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if not self.is_open else type(self._mode).__name__
        return f"FastaSession({str(self.data_path)!r}, {state})"

    @property
    def is_open(self) -> bool:
        return self._stream is not None

    @property
    def is_indexed(self) -> bool:
        return isinstance(self._mode, IndexedMode)

    @property
    def table(self) -> IndexTable:
        """The loaded index, or an empty table in sequential mode."""
        if isinstance(self._mode, IndexedMode):
            return self._mode.table
        return IndexTable()

    def close(self) -> Result[None, FastaError]:
        """Release the data-file handle. Safe to call any number of times."""
        stream, self._stream = self._stream, None
        self._mode = SequentialMode()
        if stream is None:
            return Ok(None)
        logger.debug(f"Closing {self.data_path}")
        return try_fasta(stream.close)

    def _dispatch(self, operation: str, *args) -> Result:
        if self._stream is None:
            return Err(IoError(f"FASTA file not open for reading: {self.data_path}"))
        return try_fasta(getattr(self._mode, operation), self._stream, *args)

    def create_index(self, index_path: Optional[Path | str] = None) -> Result[IndexTable, FastaError]:
        """
        Build an index from the open data file and switch to indexed access.

        Args:
            index_path: Where to persist the index; None keeps it in memory only

        Returns:
            Ok(IndexTable) on success. On failure the session keeps its
            previous mode and the partially built index is discarded.
        """
        if self._stream is None:
            return Err(IoError(f"cannot create index, FASTA file not open: {self.data_path}"))

        built = build_index(self._stream)
        if built.is_err():
            return built
        table = built.unwrap()

        if index_path is not None and str(index_path):
            written = write_index(table, Path(index_path))
            if written.is_err():
                return written

        self._mode = mode_for(table)
        return Ok(table)

    def get_length(self, ref_id: int) -> Result[int, FastaError]:
        """Sequence length of record ref_id; requires an index."""
        return self._dispatch("get_length", ref_id)

    def get_base(self, ref_id: int, position: int) -> Result[str, FastaError]:
        """Single base at 0-based position of record ref_id."""
        return self._dispatch("get_base", ref_id, position)

    def get_sequence(self, ref_id: int, start: int, stop: int) -> Result[str, FastaError]:
        """Bases start..stop (0-based, inclusive) of record ref_id."""
        return self._dispatch("get_sequence", ref_id, start, stop)

    def get_name(self, ref_id: int) -> Result[str, FastaError]:
        return self._dispatch("get_name", ref_id)

    def get_ref_id(self, name: str) -> Result[int, FastaError]:
        """Record id for a record name (first match in file order)."""
        return self._dispatch("find", name)

    def fetch_record(
        self,
        ref_id: int,
        start: int = 0,
        stop: Optional[int] = None,
    ) -> Result[SeqRecord, FastaError]:
        """
        Fetch a region as a Biopython SeqRecord.

        The whole record is returned when stop is None (needs an index for
        the length). Sub-regions are named ``name:start-stop`` in 1-based
        inclusive coordinates, the samtools faidx convention.
        """
        name_result = self.get_name(ref_id)
        if name_result.is_err():
            return name_result
        name = name_result.unwrap()

        if stop is None:
            length_result = self.get_length(ref_id)
            if length_result.is_err():
                return length_result
            length = length_result.unwrap()
            if length == 0:
                return Ok(SeqRecord(Seq(""), id=name, description=""))
            record_id = name if start == 0 else f"{name}:{start + 1}-{length}"
            stop = length - 1
        else:
            # labelled by the bases actually returned (stop may equal the length)
            record_id = None

        return self.get_sequence(ref_id, start, stop).map(
            lambda sequence: SeqRecord(
                Seq(sequence),
                id=record_id or f"{name}:{start + 1}-{start + len(sequence)}",
                description="",
            )
        )


def _load_mode(index_path: Path) -> Result[AccessMode, FastaError]:
    return load_index(index_path).map(mode_for)


def open_fasta(
    data_path: Path | str,
    index_path: Optional[Path | str] = None,
) -> Result[FastaSession, FastaError]:
    """
    Open a FASTA file for random access.

    Args:
        data_path: FASTA file
        index_path: Optional persisted index to load

    Returns:
        Ok(FastaSession), indexed when the index loaded with at least one
        entry. Err(IoError) if a file cannot be opened, Err(FormatError) if
        the index is malformed; a failed index load fails the whole open.
    """
    data_path = Path(data_path)
    try:
        stream = open(data_path, "rb")
    except OSError as e:
        logger.error(f"Could not open {data_path} for reading: {e}")
        return Err(IoError(f"could not open {data_path} for reading: {e}"))

    if index_path is None or not str(index_path):
        logger.debug(f"Opened {data_path} without index")
        return Ok(FastaSession(data_path, stream))

    mode_result = _load_mode(Path(index_path))
    if mode_result.is_err():
        stream.close()
        return mode_result

    session = FastaSession(data_path, stream, mode_result.unwrap())
    if not session.is_indexed:
        logger.warning(f"Index {index_path} is empty, falling back to sequential access")
    logger.debug(f"Opened {data_path} with index {index_path}")
    return Ok(session)
