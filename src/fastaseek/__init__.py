"""
fastaseek: random access to line-wrapped FASTA files.

A companion index (name, length, offset, line_length, byte_length per
record) turns a (record, position) coordinate into an exact byte offset,
so subsequences are read with one seek instead of a scan. Without an
index every query falls back to a sequential scan.
"""

__version__ = "1.0.0"

from fastaseek.core.result import Result, Ok, Err
from fastaseek.core.errors import (
    FastaError,
    IoError,
    FormatError,
    NotIndexedError,
    OutOfRangeError,
    NotFoundError,
)
from fastaseek.core.models import IndexEntry, IndexTable
from fastaseek.index import build_index, load_index, write_index
from fastaseek.access import FastaSession, open_fasta

__all__ = [
    "__version__",
    "Result",
    "Ok",
    "Err",
    "FastaError",
    "IoError",
    "FormatError",
    "NotIndexedError",
    "OutOfRangeError",
    "NotFoundError",
    "IndexEntry",
    "IndexTable",
    "build_index",
    "load_index",
    "write_index",
    "FastaSession",
    "open_fasta",
]
