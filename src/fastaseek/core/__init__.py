"""
Core module for fastaseek.

Contains result and error types, index data structures, FASTA reading
primitives and configuration.
"""

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
from fastaseek.core.config import FastaSeekConfig, load_config, default_index_path

__all__ = [
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
    "FastaSeekConfig",
    "load_config",
    "default_index_path",
]
