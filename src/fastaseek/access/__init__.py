"""
Access engine.

  modes   - indexed (seek) and sequential (rescan) query strategies
  session - FastaSession lifecycle: open, create_index, queries, close
"""

from fastaseek.access.modes import IndexedMode, SequentialMode, mode_for
from fastaseek.access.session import FastaSession, open_fasta

__all__ = [
    "IndexedMode",
    "SequentialMode",
    "mode_for",
    "FastaSession",
    "open_fasta",
]
