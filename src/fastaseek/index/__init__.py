"""
Index building and persistence.

  builder - one-pass scan producing an IndexTable
  io      - tab-separated side-table writer and loader
"""

from fastaseek.index.builder import build_index, measure_line_geometry
from fastaseek.index.io import load_index, write_index

__all__ = [
    "build_index",
    "measure_line_geometry",
    "load_index",
    "write_index",
]
