"""
Core data models for fastaseek.

Defines the per-record index entry and the ordered index table that the
builder produces, the persistence layer writes and the access engine reads.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

import pandas as pd


@dataclass(frozen=True, slots=True)
class IndexEntry:
    """
    Byte-level address of one FASTA record.

    Attributes:
        name: Record identifier (first token of the header, '>' stripped)
        length: Number of sequence characters, line terminators excluded
        offset: Byte offset of the first sequence byte (just after the header)
        line_length: Visible characters per wrapped line
        byte_length: Raw bytes per wrapped line, terminator included
    """
    name: str
    length: int
    offset: int
    line_length: int
    byte_length: int

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Index entry name must not be empty")
        if self.length < 0:
            raise ValueError(f"Length must be >= 0, got {self.length}")
        if self.offset < 0:
            raise ValueError(f"Offset must be >= 0, got {self.offset}")
        if self.line_length < 0:
            raise ValueError(f"Line length must be >= 0, got {self.line_length}")
        if self.byte_length < self.line_length:
            raise ValueError(
                f"Byte length ({self.byte_length}) must be >= line length ({self.line_length})"
            )

    def seek_offset(self, position: int) -> int:
        """
        Translate a 0-based position in the de-wrapped sequence to a file offset.

        Every full line before the target contributes byte_length bytes, the
        remainder is a column within the target line. A zero line_length
        (record body never measured) is treated as an unwrapped body.
        """
        if self.line_length == 0:
            return self.offset + position
        lines, column = divmod(position, self.line_length)
        return self.offset + lines * self.byte_length + column

    def to_fields(self) -> tuple[str, int, int, int, int]:
        return (self.name, self.length, self.offset, self.line_length, self.byte_length)


class IndexTable:
    """
    Ordered, in-file-order collection of IndexEntry objects.

    Records are addressed by zero-based id. A name -> id map is derived
    lazily for callers that only know record names; when a name occurs
    more than once the first record wins.
    """

    COLUMNS = ["name", "length", "offset", "line_length", "byte_length"]

    def __init__(self, entries: Iterable[IndexEntry] = ()) -> None:
        self._entries: tuple[IndexEntry, ...] = tuple(entries)
        self._by_name: Optional[dict[str, int]] = None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[IndexEntry]:
        return iter(self._entries)

    def __getitem__(self, ref_id: int) -> IndexEntry:
        return self._entries[ref_id]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IndexTable):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"IndexTable({len(self)} entries)"

    def is_empty(self) -> bool:
        return not self._entries

    def contains(self, ref_id: int) -> bool:
        """True if ref_id addresses an entry (negative ids are never valid)."""
        return 0 <= ref_id < len(self._entries)

    @property
    def names(self) -> list[str]:
        return [entry.name for entry in self._entries]

    def find(self, name: str) -> Optional[int]:
        """Return the record id for name, or None if no record has that name."""
        if self._by_name is None:
            by_name: dict[str, int] = {}
            for ref_id, entry in enumerate(self._entries):
                by_name.setdefault(entry.name, ref_id)
            self._by_name = by_name
        return self._by_name.get(name)

    def to_dataframe(self) -> pd.DataFrame:
        """Tabulate the index, one row per record, in file order."""
        if not self._entries:
            return pd.DataFrame(columns=self.COLUMNS)
        return pd.DataFrame([entry.to_fields() for entry in self._entries], columns=self.COLUMNS)
