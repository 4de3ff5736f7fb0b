"""
Error kinds reported by fastaseek operations.

They are exceptions so that low-level readers can raise them from deep
inside a scan, but public operations never let them escape: they are
caught at the operation boundary and handed back inside ``Err``.
"""


class FastaError(Exception):
    """Base class for every fastaseek failure."""

    kind = "FastaError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self.message == other.message  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.message))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class IoError(FastaError):
    """Open, read, write or seek failure at the OS boundary."""

    kind = "IoError"


class FormatError(FastaError):
    """Malformed FASTA header, missing record name or bad index line."""

    kind = "FormatError"


class NotIndexedError(FastaError):
    """An index-only query was made on a session without an index."""

    kind = "NotIndexedError"


class OutOfRangeError(FastaError):
    """Record id, position or range outside the valid bounds."""

    kind = "OutOfRangeError"


class NotFoundError(FastaError):
    """Sequential scan could not reach the requested record or position."""

    kind = "NotFoundError"
