"""
CLI utility functions.

Output helpers, region parsing and session setup shared by the commands.
"""

import logging
import re
from pathlib import Path
from typing import NamedTuple, Optional

import click

from fastaseek.access.session import FastaSession, open_fasta
from fastaseek.core.config import FastaSeekConfig, default_index_path
from fastaseek.core.errors import FastaError, NotFoundError
from fastaseek.core.result import Result, Ok, Err

logger = logging.getLogger(__name__)


COLORS = {
    "success": "green",
    "error": "red",
    "warning": "yellow",
    "info": "blue",
}


def echo_success(message: str) -> None:
    """Print success message with green checkmark."""
    click.echo(click.style("✓ ", fg=COLORS["success"]) + message, err=True)


def echo_error(message: str) -> None:
    """Print error message with red X."""
    click.echo(click.style("✗ ", fg=COLORS["error"]) + message, err=True)


def echo_warning(message: str) -> None:
    click.echo(click.style("! ", fg=COLORS["warning"]) + message, err=True)


def echo_info(message: str) -> None:
    click.echo(click.style("→ ", fg=COLORS["info"]) + message, err=True)


def fail(error: object) -> None:
    """Report an error and exit with status 1."""
    if isinstance(error, FastaError):
        echo_error(f"{error.kind}: {error}")
    else:
        echo_error(str(error))
    raise SystemExit(1)


class Region(NamedTuple):
    """A requested region; start/stop are 0-based inclusive, stop None = to the end."""
    name: str
    start: int
    stop: Optional[int]


_COORDS = re.compile(r"^(\d[\d,]*)(?:-(\d[\d,]*))?$")


def parse_region(text: str) -> Result[Region, str]:
    """
    Parse a samtools-style region string.

    Accepts ``name``, ``name:start`` and ``name:start-stop`` with 1-based
    inclusive coordinates (commas allowed as thousands separators). A name
    that itself contains ':' is kept whole when the suffix is not a range.

    Example:
        >>> parse_region("chr1:1,001-2,000").unwrap()
        Region(name='chr1', start=1000, stop=1999)
    """
    name, sep, coords = text.rpartition(":")
    match = _COORDS.match(coords) if sep else None
    if match is None:
        if not text:
            return Err("Empty region")
        return Ok(Region(text, 0, None))

    start = int(match.group(1).replace(",", ""))
    stop = int(match.group(2).replace(",", "")) if match.group(2) else None
    if start < 1:
        return Err(f"Region start must be >= 1, got {start} in '{text}'")
    if stop is not None and stop < start:
        return Err(f"Region end ({stop}) is before start ({start}) in '{text}'")
    return Ok(Region(name, start - 1, None if stop is None else stop - 1))


def open_session(fasta: Path, config: FastaSeekConfig) -> Result[FastaSession, FastaError]:
    """
    Open a FASTA file the way the commands expect it.

    An existing ``<fasta><index_suffix>`` is loaded; otherwise, when
    auto_index is set, an index is built (and written if write_index is set).
    """
    index_path = default_index_path(fasta, config.index_suffix)
    if index_path.exists():
        logger.debug(f"Using existing index {index_path}")
        return open_fasta(fasta, index_path)

    opened = open_fasta(fasta)
    if opened.is_err() or not config.auto_index:
        return opened

    session = opened.unwrap()
    built = session.create_index(index_path if config.write_index else None)
    if built.is_err():
        session.close()
        return built
    return Ok(session)


def resolve_ref(session: FastaSession, ref: str) -> Result[int, FastaError]:
    """Resolve a record given by name, falling back to a numeric record id."""
    found = session.get_ref_id(ref)
    if found.is_ok() or not isinstance(found.unwrap_err(), NotFoundError):
        return found
    if ref.isdigit():
        return Ok(int(ref))
    return found
