"""
FASTA access commands.

  index  - Build and write the index
  length - Record length
  base   - Single base lookup
  fetch  - Region extraction to FASTA
"""

import io
from pathlib import Path
from typing import Optional

import click
from Bio.SeqIO.FastaIO import FastaWriter

from fastaseek.access.session import open_fasta
from fastaseek.cli.utils import (
    echo_info,
    echo_success,
    echo_warning,
    fail,
    open_session,
    parse_region,
    resolve_ref,
)
from fastaseek.core.config import default_index_path
from fastaseek.core.result import collect_results


@click.command()
@click.argument("fasta", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Index file to write (default: FASTA path + index suffix).",
)
@click.option(
    "--show",
    is_flag=True,
    help="Print the index table after building it.",
)
@click.pass_context
def index(ctx: click.Context, fasta: Path, output: Optional[Path], show: bool) -> None:
    """
    Build the index of a FASTA file.

    Writes one line per record: name, length, offset, bases per line and
    bytes per line, tab-separated. An existing index is overwritten.

    \b
    Example:
      fastaseek index ref.fa            # writes ref.fa.fai
      fastaseek index ref.fa -o ref.idx
    """
    config = ctx.obj["config"]
    quiet = ctx.obj.get("quiet", False)
    output = output or default_index_path(fasta, config.index_suffix)

    opened = open_fasta(fasta)
    if opened.is_err():
        fail(opened.unwrap_err())

    with opened.unwrap() as session:
        result = session.create_index(output)
    if result.is_err():
        fail(result.unwrap_err())

    table = result.unwrap()
    if show:
        click.echo(table.to_dataframe().to_string(index=False))
    if not quiet:
        echo_success(f"Indexed {len(table)} records into {output}")


@click.command()
@click.argument("fasta", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("ref")
@click.pass_context
def length(ctx: click.Context, fasta: Path, ref: str) -> None:
    """
    Print the length of record REF (name or 0-based record id).
    """
    opened = open_session(fasta, ctx.obj["config"])
    if opened.is_err():
        fail(opened.unwrap_err())

    with opened.unwrap() as session:
        result = resolve_ref(session, ref).and_then(session.get_length)
    if result.is_err():
        fail(result.unwrap_err())
    click.echo(result.unwrap())


@click.command()
@click.argument("fasta", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("ref")
@click.argument("position", type=int)
@click.pass_context
def base(ctx: click.Context, fasta: Path, ref: str, position: int) -> None:
    """
    Print the base at 0-based POSITION of record REF.
    """
    opened = open_session(fasta, ctx.obj["config"])
    if opened.is_err():
        fail(opened.unwrap_err())

    with opened.unwrap() as session:
        if not session.is_indexed:
            echo_warning("No index available, scanning the file sequentially")
        result = resolve_ref(session, ref).and_then(
            lambda ref_id: session.get_base(ref_id, position)
        )
    if result.is_err():
        fail(result.unwrap_err())
    click.echo(result.unwrap())


@click.command()
@click.argument("fasta", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("regions", nargs=-1, required=True)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output FASTA file (default: stdout).",
)
@click.pass_context
def fetch(ctx: click.Context, fasta: Path, regions: tuple, output: Optional[Path]) -> None:
    """
    Extract records or regions as FASTA.

    \b
    Region syntax (1-based, inclusive):
      chr1             whole record
      chr1:1001        from position 1001 to the end
      chr1:1001-2000   positions 1001 to 2000

    \b
    Example:
      fastaseek fetch ref.fa chr1:1,001-2,000 chr2 -o regions.fa
    """
    config = ctx.obj["config"]

    parsed = collect_results([parse_region(text) for text in regions])
    if parsed.is_err():
        fail(parsed.unwrap_err())

    opened = open_session(fasta, config)
    if opened.is_err():
        fail(opened.unwrap_err())

    with opened.unwrap() as session:
        records = collect_results([
            resolve_ref(session, region.name).and_then(
                lambda ref_id, region=region: session.fetch_record(ref_id, region.start, region.stop)
            )
            for region in parsed.unwrap()
        ])
    if records.is_err():
        fail(records.unwrap_err())

    handle = io.StringIO()
    writer = FastaWriter(handle, wrap=config.line_width or None)
    for record in records.unwrap():
        writer.write_record(record)

    if output is None:
        click.echo(handle.getvalue(), nl=False)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(handle.getvalue())
        if not ctx.obj.get("quiet", False):
            echo_info(f"Wrote {len(records.unwrap())} sequences to {output}")
