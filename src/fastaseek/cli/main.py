"""
Main CLI entry point for fastaseek.

Defines the root command group and registers all subcommands.
Uses Click framework for argument parsing and help generation.
"""

import click
from pathlib import Path
from typing import Optional

from fastaseek import __version__
from fastaseek.core.config import load_config


CONTEXT_SETTINGS = dict(
    help_option_names=["-h", "--help"],
    max_content_width=120,
)


class AliasedGroup(click.Group):
    """
    Click group that accepts unambiguous command prefixes and treats
    underscores and hyphens as equivalent.
    """

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        normalized_name = cmd_name.replace("_", "-")

        rv = click.Group.get_command(self, ctx, normalized_name)
        if rv is not None:
            return rv

        matches = [x for x in self.list_commands(ctx) if x.startswith(normalized_name)]
        if not matches:
            return None
        elif len(matches) == 1:
            return click.Group.get_command(self, ctx, matches[0])
        else:
            ctx.fail(f"Ambiguous command '{cmd_name}': could be {', '.join(sorted(matches))}")
            return None


@click.group(cls=AliasedGroup, context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "-V", "--version", prog_name="fastaseek")
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable verbose output with detailed logging.",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    help="Suppress all output except errors.",
)
@click.option(
    "-c", "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML configuration file.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, config: Optional[Path]) -> None:
    """
    fastaseek: random access to indexed FASTA files.

    \b
    Commands:
      index  - Build and write the .fai index of a FASTA file
      length - Print the length of a record
      base   - Print a single base
      fetch  - Extract records or regions as FASTA

    \b
    Quick start:
      fastaseek index ref.fa
      fastaseek fetch ref.fa chr1:1001-2000

    For detailed help on any command, use: fastaseek <command> --help
    """
    ctx.ensure_object(dict)

    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    if verbose and not quiet:
        import logging
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    elif quiet:
        import logging
        logging.basicConfig(level=logging.ERROR)

    config_result = load_config(config)
    if config_result.is_err():
        raise click.BadParameter(config_result.unwrap_err(), param_hint="--config")
    ctx.obj["config"] = config_result.unwrap()


from fastaseek.cli.commands import index, length, base, fetch

cli.add_command(index)
cli.add_command(length)
cli.add_command(base)
cli.add_command(fetch)


@cli.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """
    Display version and environment information.
    """
    import sys
    import platform

    click.echo(f"fastaseek version: {__version__}")
    click.echo(f"Python version: {sys.version}")
    click.echo(f"Platform: {platform.platform()}")

    click.echo("\nInstalled dependencies:")

    dependencies = {
        "biopython": "Bio",
        "pandas": "pandas",
        "click": "click",
        "pyyaml": "yaml",
    }

    for name, import_name in dependencies.items():
        try:
            module = __import__(import_name)
            version = getattr(module, "__version__", "unknown")
            click.echo(f"  {name}: {version}")
        except ImportError:
            click.echo(f"  {name}: not installed")


if __name__ == "__main__":
    cli()
