# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

import sys

import click
from click_help_colors import HelpColorsGroup

from saferm_lib.delete.cli import rm
from saferm_lib.safe.cli import safe

__version__ = "0.1.0"

# support both --help and -h
_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(
    cls=HelpColorsGroup,
    help_options_color="bright_blue",
    invoke_without_command=True,
    context_settings=_CONTEXT_SETTINGS,
)
@click.option(
    "--version",
    is_flag=True,
    help="Print the current version of saferm and exit.",
)
@click.pass_context
def cli(ctx: click.Context, version: bool):
    """
    Run any saferm command.

    saferm removes files and directory trees reliably across operating systems,
    retrying removals that fail because of locked files, slow antivirus scanners
    or read-only entries.
    """
    if version:
        print(__version__)
        sys.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        sys.exit(0)


cli.add_command(rm)
cli.add_command(safe)
