# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

import sys
from typing import NoReturn

import click
from click_option_group import optgroup

from saferm_lib.core.click_format import GNUHelpColorsCommand
from saferm_lib.core.config import CFG
from saferm_lib.core.error import SafeRmError
from saferm_lib.core.logger import get_logger
from saferm_lib.delete.deleter import Deleter
from saferm_lib.delete.options import paths_argument, retry_options
from saferm_lib.engine.request import Profile

logger = get_logger(__name__)


@click.command(
    short_help="Remove files and directories, tolerating transient failures.",
    help=f"""Remove files and directories, tolerating transient failures.

{click.style("PATH", fg="green")}   Path to a file or a directory to remove.

Directories are removed with all their contents and missing paths are ignored.
On Windows, files and directories that are locked or read-only are retried up to {CFG.safe.max_retries_windows} times,
waiting longer after every failure. Elsewhere, nothing is retried unless `--max-retries` is specified.""",
    cls=GNUHelpColorsCommand,
    help_options_color="bright_blue",
)
@paths_argument
@optgroup.group(f"{click.style('Removal settings', fg='yellow')}")
@optgroup.option(
    "--recursive/--no-recursive",
    default=CFG.safe.recursive,
    help="Remove directories and their contents.",
)
@optgroup.option(
    "--force/--no-force",
    default=CFG.safe.force,
    help="Ignore paths that do not exist.",
)
@retry_options
def safe(
    paths: tuple[str, ...],
    recursive: bool,
    force: bool,
    max_retries: int | None,
    retry_delay: int | None,
    use_async: bool,
) -> NoReturn:
    """
    Remove the given paths using the safe profile.
    """
    try:
        deleter = Deleter(
            list(paths),
            Profile.safe(),
            recursive=recursive,
            force=force,
            max_retries=max_retries,
            retry_delay=retry_delay,
            use_async=use_async,
        )
        errors = deleter.delete()
        sys.exit(CFG.exit_codes.default if errors else 0)
    except SafeRmError as e:
        logger.error(e)
        sys.exit(e.exit_code)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)
