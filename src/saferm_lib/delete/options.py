# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

"""
Command-line options shared by `saferm rm` and `saferm safe`.
"""

from collections.abc import Callable

import click
from click_option_group import optgroup


def paths_argument(func: Callable) -> Callable:
    return click.argument(
        "paths",
        nargs=-1,
        required=True,
        type=str,
        metavar=click.style("PATH...", fg="green"),
    )(func)


def retry_options(func: Callable) -> Callable:
    """Attach the options controlling retries and the execution mode."""
    decorators = [
        optgroup.group(f"{click.style('Retry settings', fg='yellow')}"),
        optgroup.option(
            "--max-retries",
            type=click.IntRange(min=0),
            default=None,
            help="Number of times a single file or directory is retried after a transient failure "
            "(EBUSY, EMFILE, ENFILE, ENOTEMPTY, EPERM).",
        ),
        optgroup.option(
            "--retry-delay",
            type=click.IntRange(min=0),
            default=None,
            metavar="MS",
            help="Delay between retries in milliseconds.",
        ),
        optgroup.group(f"{click.style('Execution', fg='yellow')}"),
        optgroup.option(
            "--async",
            "use_async",
            is_flag=True,
            default=False,
            help="Remove the contents of directories concurrently without blocking.",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func
