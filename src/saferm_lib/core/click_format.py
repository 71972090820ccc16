# Released under MIT License.
# Copyright (c) 2026 The saferm Developers


import click
from click import HelpFormatter
from click_help_colors import HelpColorsCommand


class GNUHelpFormatter(HelpFormatter):
    """Help formatter listing every option on its own line, GNU-style."""

    def __init__(self, width=None, headers_color=None, options_color=None):
        super().__init__(width=width)
        self.headers_color = headers_color or "white"
        self.options_color = options_color or "white"

    def write_heading(self, heading):
        styled_heading = click.style(heading, fg=self.headers_color, bold=True)
        self.write(f"{styled_heading}\n")

    def write_usage(self, prog, args="", prefix=None):
        if prefix is None:
            prefix = "Usage:"

        styled_prefix = click.style(prefix, fg=self.headers_color, bold=True)
        self.write(f"{styled_prefix} {prog} {args}".rstrip() + "\n")

    def write_dl(self, rows, col_max=30, col_spacing=2):
        for term, definition in rows:
            self.write(f"  {click.style(term, fg=self.options_color, bold=True)}\n")

            for line in (definition or "").splitlines():
                if line.strip():
                    self.write(f"      {line}\n")
            self.write("\n")


class GNUHelpColorsCommand(HelpColorsCommand):
    """Colored command printing its options using `GNUHelpFormatter`."""

    def get_help(self, ctx):
        formatter = GNUHelpFormatter(
            width=ctx.terminal_width,
            headers_color=getattr(self, "help_headers_color", "white"),
            options_color=getattr(self, "help_options_color", "white"),
        )

        self.format_help(ctx, formatter)
        return formatter.getvalue()
