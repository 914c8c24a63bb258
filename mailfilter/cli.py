"""Command-line interface for mailfilter."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click

from mailfilter import __version__
from mailfilter.config import Config, load_config
from mailfilter.exceptions import ConfigError
from mailfilter.utils.output import (
    error,
    set_color,
    set_verbosity,
    warning,
)

EXIT_SUCCESS = 0
EXIT_FILTER_ERROR = 1
EXIT_MAILBOX_ERROR = 2
EXIT_CONFIG_ERROR = 3


class Context:
    """Shared context for all commands."""

    def __init__(self) -> None:
        self.config: Config | None = None
        self.verbose: bool = False
        self.debug: bool = False
        self.quiet: bool = False


pass_context = click.make_pass_decorator(Context, ensure=True)


class CommandGroup(click.Group):
    """Group whose subcommands are loaded from mailfilter.commands on first lookup.

    Command modules import this module, so they are collected lazily rather
    than while mailfilter.cli itself is still being imported.
    """

    def _load_commands(self) -> None:
        if self.commands:
            return
        from mailfilter.commands import discover_commands

        for command in discover_commands():
            self.add_command(command)

    def list_commands(self, ctx: click.Context) -> list[str]:
        self._load_commands()
        return super().list_commands(ctx)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        self._load_commands()
        return super().get_command(ctx, cmd_name)


@click.group(cls=CommandGroup)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=False, path_type=Path),
    help="Path to config file (default: ~/.config/mailfilter/config.toml)",
)
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug output (implies --verbose)",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Suppress non-error output",
)
@click.version_option(version=__version__, prog_name="mailfilter")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    no_color: bool,
    verbose: bool,
    debug: bool,
    quiet: bool,
) -> None:
    """mailfilter: Count or extract messages of an MBOX archive.

    Messages are selected with a small filter language of
    ``field operator value`` clauses joined by ``and``/``or``:

    \b
      =~ /re/   field matches the pattern (append i to ignore case)
      !~ /re/   field does not match the pattern
      ^~ text   field starts with text
      $= text   field ends with text
      =  text   field equals text
      != text   field differs from text

    Examples:

    \b
        mailfilter count inbox.mbox 'subject=~/invoice/i'
        mailfilter extract inbox.mbox 'from$=@example.com and body=~/tax/' > tax.mbox
    """
    # Initialize context
    ctx.ensure_object(Context)
    app_ctx = ctx.obj
    app_ctx.verbose = verbose or debug
    app_ctx.debug = debug
    app_ctx.quiet = quiet

    # Configure module-level verbosity for output helpers
    set_verbosity(verbose=verbose, debug=debug, quiet=quiet)

    if debug:
        logging.basicConfig(level=logging.DEBUG)

    # Configure color output: disabled by --no-color, NO_COLOR env, or config
    disable_color = no_color or os.environ.get("NO_COLOR") is not None

    if disable_color:
        set_color(False)

    # Load configuration
    try:
        loaded_config, warnings = load_config(config)
    except ConfigError as e:
        error(str(e))
        ctx.exit(EXIT_CONFIG_ERROR)
        return
    app_ctx.config = loaded_config

    # Apply config settings
    if not disable_color and not loaded_config.colored_output:
        set_color(False)

    # A missing config file is normal, only mention it in verbose mode
    if verbose and not quiet:
        for warn in warnings:
            warning(warn)

