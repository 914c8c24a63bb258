"""Subcommands of the ``mailfilter`` CLI.

Every public module here defines its click command as ``cli``; modules
whose name starts with ``_`` hold helpers shared between commands.
"""

from __future__ import annotations

import importlib
import logging
import pkgutil

import click

log = logging.getLogger(__name__)

COMMAND_ATTRIBUTE = "cli"


def command_modules() -> list[str]:
    """Return the dotted names of the command modules, sorted."""
    return sorted(
        info.name
        for info in pkgutil.iter_modules(__path__, prefix=f"{__name__}.")
        if not info.name.rpartition(".")[2].startswith("_")
    )


def discover_commands() -> list[click.Command]:
    """Import every command module and collect its ``cli`` command.

    Returns:
        The commands in module-name order.

    Raises:
        TypeError: If a command module's ``cli`` is not a click command.
    """
    commands: list[click.Command] = []
    for module_name in command_modules():
        module = importlib.import_module(module_name)
        command = getattr(module, COMMAND_ATTRIBUTE, None)
        if command is None:
            log.debug("Skipping %s: no %s attribute", module_name, COMMAND_ATTRIBUTE)
            continue
        if not isinstance(command, click.Command):
            raise TypeError(f"{module_name}.{COMMAND_ATTRIBUTE} is not a click command")
        commands.append(command)
    return commands
