"""Base class and registry for resource commands."""

from __future__ import annotations

import argparse
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from rich.prompt import Confirm

from goterra_cli.models import LOGGER_NAME
from goterra_cli.output import Printer

if TYPE_CHECKING:
    from goterra_cli.client import GoterraClient

# ---------------------------------------------------------------------------
# Command Registry
# ---------------------------------------------------------------------------

_command_registry: dict[str, type[Command]] = {}


def register_command(name: str):
    """Decorator to register a command class under a CLI subcommand name."""

    def decorator(cls):
        _command_registry[name] = cls
        cls.command_name = name
        return cls

    return decorator


def get_command_registry() -> dict[str, type[Command]]:
    """Get the command registry."""
    return _command_registry


# ---------------------------------------------------------------------------
# Command Base Class
# ---------------------------------------------------------------------------


class CommandError(Exception):
    """A command could not be carried out."""


class UsageError(CommandError):
    """Invalid or missing command arguments."""


class Command(ABC):
    """Base class for a resource command group (namespace, run, ...).

    Each action given on the command line is dispatched to ``action_<name>``.
    """

    command_name: str = ""

    def __init__(self, client: GoterraClient, args: argparse.Namespace, printer: Printer | None = None):
        self.client = client
        self.args = args
        self.out = printer or Printer(json_output=getattr(args, "json_output", False))
        self.logger = logging.getLogger(LOGGER_NAME)

    @staticmethod
    @abstractmethod
    def add_arguments(subparsers: argparse._SubParsersAction) -> None:
        """Add one sub-parser per action."""
        ...

    def run(self) -> None:
        handler = getattr(self, f"action_{self.args.action.replace('-', '_')}", None)
        if handler is None:
            raise UsageError(f"Unknown {self.command_name} action: {self.args.action}")
        handler()

    def require(self, **values: str | None) -> None:
        """Raise UsageError naming every missing id."""
        missing = [name for name, value in values.items() if not value]
        if missing:
            raise UsageError(f"missing {' and '.join(missing)}")

    def confirm(self, question: str) -> bool:
        if getattr(self.args, "yes", False):
            return True
        return Confirm.ask(question, default=False, console=self.out.err_console)
