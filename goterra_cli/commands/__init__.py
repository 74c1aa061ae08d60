"""Resource commands for goterra-cli."""

from goterra_cli.commands.base import (
    Command,
    CommandError,
    UsageError,
    get_command_registry,
    register_command,
)
from goterra_cli.commands.catalog import AppCommand, RecipeCommand, TemplateCommand
from goterra_cli.commands.endpoint import EndpointCommand

# Import all commands to register them
from goterra_cli.commands.namespace import NamespaceCommand
from goterra_cli.commands.run import RunCommand
from goterra_cli.commands.user import UserCommand

__all__ = [
    "Command",
    "CommandError",
    "UsageError",
    "register_command",
    "get_command_registry",
    "NamespaceCommand",
    "EndpointCommand",
    "RecipeCommand",
    "TemplateCommand",
    "AppCommand",
    "UserCommand",
    "RunCommand",
]
