"""Recipe, template and application commands."""

from __future__ import annotations

import argparse

from goterra_cli.commands.base import Command, register_command
from goterra_cli.models import CatalogEntry

COLUMNS = ("ID", "Name", "Description", "Public", "Namespace")


def _add_list_show(subparsers: argparse._SubParsersAction, kind: str) -> None:
    sub = subparsers.add_parser("list", help=f"List {kind}s (public ones unless --ns is given)")
    sub.add_argument("--ns", dest="ns_id", default=None, help="Namespace id")

    sub = subparsers.add_parser("show", help=f"Show {kind} info")
    sub.add_argument("--ns", dest="ns_id", default=None, help="Namespace id")
    sub.add_argument("--id", dest="item_id", default=None, help=f"{kind.capitalize()} id")


class CatalogCommand(Command):
    """Shared list/show for namespace catalog items."""

    kind: str = ""
    # names of the GoterraClient methods listing and fetching one item
    list_method: str = ""
    show_method: str = ""

    def action_list(self) -> None:
        data = getattr(self.client, self.list_method)(self.args.ns_id)
        rows = []
        for item in data:
            entry = CatalogEntry.from_dict(item)
            rows.append((entry.id, entry.name, entry.description, entry.public, entry.namespace))
        self.out.table(COLUMNS, rows, raw=data)

    def action_show(self) -> None:
        self.require(**{"namespace id": self.args.ns_id, f"{self.kind} id": self.args.item_id})
        fetch = getattr(self.client, self.show_method)
        self.out.resource(fetch(self.args.ns_id, self.args.item_id))


@register_command("recipe")
class RecipeCommand(CatalogCommand):
    """List and inspect recipes."""

    kind = "recipe"
    list_method = "get_recipes"
    show_method = "get_recipe"

    @staticmethod
    def add_arguments(subparsers: argparse._SubParsersAction) -> None:
        _add_list_show(subparsers, "recipe")


@register_command("template")
class TemplateCommand(CatalogCommand):
    """List and inspect templates."""

    kind = "template"
    list_method = "get_templates"
    show_method = "get_template"

    @staticmethod
    def add_arguments(subparsers: argparse._SubParsersAction) -> None:
        _add_list_show(subparsers, "template")


@register_command("app")
class AppCommand(CatalogCommand):
    """List and inspect applications."""

    kind = "application"
    list_method = "get_apps"
    show_method = "get_app"

    @staticmethod
    def add_arguments(subparsers: argparse._SubParsersAction) -> None:
        _add_list_show(subparsers, "application")
        sub = subparsers.add_parser("inputs", help="Show the inputs an application expects")
        sub.add_argument("--ns", dest="ns_id", default=None, help="Namespace id")
        sub.add_argument("--id", dest="item_id", default=None, help="Application id")

    def action_inputs(self) -> None:
        self.require(**{"namespace id": self.args.ns_id, "application id": self.args.item_id})
        self.out.yaml(self.client.get_app_inputs(self.args.ns_id, self.args.item_id))
