"""Namespace commands."""

from __future__ import annotations

import argparse

from goterra_cli.commands.base import Command, UsageError, register_command
from goterra_cli.models import Namespace, add_to_list, remove_from_list


@register_command("namespace")
class NamespaceCommand(Command):
    """Manage namespaces (list, show, create, edit, delete)."""

    @staticmethod
    def add_arguments(subparsers: argparse._SubParsersAction) -> None:
        sub = subparsers.add_parser("list", help="List user namespaces")
        sub.add_argument("--all", action="store_true", dest="show_all", help="Get all namespaces [admin]")

        sub = subparsers.add_parser("show", help="Show a namespace in details")
        sub.add_argument("ns_id", metavar="NSID", help="Namespace id")

        sub = subparsers.add_parser("create", help="Create a new namespace")
        sub.add_argument("name", metavar="NSNAME", help="Namespace name")

        sub = subparsers.add_parser("delete", help="Remove a namespace")
        sub.add_argument("ns_id", metavar="NSID", help="Namespace id")
        sub.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")

        sub = subparsers.add_parser("edit", help="Update namespace owners, members or freeze flag")
        sub.add_argument("ns_id", metavar="NSID", help="Namespace id")
        sub.add_argument("--add-owner", default=None, metavar="UID", help="Add an owner")
        sub.add_argument("--add-member", default=None, metavar="UID", help="Add a member")
        sub.add_argument("--remove-owner", default=None, metavar="UID", help="Remove an owner")
        sub.add_argument("--remove-member", default=None, metavar="UID", help="Remove a member")
        freeze = sub.add_mutually_exclusive_group()
        freeze.add_argument("--freeze", action="store_true", help="Freeze namespace")
        freeze.add_argument("--unfreeze", action="store_true", help="Unfreeze namespace")

    def action_list(self) -> None:
        data = self.client.get_namespaces(show_all=self.args.show_all)
        rows = []
        for item in data:
            ns = Namespace.from_dict(item)
            rows.append((ns.id, ns.name, ns.owners))
        self.out.table(("ID", "Name", "Owners"), rows, raw=data)

    def action_show(self) -> None:
        self.out.resource(self.client.get_namespace(self.args.ns_id))

    def action_create(self) -> None:
        data = self.client.create_namespace(self.args.name)
        created = data.get("ns") if isinstance(data.get("ns"), dict) else data
        ns_id = created.get("id")
        if ns_id:
            self.logger.info(f"Namespace created: {ns_id}")
        else:
            self.logger.info("Namespace created!")

    def action_delete(self) -> None:
        if not self.confirm("Please confirm deletion"):
            self.logger.info("Deletion cancelled")
            return
        self.client.delete_namespace(self.args.ns_id)
        self.logger.info(f"Namespace {self.args.ns_id} deleted")

    def action_edit(self) -> None:
        args = self.args
        if not any((args.add_owner, args.add_member, args.remove_owner, args.remove_member, args.freeze, args.unfreeze)):
            raise UsageError("nothing to edit, see 'namespace edit -h'")

        ns = Namespace.from_dict(self.client.get_namespace(args.ns_id))
        if not ns.id:
            ns.id = args.ns_id
        apply_edits(ns, args)
        self.client.update_namespace(ns.to_dict())
        self.logger.info("Namespace updated!")


def apply_edits(ns: Namespace, args: argparse.Namespace) -> Namespace:
    """Apply owner/member/freeze changes from the edit arguments to ns."""
    if args.add_owner:
        ns.owners = add_to_list(ns.owners, args.add_owner)
    if args.add_member:
        ns.members = add_to_list(ns.members, args.add_member)
    if args.remove_owner:
        ns.owners = remove_from_list(ns.owners, args.remove_owner)
    if args.remove_member:
        ns.members = remove_from_list(ns.members, args.remove_member)
    if args.freeze:
        ns.freeze = True
    if args.unfreeze:
        ns.freeze = False
    return ns
