"""Endpoint commands."""

from __future__ import annotations

import argparse

from goterra_cli.commands.base import Command, register_command
from goterra_cli.models import Endpoint


@register_command("endpoint")
class EndpointCommand(Command):
    """List and inspect deployment endpoints."""

    @staticmethod
    def add_arguments(subparsers: argparse._SubParsersAction) -> None:
        sub = subparsers.add_parser("list", help="List endpoints (public ones unless --ns is given)")
        sub.add_argument("--ns", dest="ns_id", default=None, help="Namespace id")

        for action, help_text in (("show", "Show an endpoint"), ("defaults", "Show endpoint default inputs")):
            sub = subparsers.add_parser(action, help=help_text)
            sub.add_argument("--ns", dest="ns_id", default=None, help="Namespace id")
            sub.add_argument("--id", dest="endpoint_id", default=None, help="Endpoint id")

    def action_list(self) -> None:
        data = self.client.get_endpoints(self.args.ns_id)
        rows = []
        for item in data:
            ep = Endpoint.from_dict(item)
            rows.append((ep.id, ep.name, ep.kind, ep.public, ep.namespace))
        self.out.table(("ID", "Name", "Kind", "Public", "Namespace"), rows, raw=data)

    def action_show(self) -> None:
        self.require(**{"namespace id": self.args.ns_id, "endpoint id": self.args.endpoint_id})
        self.out.resource(self.client.get_endpoint(self.args.ns_id, self.args.endpoint_id))

    def action_defaults(self) -> None:
        self.require(**{"namespace id": self.args.ns_id, "endpoint id": self.args.endpoint_id})
        self.out.yaml(self.client.get_endpoint_defaults(self.args.ns_id, self.args.endpoint_id))
