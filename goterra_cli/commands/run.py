"""Run commands: list, inspect, start and stop application deployments."""

from __future__ import annotations

import argparse
from functools import partial

from goterra_cli.client import GoterraAPIError
from goterra_cli.commands.base import Command, CommandError, register_command
from goterra_cli.models import NO_SECRET_MESSAGE, Run, RunRequest
from goterra_cli.output import format_timestamp
from goterra_cli.params import default_prompt, dump_params, load_params, resolve_params


def _add_ns_id(sub: argparse.ArgumentParser) -> None:
    sub.add_argument("--ns", dest="ns_id", default=None, help="Namespace id")
    sub.add_argument("--id", dest="run_id", default=None, help="Run id")


@register_command("run")
class RunCommand(Command):
    """Manage application runs."""

    @staticmethod
    def add_arguments(subparsers: argparse._SubParsersAction) -> None:
        sub = subparsers.add_parser("list", help="List runs (all user runs unless --ns is given)")
        sub.add_argument("--ns", dest="ns_id", default=None, help="Namespace id")

        sub = subparsers.add_parser("show", help="Show run info")
        _add_ns_id(sub)
        sub.add_argument("--store", action="store_true", help="Show store details (if deployed)")

        sub = subparsers.add_parser("delete", help="Ask to stop a run")
        _add_ns_id(sub)
        sub.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")

        sub = subparsers.add_parser("start", help="Deploy an application on an endpoint")
        sub.add_argument("--ns", dest="ns_id", default=None, help="Namespace id")
        sub.add_argument("--endpoint", dest="endpoint_id", default=None, help="Endpoint id")
        sub.add_argument("--app", dest="app_id", default=None, help="Application id")
        sub.add_argument("--name", default="", help="Run name")
        sub.add_argument("--params", default=None, metavar="FILE", help="YAML file with run parameters")
        sub.add_argument(
            "--template",
            action="store_true",
            help="Only print the collected parameters as a YAML template, do not run",
        )

    def action_list(self) -> None:
        data = self.client.get_runs(self.args.ns_id)
        rows = []
        for item in data:
            run = Run.from_dict(item)
            rows.append(
                (run.id, run.name, run.status, format_timestamp(run.start), format_timestamp(run.end), run.namespace)
            )
        self.out.table(("ID", "Name", "Status", "Start", "End", "Namespace"), rows, raw=data)

    def action_show(self) -> None:
        self.require(**{"namespace id": self.args.ns_id, "run id": self.args.run_id})
        data = self.client.get_run(self.args.ns_id, self.args.run_id)
        if not self.args.store:
            self.out.resource(data)
            return

        deployment = Run.from_dict(data).deployment
        store = self.client.get_run_store(deployment) if deployment else None
        if self.out.json_output:
            self.out.json({"run": data, "store": store})
            return
        self.out.resource(data)
        self.out.text("Store data")
        if store is None:
            self.out.text("\tno data")
        else:
            self.out.yaml(store)

    def action_delete(self) -> None:
        self.require(**{"namespace id": self.args.ns_id, "run id": self.args.run_id})
        if not self.confirm("Please confirm deletion"):
            self.logger.info("Deletion cancelled")
            return
        self.client.delete_run(self.args.ns_id, self.args.run_id)
        self.logger.info(f"Run {self.args.run_id} stop requested")

    def action_start(self) -> None:
        args = self.args
        self.require(
            **{"namespace id": args.ns_id, "endpoint id": args.endpoint_id, "application id": args.app_id}
        )

        if not self.client.has_secret(args.ns_id, args.endpoint_id):
            raise CommandError(NO_SECRET_MESSAGE)

        if args.params:
            params = load_params(args.params)
        else:
            params = self.collect_params()

        if args.template:
            self.logger.info("Yaml parameters template:")
            if self.out.json_output:
                self.out.json({"params": params})
            else:
                self.out.write(dump_params(params))
            return

        run = RunRequest(
            name=args.name,
            namespace=args.ns_id,
            endpoint=args.endpoint_id,
            app_id=args.app_id,
            inputs=params,
        )
        run_id = self.client.start_run(run)
        self.logger.info(f"Run started: {run_id}")
        if self.out.json_output:
            self.out.json({"run": run_id})
        else:
            self.out.text(run_id)

    def collect_params(self) -> dict[str, str]:
        """Ask for every application input, filling what the defaults allow."""
        args = self.args
        endpoint = self.client.get_endpoint(args.ns_id, args.endpoint_id)
        inputs = self.client.get_app_inputs(args.ns_id, args.app_id)
        try:
            endpoint_defaults = self.client.get_endpoint_defaults(args.ns_id, args.endpoint_id)
        except GoterraAPIError as e:
            self.logger.warning(f"Ignoring endpoint defaults: {e}")
            endpoint_defaults = {}
        return resolve_params(
            inputs,
            endpoint_name=endpoint.get("name", ""),
            endpoint_defaults=endpoint_defaults,
            prompt=partial(default_prompt, console=self.out.err_console),
            echo=self.out.note,
        )
