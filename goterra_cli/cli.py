"""CLI entry point for goterra-cli."""

from __future__ import annotations

import argparse
import os
import sys
from typing import Mapping, Sequence

import requests

# Ensure all commands are registered by importing the commands package
import goterra_cli.commands  # noqa: F401
from goterra_cli import __version__
from goterra_cli.client import GoterraClient
from goterra_cli.commands import CommandError, get_command_registry
from goterra_cli.logging_utils import setup_logging
from goterra_cli.models import DEFAULT_GOTERRA_URL, ENV_APIKEY, ENV_URL, ClientOptions
from goterra_cli.output import Printer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="goterra-cli",
        description="Manage goterra namespaces, endpoints, applications and runs.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Environment:
    {ENV_APIKEY} - user API key (required unless --apikey is given)
    {ENV_URL}    - URL to goterra (default: {DEFAULT_GOTERRA_URL})

Examples:
    # List your namespaces
    goterra-cli namespace list

    # Add a member to a namespace
    goterra-cli namespace edit 5c8f... --add-member jdoe

    # Collect run parameters as a fillable template, then start a run from it
    goterra-cli run start --ns NS --endpoint EP --app APP --template
    goterra-cli run start --ns NS --endpoint EP --app APP --name test --params params.yaml
""",
    )
    parser.add_argument("--apikey", default=None, help=f"Authentication API key (default: from {ENV_APIKEY} env)")
    parser.add_argument("--url", default=None, help=f"URL to goterra host (default: from {ENV_URL} env)")
    parser.add_argument(
        "--json", action="store_true", dest="json_output", help="Output results and logs as JSON"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True, help="Resource to manage")

    registry = get_command_registry()
    for name, cmd_cls in sorted(registry.items()):
        sub = subparsers.add_parser(name, help=cmd_cls.__doc__)
        actions = sub.add_subparsers(dest="action", required=True, help="Action to perform")
        cmd_cls.add_arguments(actions)

    return parser


def resolve_options(args: argparse.Namespace, environ: Mapping[str, str] | None = None) -> ClientOptions:
    """Command-line flags win over the environment, which wins over defaults."""
    environ = os.environ if environ is None else environ
    return ClientOptions(
        url=args.url or environ.get(ENV_URL) or DEFAULT_GOTERRA_URL,
        api_key=args.apikey or environ.get(ENV_APIKEY, ""),
    )


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # --help/--version exit 0, argument errors exit 1
        return 0 if e.code in (0, None) else 1

    logger = setup_logging(json_mode=args.json_output, verbose=args.verbose)

    options = resolve_options(args)
    if not options.api_key or not options.url:
        logger.error(f"apikey and url options must not be empty (set --apikey or {ENV_APIKEY})")
        return 1

    client = GoterraClient(base_url=options.url, api_key=options.api_key)

    registry = get_command_registry()
    cmd_cls = registry[args.command]
    command = cmd_cls(client=client, args=args, printer=Printer(json_output=args.json_output))

    try:
        logger.debug(f"Authenticating against {options.url}")
        options.token = client.login()
        command.run()
    except (requests.RequestException, CommandError, OSError, ValueError) as e:
        logger.error(str(e))
        return 1
    except EOFError:
        logger.error("No input available for an interactive prompt (use --yes or --params)")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
