"""
goterra-cli: command-line client for the goterra deployment service.

Authenticates with an API key, then lists and manages namespaces, endpoints,
recipes, templates, applications, users and runs.

Environment:
    GOT_APIKEY - user API key (required unless --apikey is given)
    GOT_URL    - URL to goterra (default: https://goterra.genouest.org)
"""

__version__ = "0.1.0"

from goterra_cli.cli import main  # noqa: E402

__all__ = ["main", "__version__"]
