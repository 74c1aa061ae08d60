"""Tests for the CLI entry point: option resolution and exit codes."""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest
import responses

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Constants
MOCK_GOTERRA_URL = "https://goterra.example.com"

from goterra_cli.cli import build_parser, main, resolve_options
from goterra_cli.models import DEFAULT_GOTERRA_URL


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("GOT_APIKEY", raising=False)
    monkeypatch.delenv("GOT_URL", raising=False)


def add_login():
    responses.add(responses.GET, f"{MOCK_GOTERRA_URL}/auth/api", json={"token": "tok"})


class TestResolveOptions:
    """Flags win over environment, environment over defaults."""

    def test_defaults(self):
        args = build_parser().parse_args(["namespace", "list"])
        options = resolve_options(args, environ={})

        assert options.url == DEFAULT_GOTERRA_URL
        assert options.api_key == ""

    def test_environment(self):
        args = build_parser().parse_args(["namespace", "list"])
        options = resolve_options(args, environ={"GOT_APIKEY": "env-key", "GOT_URL": "https://env.example.com"})

        assert options.url == "https://env.example.com"
        assert options.api_key == "env-key"

    def test_flags_override_environment(self):
        args = build_parser().parse_args(["--apikey", "flag-key", "--url", MOCK_GOTERRA_URL, "namespace", "list"])
        options = resolve_options(args, environ={"GOT_APIKEY": "env-key", "GOT_URL": "https://env.example.com"})

        assert options.url == MOCK_GOTERRA_URL
        assert options.api_key == "flag-key"


class TestExitCodes:
    def test_missing_apikey(self):
        assert main(["--url", MOCK_GOTERRA_URL, "namespace", "list"]) == 1

    def test_missing_subcommand(self):
        assert main(["--apikey", "k"]) == 1

    def test_missing_action(self):
        assert main(["--apikey", "k", "run"]) == 1

    def test_version(self, capsys):
        assert main(["--version"]) == 0
        assert "goterra-cli" in capsys.readouterr().out

    @responses.activate
    def test_authentication_failure(self, capsys):
        responses.add(responses.GET, f"{MOCK_GOTERRA_URL}/auth/api", status=401)

        assert main(["--apikey", "bad", "--url", MOCK_GOTERRA_URL, "namespace", "list"]) == 1
        assert "Failed to authenticate" in capsys.readouterr().err

    @responses.activate
    def test_http_failure_reports_remote_message(self, capsys):
        add_login()
        responses.add(responses.GET, f"{MOCK_GOTERRA_URL}/deploy/run", status=500, json={"message": "db down"})

        assert main(["--apikey", "k", "--url", MOCK_GOTERRA_URL, "run", "list"]) == 1
        assert "Failed to get runs: db down" in capsys.readouterr().err

    @responses.activate
    def test_success(self, monkeypatch, capsys):
        monkeypatch.setenv("GOT_APIKEY", "k")
        monkeypatch.setenv("GOT_URL", MOCK_GOTERRA_URL)
        add_login()
        responses.add(
            responses.GET,
            f"{MOCK_GOTERRA_URL}/deploy/apps",
            json={"apps": [{"id": "a1", "name": "slurm", "description": "cluster", "public": True}]},
        )

        assert main(["app", "list"]) == 0
        out = capsys.readouterr().out
        assert "slurm" in out
        assert "true" in out
        assert responses.calls[1].request.headers["Authorization"] == "Bearer tok"

    @responses.activate
    def test_missing_show_ids(self, capsys):
        add_login()

        assert main(["--apikey", "k", "--url", MOCK_GOTERRA_URL, "recipe", "show", "--ns", "ns1"]) == 1
        assert "missing recipe id" in capsys.readouterr().err

    @responses.activate
    def test_bad_params_file(self, tmp_path, capsys):
        add_login()
        responses.add(responses.GET, f"{MOCK_GOTERRA_URL}/deploy/ns/ns1/endpoint/ep1/secret", json={})

        argv = ["--apikey", "k", "--url", MOCK_GOTERRA_URL, "run", "start", "--ns", "ns1", "--endpoint", "ep1"]
        argv += ["--app", "app1", "--params", str(tmp_path / "missing.yaml")]

        assert main(argv) == 1
        assert "missing.yaml" in capsys.readouterr().err

    @responses.activate
    def test_closed_stdin_on_confirmation(self, capsys):
        add_login()
        # NO DELETE registered - test fails if it is attempted

        argv = ["--apikey", "k", "--url", MOCK_GOTERRA_URL, "run", "delete", "--ns", "ns1", "--id", "r1"]
        with patch("goterra_cli.commands.base.Confirm.ask", side_effect=EOFError):
            assert main(argv) == 1
        assert "No input available" in capsys.readouterr().err

    @responses.activate
    def test_user_create(self):
        add_login()
        responses.add(responses.POST, f"{MOCK_GOTERRA_URL}/auth/register", json={})

        argv = ["--apikey", "k", "--url", MOCK_GOTERRA_URL, "user", "create", "carol", "--email", "c@example.com"]

        assert main(argv) == 0
        assert responses.calls[1].request.url == f"{MOCK_GOTERRA_URL}/auth/register"

    def test_user_create_requires_email(self):
        assert main(["--apikey", "k", "user", "create", "carol"]) == 1
