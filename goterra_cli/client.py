"""Goterra REST API client with bearer-token session."""

from __future__ import annotations

import logging
from typing import Any

import requests

from goterra_cli.models import LOGGER_NAME, MASKED_PASSWORD, RunRequest


class GoterraAPIError(requests.HTTPError):
    """Non-success response from the goterra service, carrying its message."""

    def __init__(self, message: str, response: requests.Response | None = None):
        super().__init__(message, response=response)
        self.message = message

    def __str__(self) -> str:
        return self.message


def _remote_message(resp: requests.Response) -> str:
    """Extract the service-provided error text from a failed response."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return resp.text.strip() or resp.reason or f"HTTP {resp.status_code}"


def _loggable(body: Any) -> Any:
    """Request body as written to the debug log, with passwords hidden."""
    if isinstance(body, dict) and "password" in body:
        return {**body, "password": MASKED_PASSWORD}
    return body if body is not None else ""


class GoterraClient:
    """Thin wrapper around the goterra deploy and auth APIs."""

    def __init__(self, base_url: str, api_key: str, token: str | None = None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        self.logger = logging.getLogger(LOGGER_NAME)
        self.token = ""
        if token:
            self.set_token(token)

    def set_token(self, token: str) -> None:
        self.token = token
        self.session.headers["Authorization"] = f"Bearer {token}"

    def login(self) -> str:
        """Exchange the API key for a bearer token and keep it for the session."""
        url = f"{self.base_url}/auth/api"
        self.logger.debug(f"GET {url}")
        resp = self.session.get(url, headers={"X-API-Key": self.api_key})
        if resp.status_code != 200:
            raise GoterraAPIError("Failed to authenticate", response=resp)
        token = resp.json().get("token", "")
        if not token:
            raise GoterraAPIError("Failed to authenticate: no token in response", response=resp)
        self.set_token(token)
        return token

    def _request(self, method: str, endpoint: str, action: str, **kwargs) -> requests.Response:
        """Make an HTTP request; any non-2xx status raises GoterraAPIError."""
        url = f"{self.base_url}{endpoint}"
        self.logger.debug(f"{method.upper()} {url} {kwargs.get('params') or ''} {_loggable(kwargs.get('json'))}")
        resp = self.session.request(method, url, **kwargs)
        if not resp.ok:
            message = _remote_message(resp)
            self.logger.debug(f"API error {resp.status_code}: {message}")
            raise GoterraAPIError(f"{action}: {message}", response=resp)
        return resp

    def get(self, endpoint: str, action: str, params: dict | None = None) -> Any:
        return self._request("GET", endpoint, action, params=params).json()

    def post(self, endpoint: str, action: str, data: dict | None = None) -> Any:
        resp = self._request("POST", endpoint, action, json=data)
        return resp.json() if resp.content else {}

    def put(self, endpoint: str, action: str, data: dict | None = None) -> Any:
        resp = self._request("PUT", endpoint, action, json=data)
        return resp.json() if resp.content else {}

    def delete(self, endpoint: str, action: str) -> requests.Response:
        return self._request("DELETE", endpoint, action)

    # -- Namespaces --

    def get_namespaces(self, show_all: bool = False) -> list[dict]:
        params = {"all": "1"} if show_all else None
        return self.get("/deploy/ns", "Failed to get namespaces", params=params).get("ns") or []

    def get_namespace(self, ns_id: str) -> dict:
        return self.get(f"/deploy/ns/{ns_id}", "Failed to get namespace").get("ns") or {}

    def create_namespace(self, name: str) -> dict:
        return self.post("/deploy/ns", "Failed to create namespace", data={"name": name})

    def update_namespace(self, ns: dict) -> dict:
        return self.put(f"/deploy/ns/{ns['id']}", "Failed to update namespace", data=ns)

    def delete_namespace(self, ns_id: str) -> None:
        self.delete(f"/deploy/ns/{ns_id}", "Failed to delete namespace")

    # -- Endpoints --

    def get_endpoints(self, ns_id: str | None = None) -> list[dict]:
        endpoint = f"/deploy/ns/{ns_id}/endpoint" if ns_id else "/deploy/endpoints"
        return self.get(endpoint, "Failed to get endpoints").get("endpoints") or []

    def get_endpoint(self, ns_id: str, endpoint_id: str) -> dict:
        data = self.get(f"/deploy/ns/{ns_id}/endpoint/{endpoint_id}", "Failed to get endpoint")
        return data.get("endpoint") or {}

    def get_endpoint_defaults(self, ns_id: str, endpoint_id: str) -> dict[str, list[str]]:
        data = self.get(f"/deploy/ns/{ns_id}/endpoint/{endpoint_id}/defaults", "Failed to get endpoint defaults")
        return data.get("defaults") or {}

    def has_secret(self, ns_id: str, endpoint_id: str) -> bool:
        """Whether the user has stored a secret for this endpoint."""
        try:
            self._request("GET", f"/deploy/ns/{ns_id}/endpoint/{endpoint_id}/secret", "Failed to get secret")
        except GoterraAPIError as e:
            self.logger.debug(f"No secret for endpoint {endpoint_id}: {e}")
            return False
        return True

    # -- Recipes, templates, applications --

    def _get_catalog(self, public_path: str, ns_path: str, key: str, ns_id: str | None, action: str) -> list[dict]:
        endpoint = f"/deploy/ns/{ns_id}/{ns_path}" if ns_id else f"/deploy/{public_path}"
        return self.get(endpoint, action).get(key) or []

    def get_recipes(self, ns_id: str | None = None) -> list[dict]:
        return self._get_catalog("recipes", "recipe", "recipes", ns_id, "Failed to get recipes")

    def get_recipe(self, ns_id: str, recipe_id: str) -> dict:
        return self.get(f"/deploy/ns/{ns_id}/recipe/{recipe_id}", "Failed to get recipe").get("recipe") or {}

    def get_templates(self, ns_id: str | None = None) -> list[dict]:
        return self._get_catalog("templates", "template", "templates", ns_id, "Failed to get templates")

    def get_template(self, ns_id: str, template_id: str) -> dict:
        return self.get(f"/deploy/ns/{ns_id}/template/{template_id}", "Failed to get template").get("template") or {}

    def get_apps(self, ns_id: str | None = None) -> list[dict]:
        return self._get_catalog("apps", "app", "apps", ns_id, "Failed to get applications")

    def get_app(self, ns_id: str, app_id: str) -> dict:
        return self.get(f"/deploy/ns/{ns_id}/app/{app_id}", "Failed to get application").get("app") or {}

    def get_app_inputs(self, ns_id: str, app_id: str) -> dict:
        """Inputs of an application, grouped as template, recipes, endpoints and defaults."""
        data = self.get(f"/deploy/ns/{ns_id}/app/{app_id}/inputs", "Failed to get application inputs")
        return data.get("app") or {}

    # -- Users --

    def get_users(self) -> list[dict]:
        return self.get("/auth/user", "Failed to get users").get("users") or []

    def get_user(self, uid: str) -> dict:
        return self.get(f"/auth/user/{uid}", "Failed to get user").get("user") or {}

    def create_user(self, user: dict) -> None:
        self.post("/auth/register", "Failed to create user", data=user)

    def set_user_password(self, uid: str, password: str) -> None:
        self.put(f"/auth/user/{uid}/password", "Failed to update user password", data={"password": password})

    # -- Runs --

    def get_runs(self, ns_id: str | None = None) -> list[dict]:
        endpoint = f"/deploy/ns/{ns_id}/run" if ns_id else "/deploy/run"
        return self.get(endpoint, "Failed to get runs").get("runs") or []

    def get_run(self, ns_id: str, run_id: str) -> dict:
        return self.get(f"/deploy/ns/{ns_id}/run/{run_id}", "Failed to get run")

    def start_run(self, run: RunRequest) -> str:
        """Submit a run and return its id."""
        data = self.post(f"/deploy/ns/{run.namespace}/run/{run.app_id}", "Failed to run application", data=run.to_dict())
        return data.get("run", "")

    def delete_run(self, ns_id: str, run_id: str) -> None:
        self.delete(f"/deploy/ns/{ns_id}/run/{run_id}", "Failed to delete run")

    def get_run_store(self, deployment_id: str) -> dict:
        """Deployment data kept in the store for a deployed run."""
        return self.get(f"/store/{deployment_id}", "Failed to get deployment store")
