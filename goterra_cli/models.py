"""Data models and constants for goterra-cli."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_GOTERRA_URL = "https://goterra.genouest.org"
ENV_APIKEY = "GOT_APIKEY"
ENV_URL = "GOT_URL"

LOGGER_NAME = "goterra-cli"

NO_SECRET_MESSAGE = "no known secret for this endpoint, please create one first"
MASKED_PASSWORD = "*****"


# ---------------------------------------------------------------------------
# Data Classes
# ---------------------------------------------------------------------------


@dataclass
class ClientOptions:
    """Connection info for the goterra service."""

    url: str
    api_key: str
    token: str = ""


@dataclass
class Namespace:
    id: str
    name: str
    owners: list[str] = field(default_factory=list)
    members: list[str] = field(default_factory=list)
    freeze: bool = False
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> Namespace:
        known = {"id", "name", "owners", "members", "freeze"}
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            owners=list(data.get("owners") or []),
            members=list(data.get("members") or []),
            freeze=bool(data.get("freeze", False)),
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> dict:
        """Serialize back to the API shape, keeping fields the client does not model."""
        d = dict(self.extra)
        d.update(
            {
                "id": self.id,
                "name": self.name,
                "owners": self.owners,
                "members": self.members,
                "freeze": self.freeze,
            }
        )
        return d


@dataclass
class Endpoint:
    id: str
    name: str
    kind: str = ""
    public: bool = False
    namespace: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> Endpoint:
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            kind=data.get("kind", ""),
            public=bool(data.get("public", False)),
            namespace=data.get("namespace", ""),
        )


@dataclass
class CatalogEntry:
    """A recipe, template or application: they share the same listing fields."""

    id: str
    name: str
    description: str = ""
    public: bool = False
    namespace: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> CatalogEntry:
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            description=data.get("description", ""),
            public=bool(data.get("public", False)),
            namespace=data.get("namespace", ""),
        )


@dataclass
class Run:
    id: str
    name: str
    status: str = ""
    start: int = 0
    end: int = 0
    namespace: str = ""
    deployment: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> Run:
        return cls(
            id=data.get("id", ""),
            name=data.get("name", ""),
            status=data.get("status", ""),
            start=int(data.get("start") or 0),
            end=int(data.get("end") or 0),
            namespace=data.get("namespace", ""),
            deployment=data.get("deployment", ""),
        )


@dataclass
class User:
    uid: str
    email: str = ""
    admin: bool = False
    super_user: bool = False
    kind: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> User:
        return cls(
            uid=data.get("uid", ""),
            email=data.get("email", ""),
            admin=bool(data.get("admin", False)),
            super_user=bool(data.get("super_user", False)),
            kind=data.get("kind", ""),
        )


@dataclass
class RunRequest:
    """Payload for starting a run of an application on an endpoint."""

    name: str
    namespace: str
    endpoint: str
    app_id: str
    inputs: dict[str, str] = field(default_factory=dict)
    sensitive_inputs: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "namespace": self.namespace,
            "endpoint": self.endpoint,
            "appID": self.app_id,
            "inputs": self.inputs,
            "secretinputs": self.sensitive_inputs,
        }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def add_to_list(items: list[str], item: str) -> list[str]:
    """Return items with item appended, unless already present."""
    if item in items:
        return items
    return items + [item]


def remove_from_list(items: list[str], item: str) -> list[str]:
    """Return items without the first occurrence of item."""
    if item not in items:
        return items
    index = items.index(item)
    return items[:index] + items[index + 1 :]
