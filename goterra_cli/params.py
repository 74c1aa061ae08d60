"""Run parameter collection.

Run inputs come from one of two places:

* interactively, by walking the application's declared inputs (template inputs,
  then recipe inputs, then the inputs specific to the target endpoint) and
  filling each one from the available defaults, prompting when none applies;
* a YAML file holding a ``params`` mapping, as produced by ``run start --template``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import yaml
from rich.console import Console
from rich.prompt import Prompt
from rich.text import Text

from goterra_cli.models import LOGGER_NAME
from goterra_cli.output import to_yaml

PromptFunc = Callable[[str], str]
EchoFunc = Callable[[str], None]

# (heading, key in the application inputs payload)
INPUT_GROUPS = (
    ("Template parameters:", "template"),
    ("Recipe parameters:", "recipes"),
)
ENDPOINT_GROUP_HEADING = "Endpoint parameters:"


def default_prompt(label: str, console: Console | None = None) -> str:
    return Prompt.ask(Text(label), console=console, default="", show_default=False)


def _candidates(defaults: dict | None, param: str) -> list[str]:
    values = (defaults or {}).get(param)
    if values is None:
        return []
    if isinstance(values, (str, int, float)):
        return [str(values)]
    return [str(v) for v in values]


def resolve_param(
    param: str,
    label: str,
    app_defaults: dict | None,
    endpoint_defaults: dict | None,
    prompt: PromptFunc,
    echo: EchoFunc,
) -> str:
    """Pick the value for one input.

    Application defaults are checked first, endpoint defaults second; a source
    with a single candidate sets the value, so an endpoint default overrides an
    application default. Several candidates are only shown as choices. An input
    left without a value is prompted for.
    """
    value = ""
    for source in (app_defaults, endpoint_defaults):
        candidates = _candidates(source, param)
        if len(candidates) == 1:
            echo(f"Default: {candidates[0]}")
            value = candidates[0]
        elif candidates:
            echo(f"Choices: {','.join(candidates)}")
    if not value:
        value = prompt(label or param)
    return value


def resolve_params(
    inputs: dict,
    endpoint_name: str,
    endpoint_defaults: dict | None = None,
    prompt: PromptFunc | None = None,
    echo: EchoFunc | None = None,
) -> dict[str, str]:
    """Resolve every declared input of an application to a single value.

    ``inputs`` is the application inputs payload: ``template`` and ``recipes``
    map input names to labels, ``endpoints`` maps endpoint names to the same
    kind of mapping, and ``defaults`` maps input names to candidate values.
    """
    prompt = prompt or default_prompt
    echo = echo or print
    app_defaults = inputs.get("defaults") or {}

    groups = [(heading, inputs.get(key) or {}) for heading, key in INPUT_GROUPS]
    endpoint_inputs = (inputs.get("endpoints") or {}).get(endpoint_name)
    if endpoint_inputs is None:
        logging.getLogger(LOGGER_NAME).debug(f"Application declares no inputs for endpoint {endpoint_name!r}")
    groups.append((ENDPOINT_GROUP_HEADING, endpoint_inputs or {}))

    params: dict[str, str] = {}
    for heading, declared in groups:
        echo(heading)
        for param, label in declared.items():
            params[param] = resolve_param(param, str(label), app_defaults, endpoint_defaults, prompt, echo)
    return params


def load_params(path: str | Path) -> dict[str, str]:
    """Read run parameters from a YAML file with a top-level ``params`` mapping."""
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid parameters file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Invalid parameters file {path}: expected a mapping")
    params = data.get("params") or {}
    if not isinstance(params, dict):
        raise ValueError(f"Invalid parameters file {path}: 'params' must be a mapping")
    return {str(k): "" if v is None else str(v) for k, v in params.items()}


def dump_params(params: dict[str, str]) -> str:
    """Render parameters in the YAML shape accepted by load_params."""
    return to_yaml({"params": params})
