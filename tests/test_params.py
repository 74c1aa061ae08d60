"""Tests for run parameter resolution from application and endpoint defaults."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from goterra_cli.params import dump_params, load_params, resolve_param, resolve_params


class RecordingPrompt:
    """Prompt stand-in returning canned answers and recording labels."""

    def __init__(self, answer: str = "typed"):
        self.answer = answer
        self.labels = []

    def __call__(self, label: str) -> str:
        self.labels.append(label)
        return self.answer


class TestResolveParam:
    """Default selection for a single input."""

    def test_single_app_default_used_without_prompt(self):
        prompt = RecordingPrompt()
        value = resolve_param("image", "VM image", {"image": ["debian-10"]}, None, prompt, lambda msg: None)

        assert value == "debian-10"
        assert prompt.labels == []

    def test_single_endpoint_default_used_without_prompt(self):
        prompt = RecordingPrompt()
        value = resolve_param("flavor", "Flavor", {}, {"flavor": ["m1.small"]}, prompt, lambda msg: None)

        assert value == "m1.small"
        assert prompt.labels == []

    def test_endpoint_default_wins_over_app_default(self):
        prompt = RecordingPrompt()
        value = resolve_param(
            "image", "VM image", {"image": ["debian-10"]}, {"image": ["centos-7"]}, prompt, lambda msg: None
        )

        assert value == "centos-7"
        assert prompt.labels == []

    def test_single_app_default_kept_when_endpoint_offers_choices(self):
        prompt = RecordingPrompt()
        echoed = []
        value = resolve_param(
            "image",
            "VM image",
            {"image": ["debian-10"]},
            {"image": ["centos-7", "ubuntu"]},
            prompt,
            echoed.append,
        )

        assert value == "debian-10"
        assert prompt.labels == []
        assert "Choices: centos-7,ubuntu" in echoed

    def test_single_endpoint_default_used_when_app_offers_choices(self):
        prompt = RecordingPrompt()
        echoed = []
        value = resolve_param(
            "image",
            "VM image",
            {"image": ["debian-10", "ubuntu"]},
            {"image": ["centos-7"]},
            prompt,
            echoed.append,
        )

        assert value == "centos-7"
        assert prompt.labels == []
        assert "Choices: debian-10,ubuntu" in echoed

    def test_multiple_candidates_prompt_and_show_choices(self):
        prompt = RecordingPrompt("ubuntu")
        echoed = []
        value = resolve_param(
            "image",
            "VM image",
            {"image": ["debian-10", "ubuntu"]},
            {"image": ["centos-7", "ubuntu"]},
            prompt,
            echoed.append,
        )

        assert value == "ubuntu"
        assert prompt.labels == ["VM image"]
        assert "Choices: debian-10,ubuntu" in echoed
        assert "Choices: centos-7,ubuntu" in echoed

    def test_no_default_prompts(self):
        prompt = RecordingPrompt("my-key")
        value = resolve_param("ssh_key", "SSH public key", None, None, prompt, lambda msg: None)

        assert value == "my-key"
        assert prompt.labels == ["SSH public key"]

    def test_empty_candidate_list_prompts(self):
        prompt = RecordingPrompt()
        resolve_param("image", "VM image", {"image": []}, None, prompt, lambda msg: None)

        assert prompt.labels == ["VM image"]


class TestResolveParams:
    """Whole-application resolution over the three input groups."""

    def test_groups_resolved_in_order(self, sample_app_inputs):
        prompt = RecordingPrompt("x")
        echoed = []

        params = resolve_params(
            sample_app_inputs,
            endpoint_name="openstack",
            endpoint_defaults={"flavor": ["m1.small"]},
            prompt=prompt,
            echo=echoed.append,
        )

        assert params == {"image": "debian-10", "ssh_key": "x", "flavor": "m1.small"}
        assert prompt.labels == ["SSH public key"]
        headings = [line for line in echoed if line.endswith("parameters:")]
        assert headings == ["Template parameters:", "Recipe parameters:", "Endpoint parameters:"]

    def test_only_target_endpoint_inputs_collected(self, sample_app_inputs):
        params = resolve_params(sample_app_inputs, "aws", prompt=RecordingPrompt("eu-west-1"), echo=lambda m: None)

        assert "region" in params
        assert "flavor" not in params

    def test_unknown_endpoint_has_no_specific_inputs(self, sample_app_inputs):
        params = resolve_params(sample_app_inputs, "gcp", prompt=RecordingPrompt(), echo=lambda m: None)

        assert set(params) == {"image", "ssh_key"}

    def test_missing_groups_tolerated(self):
        assert resolve_params({}, "openstack", prompt=RecordingPrompt(), echo=lambda m: None) == {}


class TestParamsFile:
    """Pre-filled parameter files and templates."""

    def test_dump_then_load(self, tmp_path):
        path = tmp_path / "params.yaml"
        path.write_text(dump_params({"image": "debian-10", "ssh_key": ""}))

        assert load_params(path) == {"image": "debian-10", "ssh_key": ""}

    def test_template_shape(self):
        assert dump_params({"image": "debian-10"}) == "params:\n  image: debian-10\n"

    def test_values_coerced_to_strings(self, tmp_path):
        path = tmp_path / "params.yaml"
        path.write_text("params:\n  count: 3\n  enabled: true\n  empty:\n")

        assert load_params(path) == {"count": "3", "enabled": "True", "empty": ""}

    def test_invalid_file_rejected(self, tmp_path):
        path = tmp_path / "params.yaml"
        path.write_text("params:\n  - a\n  - b\n")

        with pytest.raises(ValueError, match="must be a mapping"):
            load_params(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_params(tmp_path / "nope.yaml")
