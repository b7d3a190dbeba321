"""Tests for elementscan.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from elementscan.config import ConfigError, ElementScanConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, ElementScanConfig)
    assert config.root == tmp_path.resolve()
    assert config.factory_name == "Polymer"
    assert config.extensions == [".js", ".mjs"]
    assert config.exclude_paths == []


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".elementscan.yml"
    config_file.write_text(
        """
factory_name: Register
extensions: [js, .jsx]
exclude_paths:
  - "dist/"
  - "vendor/"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.factory_name == "Register"
    assert config.extensions == [".js", ".jsx"]
    assert config.exclude_paths == ["dist/", "vendor/"]


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".elementscan.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_reports_yaml_errors(tmp_path: Path) -> None:
    (tmp_path / ".elementscan.yml").write_text("factory_name: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_reads_log_levels(tmp_path: Path) -> None:
    (tmp_path / ".elementscan.yml").write_text(
        "log_levels:\n  polymer.finder: debug\n  analyzers.elements: WARNING\n",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.log_levels == {"polymer.finder": 10, "analyzers.elements": 30}


def test_load_config_rejects_unknown_log_level(tmp_path: Path) -> None:
    (tmp_path / ".elementscan.yml").write_text(
        "log_levels:\n  polymer.finder: chatty\n", encoding="utf-8"
    )

    with pytest.raises(ConfigError, match="log_levels.polymer.finder"):
        load_config(tmp_path)
