"""Configuration loading tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from buildutils.config import load_config
from buildutils.errors import ConfigurationError


def test_defaults_without_config_file(tmp_path: Path) -> None:
    config = load_config(repo_root=str(tmp_path))

    assert config.root == str(tmp_path)
    assert config.workspace.manifest_name == "package.json"
    assert config.workspace.workspace_file == "lerna.json"
    assert config.workspace.extra_paths == [
        "./jupyterlab/tests/mock_packages/extension",
        "./jupyterlab/tests/mock_packages/mimeextension",
    ]
    assert config.registry.modules_dir == "node_modules"


def test_yaml_overrides_nested_sections(tmp_path: Path) -> None:
    (tmp_path / "buildutils.yaml").write_text(yaml.safe_dump({
        "workspace": {"extra_paths": ["./extras/one"]},
        "registry": {"index_file": "registry.json"},
        "output": {"formats": ["json", "dot"]},
        "unknown": {"ignored": True},
    }))

    config = load_config(repo_root=str(tmp_path))

    assert config.workspace.extra_paths == ["./extras/one"]
    assert config.workspace.manifest_name == "package.json"
    assert config.registry.index_file == "registry.json"
    assert config.output.formats == ["json", "dot"]


def test_root_is_relative_to_config_file(tmp_path: Path) -> None:
    conf_dir = tmp_path / "conf"
    conf_dir.mkdir()
    conf = conf_dir / "custom.yaml"
    conf.write_text("root: ..\n")

    config = load_config(config_path=str(conf), repo_root=str(tmp_path / "elsewhere"))

    assert config.root == str(tmp_path)


def test_hidden_config_file_is_found(tmp_path: Path) -> None:
    (tmp_path / ".buildutils.yaml").write_text("logging:\n  level: DEBUG\n")

    assert load_config(repo_root=str(tmp_path)).logging.level == "DEBUG"


def test_non_mapping_config_is_rejected(tmp_path: Path) -> None:
    (tmp_path / "buildutils.yaml").write_text("- just\n- a list\n")

    with pytest.raises(ConfigurationError):
        load_config(repo_root=str(tmp_path))


def test_explicit_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_config(config_path=str(tmp_path / "nope.yaml"), repo_root=str(tmp_path))


def test_section_must_be_a_mapping(tmp_path: Path) -> None:
    (tmp_path / "buildutils.yaml").write_text("registry: node_modules\n")

    with pytest.raises(ConfigurationError, match="registry"):
        load_config(repo_root=str(tmp_path))


def test_list_values_must_be_lists(tmp_path: Path) -> None:
    (tmp_path / "buildutils.yaml").write_text("workspace:\n  extra_paths: ./one\n")

    with pytest.raises(ConfigurationError, match="workspace.extra_paths"):
        load_config(repo_root=str(tmp_path))


def test_empty_section_keeps_defaults(tmp_path: Path) -> None:
    (tmp_path / "buildutils.yaml").write_text("output:\n")

    assert load_config(repo_root=str(tmp_path)).output.formats == ["json"]
