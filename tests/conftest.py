"""Shared fixtures: throwaway monorepo workspaces on disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Optional

import pytest

from buildutils.config import BuildUtilsConfig


def write_manifest(pkg_dir: Path, data: dict) -> Path:
    pkg_dir.mkdir(parents=True, exist_ok=True)
    path = pkg_dir / "package.json"
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def make_package() -> Callable[..., Path]:
    def _make(pkg_dir: Path, name: str, dependencies: Optional[dict] = None, **extra) -> Path:
        data = {"name": name, "version": extra.pop("version", "1.0.0")}
        if dependencies is not None:
            data["dependencies"] = dependencies
        data.update(extra)
        write_manifest(pkg_dir, data)
        return pkg_dir

    return _make


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A root manifest declaring ``packages/*`` as workspaces."""
    write_manifest(tmp_path, {
        "name": "@test/root",
        "private": True,
        "workspaces": {"packages": ["packages/*"]},
    })
    (tmp_path / "packages").mkdir()
    return tmp_path


@pytest.fixture
def config(workspace: Path) -> BuildUtilsConfig:
    cfg = BuildUtilsConfig(root=str(workspace))
    cfg.workspace.extra_paths = []
    return cfg
