"""Configuration loading for the build utilities."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

import yaml

from .errors import ConfigurationError


# ---------------------------------------------------------------------------
# Workspace config
# ---------------------------------------------------------------------------

@dataclass
class WorkspaceConfig:
    manifest_name: str = "package.json"
    workspace_file: str = "lerna.json"  # consulted when the manifest has no workspaces
    # Packages outside the workspace globs that still belong in the graph
    extra_paths: list = field(default_factory=lambda: [
        "./jupyterlab/tests/mock_packages/extension",
        "./jupyterlab/tests/mock_packages/mimeextension",
    ])
    core_glob: str = "packages/*"


# ---------------------------------------------------------------------------
# Registry config
# ---------------------------------------------------------------------------

@dataclass
class RegistryConfig:
    modules_dir: str = "node_modules"
    index_file: Optional[str] = None  # JSON: package name -> installed directory


# ---------------------------------------------------------------------------
# Versioning config
# ---------------------------------------------------------------------------

@dataclass
class VersioningConfig:
    python_version_cmd: str = "python setup.py --version"
    bump_tool: str = "bump2version"
    integrity_cmd: str = "jlpm run integrity"
    commit_message: str = "[ci skip] bump version"


# ---------------------------------------------------------------------------
# Output config
# ---------------------------------------------------------------------------

@dataclass
class OutputConfig:
    directory: str = "build/package_graph"
    formats: list = field(default_factory=lambda: ["json"])


# ---------------------------------------------------------------------------
# Logging config
# ---------------------------------------------------------------------------

@dataclass
class LoggingConfig:
    level: str = "INFO"
    format: str = "%(levelname)s [%(name)s] %(message)s"


# ---------------------------------------------------------------------------
# Top-level Config
# ---------------------------------------------------------------------------

@dataclass
class BuildUtilsConfig:
    version: str = "1.0"
    root: str = "."
    workspace: WorkspaceConfig = field(default_factory=WorkspaceConfig)
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    versioning: VersioningConfig = field(default_factory=VersioningConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


CONFIG_FILENAMES = ("buildutils.yaml", ".buildutils.yaml")


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def _apply_section(obj, data, section: str):
    """Overlay one YAML section (``workspace:``, ``registry:``, ...) onto its dataclass.

    Keys the dataclass does not define are ignored, as is an empty section.
    """
    if data is None:
        return
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config section {section!r} must be a mapping")
    for key, value in data.items():
        if not hasattr(obj, key):
            continue
        if isinstance(getattr(obj, key), list) and not isinstance(value, list):
            raise ConfigurationError(f"Config value {section}.{key} must be a list")
        setattr(obj, key, value)


def load_config(config_path: Optional[str] = None, repo_root: Optional[str] = None) -> BuildUtilsConfig:
    """Load the workspace settings, falling back to the defaults above.

    An explicit *config_path* must exist. Otherwise ``buildutils.yaml`` and
    then ``.buildutils.yaml`` are looked up in *repo_root* (default: cwd);
    when neither exists the workspace at *repo_root* is used as-is. A
    relative ``root:`` is taken relative to the file that sets it.
    """
    if repo_root is None:
        repo_root = os.getcwd()

    config = BuildUtilsConfig()

    if config_path is None:
        for name in CONFIG_FILENAMES:
            candidate = os.path.join(repo_root, name)
            if os.path.isfile(candidate):
                config_path = candidate
                break
    elif not os.path.isfile(config_path):
        raise ConfigurationError(f"Config file not found: {config_path}")

    if config_path:
        with open(config_path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping")
        if "version" in data:
            config.version = str(data["version"])
        if "root" in data:
            config.root = data["root"]
        for section in ("workspace", "registry", "versioning", "output", "logging"):
            if section in data:
                _apply_section(getattr(config, section), data[section], section)

    # Resolve root to absolute
    if not os.path.isabs(config.root):
        if config_path:
            config_dir = os.path.dirname(os.path.abspath(config_path))
            config.root = os.path.normpath(os.path.join(config_dir, config.root))
        else:
            config.root = os.path.abspath(os.path.join(repo_root, config.root))

    return config
