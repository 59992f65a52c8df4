"""Monorepo package discovery."""

from __future__ import annotations

import glob
import logging
import os
from typing import List, Optional

from .config import BuildUtilsConfig, WorkspaceConfig
from .errors import ConfigurationError
from .jsonio import read_json_file

logger = logging.getLogger(__name__)


def get_workspace_paths(
    base_path: str = ".",
    workspace: Optional[WorkspaceConfig] = None,
) -> List[str]:
    """Get all of the workspace package paths.

    The package globs come from the ``workspaces`` field of the base
    manifest, or from the workspace list file (``lerna.json``) when the
    manifest declares none. Only directories holding a manifest are kept.

    Returns:
        Absolute package directories, in glob order. Overlapping globs
        may yield the same directory twice.

    Raises:
        ConfigurationError: no workspace / package list was found.
    """
    workspace = workspace or WorkspaceConfig()
    base_path = os.path.abspath(base_path)

    patterns = _read_package_globs(base_path, workspace)

    paths: List[str] = []
    for pattern in patterns:
        matches = sorted(glob.glob(os.path.join(base_path, pattern), recursive=True))
        paths.extend(os.path.normpath(m) for m in matches)

    return [
        p for p in paths
        if os.path.isfile(os.path.join(p, workspace.manifest_name))
    ]


def get_core_paths(base_path: str = ".", core_glob: str = "packages/*") -> List[str]:
    """Get all of the core package paths."""
    spec = os.path.join(os.path.abspath(base_path), core_glob)
    return sorted(glob.glob(spec))


def discover_package_paths(config: BuildUtilsConfig) -> List[str]:
    """Workspace paths plus the configured extra package paths."""
    paths = get_workspace_paths(config.root, config.workspace)
    for extra in config.workspace.extra_paths:
        paths.append(os.path.normpath(os.path.join(config.root, extra)))
    return paths


def _read_package_globs(base_path: str, workspace: WorkspaceConfig) -> List[str]:
    """Read the package glob list from the manifest or workspace file."""
    manifest_path = os.path.join(base_path, workspace.manifest_name)
    list_path = os.path.join(base_path, workspace.workspace_file)
    missing = ConfigurationError(
        f"No yarn workspace / lerna package list found in {base_path}"
    )

    if not os.path.isfile(manifest_path):
        raise missing
    base_config = read_json_file(manifest_path)

    workspaces = base_config.get("workspaces") if isinstance(base_config, dict) else None
    if workspaces is not None:
        packages = workspaces.get("packages") if isinstance(workspaces, dict) else workspaces
        logger.debug("Using workspaces from %s", manifest_path)
    else:
        if not os.path.isfile(list_path):
            raise missing
        list_config = read_json_file(list_path)
        packages = list_config.get("packages") if isinstance(list_config, dict) else None
        logger.debug("Using package list from %s", list_path)

    if not isinstance(packages, list):
        raise missing
    return [str(p) for p in packages]
