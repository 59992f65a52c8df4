"""Package-level dependency graph builder.

Reads the manifest of every workspace package and builds a graph of the
local packages and their first-order dependencies.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from ..config import BuildUtilsConfig, load_config
from ..discovery import discover_package_paths
from ..errors import ManifestReadError, UnresolvedDependencyError
from ..jsonio import read_manifest
from ..models import PackageManifest
from ..registry import PackageRegistry
from .models import PackageGraph

logger = logging.getLogger(__name__)


def build_package_graph(
    config: Optional[BuildUtilsConfig] = None,
    registry: Optional[PackageRegistry] = None,
) -> PackageGraph:
    """Build a graph of the local packages and their first-order dependencies.

    Args:
        config: Configuration; loaded from the current directory when None.
        registry: Lookup for installed packages; built from *config* when None.

    Returns:
        PackageGraph with one node per package name and one edge per
        (package, dependency) pair.

    Raises:
        ConfigurationError: no workspace package list was found.
        UnresolvedDependencyError: a non-local dependency has no manifest.
    """
    if config is None:
        config = load_config()
    if registry is None:
        registry = PackageRegistry.from_config(config)

    # Gather all of our package data
    locals_: Dict[str, PackageManifest] = {}
    for pkg_path in discover_package_paths(config):
        try:
            manifest = read_manifest(pkg_path, config.workspace.manifest_name)
        except ManifestReadError as exc:
            logger.error("%s", exc)
            continue
        if not manifest.name:
            logger.warning("Skipping %s: manifest has no name", pkg_path)
            continue
        locals_[manifest.name] = manifest

    graph = PackageGraph()
    for name, manifest in locals_.items():
        graph.add_node(name, manifest, local=True)
        for dep_name in manifest.dependencies:
            if not graph.has_node(dep_name):
                if dep_name in locals_:
                    graph.add_node(dep_name, locals_[dep_name], local=True)
                else:
                    graph.add_node(dep_name, _require_package(registry, name, dep_name))
            graph.add_dependency(name, dep_name)

    logger.info(
        "Package graph: %d nodes (%d local), %d edges",
        graph.node_count, len(graph.local_names), graph.edge_count,
    )
    return graph


def _require_package(registry: PackageRegistry, parent: str, name: str) -> PackageManifest:
    """Resolve the manifest of *name* starting from where *parent* is installed.

    Resolving from the parent finds copies that are not hoisted to the top
    level. A parent that is not installed itself (e.g. a private root
    package) falls back to a lookup from the registry root.
    """
    try:
        parent_dir = registry.locate(parent)
    except UnresolvedDependencyError:
        logger.debug("Cannot locate %s, resolving %s from the registry root", parent, name)
        return registry.resolve_manifest(name)
    return registry.resolve_manifest(name, search_from=parent_dir)
