"""Installed package registry.

Locates manifests of packages installed on disk (``node_modules``) the way
the package manager lays them out: from a given directory, each ancestor's
modules directory is searched in turn. An optional index file maps package
names straight to their installed directories.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, Optional

from .config import BuildUtilsConfig
from .errors import ManifestReadError, UnresolvedDependencyError
from .jsonio import MANIFEST_NAME, read_json_file, read_manifest
from .models import PackageManifest

logger = logging.getLogger(__name__)


class PackageRegistry:
    """Lookup table for installed (non-workspace) packages."""

    def __init__(
        self,
        root: str,
        modules_dir: str = "node_modules",
        index: Optional[Dict[str, str]] = None,
        manifest_name: str = MANIFEST_NAME,
    ):
        self.root = os.path.abspath(root)
        self.modules_dir = modules_dir
        self.manifest_name = manifest_name
        self.index: Dict[str, str] = {}
        for name, pkg_dir in (index or {}).items():
            if not os.path.isabs(pkg_dir):
                pkg_dir = os.path.join(self.root, pkg_dir)
            self.index[name] = os.path.normpath(pkg_dir)

    @classmethod
    def from_config(cls, config: BuildUtilsConfig) -> "PackageRegistry":
        index = None
        if config.registry.index_file:
            index_path = os.path.join(config.root, config.registry.index_file)
            index = read_json_file(index_path)
            if not isinstance(index, dict):
                raise ManifestReadError(index_path, "index must be a JSON object")
            logger.debug("Loaded %d registry entries from %s", len(index), index_path)
        return cls(
            root=config.root,
            modules_dir=config.registry.modules_dir,
            index=index,
            manifest_name=config.workspace.manifest_name,
        )

    def locate(self, name: str) -> str:
        """Installed directory of *name* as seen from the registry root.

        Symlinks (workspace links) are resolved to the real directory.
        """
        candidates = []
        if name in self.index:
            candidates.append(self.index[name])
        candidates.append(os.path.join(self.root, self.modules_dir, name))
        for pkg_dir in candidates:
            if self._has_manifest(pkg_dir):
                return os.path.realpath(pkg_dir)
        raise UnresolvedDependencyError(name)

    def resolve_manifest(self, name: str, search_from: Optional[str] = None) -> PackageManifest:
        """Resolve the manifest of *name*.

        With *search_from*, the modules directory of that directory and of
        each of its ancestors is searched, nearest first. Without it, the
        package is looked up from the registry root.

        Raises:
            UnresolvedDependencyError: no readable manifest was found.
        """
        if search_from is None:
            pkg_dir = self.locate(name)
        else:
            pkg_dir = self._search_upwards(name, search_from)
        try:
            return read_manifest(pkg_dir, self.manifest_name)
        except ManifestReadError as exc:
            raise UnresolvedDependencyError(name, search_from) from exc

    def _search_upwards(self, name: str, start: str) -> str:
        current = os.path.abspath(start)
        while True:
            if os.path.basename(current) != self.modules_dir:
                candidate = os.path.join(current, self.modules_dir, name)
                if self._has_manifest(candidate):
                    return candidate
            parent = os.path.dirname(current)
            if parent == current:
                break
            current = parent
        raise UnresolvedDependencyError(name, start)

    def _has_manifest(self, pkg_dir: str) -> bool:
        return os.path.isfile(os.path.join(pkg_dir, self.manifest_name))
