"""JSON and package.json read/write helpers.

Writers only touch the file when its content actually changes, so running
them repeatedly over an unchanged tree leaves timestamps alone.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict

from .errors import ManifestReadError
from .models import PackageManifest

MANIFEST_NAME = "package.json"

# Conventional package.json field order; unknown fields follow alphabetically.
PACKAGE_KEY_ORDER = [
    "name",
    "version",
    "private",
    "description",
    "keywords",
    "homepage",
    "bugs",
    "repository",
    "funding",
    "license",
    "author",
    "contributors",
    "sideEffects",
    "type",
    "exports",
    "main",
    "module",
    "browser",
    "types",
    "typings",
    "style",
    "bin",
    "man",
    "directories",
    "files",
    "workspaces",
    "scripts",
    "resolutions",
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "peerDependenciesMeta",
    "optionalDependencies",
    "bundledDependencies",
    "engines",
    "os",
    "cpu",
    "publishConfig",
]

# Fields whose keys are package names and get sorted.
_SORTED_MAPS = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "peerDependenciesMeta",
    "optionalDependencies",
    "resolutions",
    "engines",
)


def read_json_file(file_path: str) -> Any:
    """Read and parse a JSON file.

    Raises:
        ManifestReadError: the file is missing, unreadable or not valid JSON.
    """
    try:
        with open(file_path, "r", encoding="utf-8") as fh:
            return json.load(fh)
    except (OSError, ValueError) as exc:
        raise ManifestReadError(file_path, exc) from exc


def write_json_file(file_path: str, data: Any) -> bool:
    """Write *data* as JSON with recursively sorted keys.

    Returns True if the file was written, False if its parsed content
    already equals *data*.
    """
    try:
        orig = read_json_file(file_path)
    except ManifestReadError:
        orig = {}
    text = json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False) + "\n"
    # Serialized comparison keeps true and 1 distinct
    if json.dumps(orig, sort_keys=True) == json.dumps(data, sort_keys=True):
        return False
    _write_text(file_path, text)
    return True


def sort_package_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of package data in canonical field order."""
    ordered: Dict[str, Any] = {}
    for key in PACKAGE_KEY_ORDER:
        if key in data:
            ordered[key] = data[key]
    for key in sorted(k for k in data if k not in ordered):
        ordered[key] = data[key]
    for key in _SORTED_MAPS:
        value = ordered.get(key)
        if isinstance(value, dict):
            ordered[key] = {k: value[k] for k in sorted(value)}
    return ordered


def write_package_data(pkg_json_path: str, data: Dict[str, Any]) -> bool:
    """Write a package.json if necessary.

    Args:
        pkg_json_path: Path to the package.json file.
        data: The package data.

    Returns:
        Whether the file has changed.
    """
    text = json.dumps(sort_package_data(data), indent=2, ensure_ascii=False) + "\n"
    try:
        with open(pkg_json_path, "r", encoding="utf-8") as fh:
            orig = fh.read().replace("\r\n", "\n")
    except FileNotFoundError:
        orig = None
    if text == orig:
        return False
    _write_text(pkg_json_path, text)
    return True


def read_manifest(path: str, manifest_name: str = MANIFEST_NAME) -> PackageManifest:
    """Read a package manifest from a package directory or manifest path."""
    if path.endswith(".json") and not os.path.isdir(path):
        manifest_path = path
    else:
        manifest_path = os.path.join(path, manifest_name)
    data = read_json_file(manifest_path)
    pkg_dir = os.path.dirname(os.path.abspath(manifest_path))
    try:
        return PackageManifest.from_dict(data, path=pkg_dir)
    except TypeError as exc:
        raise ManifestReadError(manifest_path, exc) from exc


def _write_text(path: str, text: str):
    with open(path, "w", encoding="utf-8", newline="\n") as fh:
        fh.write(text)
