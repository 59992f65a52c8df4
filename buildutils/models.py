"""Data models for workspace packages."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


# ---------------------------------------------------------------------------
# Package manifest (package.json)
# ---------------------------------------------------------------------------

# Keys modelled explicitly; everything else is kept in ``extra``.
_KNOWN_KEYS = ("name", "version", "dependencies", "workspaces")


@dataclass
class PackageManifest:
    """Read-only snapshot of a ``package.json`` file."""
    name: str
    version: Optional[str] = None
    dependencies: Dict[str, str] = field(default_factory=dict)
    workspaces: Union[List[str], Dict[str, Any], None] = None
    path: Optional[str] = None  # directory the manifest was read from
    extra: Dict[str, Any] = field(default_factory=dict)
    # Key order as read, so to_dict() reproduces the file layout
    key_order: List[str] = field(default_factory=list, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], path: Optional[str] = None) -> "PackageManifest":
        if not isinstance(data, dict):
            raise TypeError(f"manifest must be a JSON object, got {type(data).__name__}")
        deps = data.get("dependencies") or {}
        return cls(
            name=data.get("name", ""),
            version=data.get("version"),
            dependencies=dict(deps) if isinstance(deps, dict) else {},
            workspaces=data.get("workspaces"),
            path=path,
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
            key_order=list(data.keys()),
        )

    @property
    def workspace_globs(self) -> Optional[List[str]]:
        """Package globs declared under ``workspaces``, or None."""
        if not self.workspaces:
            return None
        if isinstance(self.workspaces, dict):
            packages = self.workspaces.get("packages")
            return list(packages) if packages else None
        return list(self.workspaces)

    def to_dict(self) -> Dict[str, Any]:
        values: Dict[str, Any] = dict(self.extra)
        if self.name or "name" in self.key_order:
            values["name"] = self.name
        if self.version is not None:
            values["version"] = self.version
        if self.dependencies or "dependencies" in self.key_order:
            values["dependencies"] = dict(self.dependencies)
        if self.workspaces is not None:
            values["workspaces"] = self.workspaces

        ordered: Dict[str, Any] = {}
        for key in self.key_order:
            if key in values:
                ordered[key] = values.pop(key)
        ordered.update(values)
        return ordered
