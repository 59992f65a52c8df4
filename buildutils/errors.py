"""Exception taxonomy for the build utilities."""

from __future__ import annotations

from typing import List, Optional


class BuildUtilsError(Exception):
    """Base class for every error raised by buildutils."""


class ConfigurationError(BuildUtilsError):
    """No workspace / package list could be found, or config is invalid."""


class ManifestReadError(BuildUtilsError):
    """A manifest (or any JSON file) could not be read or parsed."""

    def __init__(self, path: str, reason: object = None):
        self.path = path
        self.reason = reason
        message = f"Cannot read JSON for path {path}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnresolvedDependencyError(BuildUtilsError):
    """A dependency's manifest could not be found locally or in the registry."""

    def __init__(self, name: str, search_from: Optional[str] = None):
        self.name = name
        self.search_from = search_from
        message = f"Cannot resolve package {name!r}"
        if search_from:
            message = f"{message} from {search_from}"
        super().__init__(message)


class CyclicDependencyError(BuildUtilsError):
    """The package graph contains a dependency cycle."""

    def __init__(self, cycle: List[str]):
        self.cycle = cycle
        super().__init__("Dependency cycle found: " + " -> ".join(cycle))


class SubprocessError(BuildUtilsError):
    """A shell command exited with a non-zero status."""

    def __init__(self, cmd: str, returncode: int, output: str = ""):
        self.cmd = cmd
        self.returncode = returncode
        self.output = output
        super().__init__(f"Command {cmd!r} failed with exit status {returncode}")


class VersionBumpError(BuildUtilsError):
    """The repository is not in a state where a version bump may start."""
