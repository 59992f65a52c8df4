"""Shell command wrappers and version-bump helpers."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from typing import Dict, Optional

from .config import VersioningConfig
from .errors import SubprocessError, VersionBumpError
from .jsonio import read_json_file

logger = logging.getLogger(__name__)


def run(
    cmd: str,
    cwd: Optional[str] = None,
    quiet: bool = False,
    capture: bool = False,
    env: Optional[Dict[str, str]] = None,
) -> str:
    """Run a shell command, streaming its output to the terminal.

    Args:
        cmd: The command to run.
        cwd: Working directory for the command.
        quiet: Don't log the command line.
        capture: Capture stdout and return it instead of streaming it.
        env: Extra environment variables.

    Returns:
        Captured stdout with the trailing newline stripped, or ``""``.

    Raises:
        SubprocessError: the command exited non-zero.
    """
    if not quiet:
        logger.debug("> %s", cmd)

    run_env = None
    if env:
        run_env = dict(os.environ)
        run_env.update(env)

    result = subprocess.run(
        cmd,
        shell=True,
        cwd=cwd,
        env=run_env,
        stdout=subprocess.PIPE if capture else None,
        text=True,
    )
    output = (result.stdout or "").strip()
    if result.returncode != 0:
        raise SubprocessError(cmd, result.returncode, output)
    return output


def check_status(cmd: str, cwd: Optional[str] = None) -> int:
    """Call a command, returning its exit status."""
    result = subprocess.run(
        cmd,
        shell=True,
        cwd=cwd,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )
    return result.returncode


def get_python_version(versioning: Optional[VersioningConfig] = None, cwd: Optional[str] = None) -> str:
    """Get the current version of the Python package."""
    versioning = versioning or VersioningConfig()
    return run(versioning.python_version_cmd, cwd=cwd, quiet=True, capture=True)


def get_js_version(pkg: str, base_path: str = ".") -> str:
    """Get the current version of a package under ``packages/``."""
    file_path = os.path.abspath(os.path.join(base_path, "packages", pkg, "package.json"))
    data = read_json_file(file_path)
    return data.get("version", "")


def prebump(versioning: Optional[VersioningConfig] = None, cwd: Optional[str] = None):
    """Install the bump tool and make sure the git tree is clean."""
    versioning = versioning or VersioningConfig()
    run(f"{sys.executable} -m pip install {versioning.bump_tool}", cwd=cwd)

    status = run("git status --porcelain", cwd=cwd, capture=True)
    if status:
        raise VersionBumpError(
            "Must be in a clean git state with no untracked files.\n"
            'Run "git status" to see the issues.\n\n'
            f"{status}"
        )


def postbump(
    versioning: Optional[VersioningConfig] = None,
    commit: bool = True,
    cwd: Optional[str] = None,
):
    """Run the integrity check, then commit the version change."""
    versioning = versioning or VersioningConfig()
    run(versioning.integrity_cmd, cwd=cwd)

    if commit:
        run(f'git commit -am "{versioning.commit_message}"', cwd=cwd)
