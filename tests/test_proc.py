"""Shell command wrapper tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from buildutils import proc
from buildutils.config import VersioningConfig
from buildutils.errors import SubprocessError, VersionBumpError


def test_run_captures_stripped_output() -> None:
    assert proc.run("printf 'hello\\n\\n'", capture=True) == "hello"


def test_run_without_capture_returns_empty() -> None:
    assert proc.run("true") == ""


def test_run_passes_env_and_cwd(tmp_path: Path) -> None:
    out = proc.run('echo "$BU_TEST_VAR"; pwd', capture=True, cwd=str(tmp_path), env={"BU_TEST_VAR": "bar"})

    lines = out.splitlines()
    assert lines[0] == "bar"
    assert Path(lines[1]).resolve() == tmp_path.resolve()


def test_run_raises_on_failure() -> None:
    with pytest.raises(SubprocessError) as excinfo:
        proc.run("echo partial; exit 3", capture=True)

    assert excinfo.value.returncode == 3
    assert excinfo.value.output == "partial"
    assert excinfo.value.cmd == "echo partial; exit 3"


def test_check_status_never_raises() -> None:
    assert proc.check_status("exit 2") == 2
    assert proc.check_status("true") == 0


def test_get_python_version_uses_configured_command() -> None:
    versioning = VersioningConfig(python_version_cmd="echo 4.1.0a2")

    assert proc.get_python_version(versioning) == "4.1.0a2"


def test_get_js_version(tmp_path: Path) -> None:
    pkg = tmp_path / "packages" / "application"
    pkg.mkdir(parents=True)
    (pkg / "package.json").write_text(json.dumps({"name": "@x/application", "version": "3.0.0-rc.1"}))

    assert proc.get_js_version("application", base_path=str(tmp_path)) == "3.0.0-rc.1"


class _FakeRun:
    def __init__(self, status: str = ""):
        self.status = status
        self.calls = []

    def __call__(self, cmd, cwd=None, quiet=False, capture=False, env=None):
        self.calls.append(cmd)
        if cmd.startswith("git status"):
            return self.status
        return ""


def test_prebump_requires_clean_tree(monkeypatch) -> None:
    fake = _FakeRun(status=" M package.json")
    monkeypatch.setattr(proc, "run", fake)

    with pytest.raises(VersionBumpError, match="clean git state"):
        proc.prebump()

    assert fake.calls[0].endswith("-m pip install bump2version")


def test_prebump_clean_tree(monkeypatch) -> None:
    fake = _FakeRun()
    monkeypatch.setattr(proc, "run", fake)

    proc.prebump()

    assert fake.calls[-1] == "git status --porcelain"


def test_postbump_commits(monkeypatch) -> None:
    fake = _FakeRun()
    monkeypatch.setattr(proc, "run", fake)

    proc.postbump()

    assert fake.calls == ["jlpm run integrity", 'git commit -am "[ci skip] bump version"']


def test_postbump_without_commit(monkeypatch) -> None:
    fake = _FakeRun()
    monkeypatch.setattr(proc, "run", fake)

    proc.postbump(commit=False)

    assert fake.calls == ["jlpm run integrity"]
