import pathlib
import subprocess
import textwrap

import pytest

SOLVE_META = """\
[solve-meta]
  analyzer-name = "dep"
  analyzer-version = 1
  inputs-digest = "0123456789abcdef"
  solver-name = "gps-cdcl"
  solver-version = 1
"""


def lock_text(revisions: dict[str, str]) -> str:
    """Build a `Gopkg.lock` locking each project name to the given revision."""
    projects = "".join(
        f"""\
[[projects]]
  name = "{name}"
  packages = ["."]
  revision = "{revision}"

"""
        for name, revision in revisions.items()
    )
    return projects + SOLVE_META


class Repo:
    def __init__(self, root: pathlib.Path):
        self.root = root

    def file(self, path: str, contents: str) -> pathlib.Path:
        path = self.root / path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(contents))
        return path

    def lock(self, revisions: dict[str, str], path: str = "Gopkg.lock") -> pathlib.Path:
        return self.file(path, lock_text(revisions))

    def vendor(
        self,
        project: str,
        revisions: dict[str, str],
        vendor_dir: str = "vendor",
        lock_file: str = "Gopkg.lock",
    ) -> pathlib.Path:
        return self.lock(revisions, f"{vendor_dir}/{project}/{lock_file}")


@pytest.fixture
def repo(tmp_path, monkeypatch):
    gopath = tmp_path.resolve() / "go"
    root = gopath / "src" / "example.com" / "me" / "app"
    root.mkdir(parents=True)
    monkeypatch.setenv("GOPATH", str(gopath))
    monkeypatch.chdir(root)
    return Repo(root)


class MockedResolver:
    def __init__(self, monkeypatch):
        self.calls = []
        self.returncode = 0
        self.error = None
        self.action = None
        monkeypatch.setattr(subprocess, "run", self)

    def __call__(self, cmd, *, check=False):
        self.calls.append(list(cmd))
        if self.error is not None:
            raise self.error
        if self.action is not None:
            self.action()
        if check and self.returncode != 0:
            raise subprocess.CalledProcessError(self.returncode, cmd)
        return subprocess.CompletedProcess(cmd, self.returncode)


@pytest.fixture
def resolver(monkeypatch):
    return MockedResolver(monkeypatch)
