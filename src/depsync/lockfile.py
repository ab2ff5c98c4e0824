"""Reading and writing of `dep` lock files (`Gopkg.lock`).

Lock files are read with a plain TOML parser rather than through the `dep`
tool itself, because vendored copies of a dependency do not pass `dep`'s
validation once they have been pruned.
"""

import dataclasses
import pathlib
import shutil
import tempfile
import typing

import toml

from .element import Element

HEADER = (
    "# This file is autogenerated, do not edit; "
    "changes may be undone by the next 'dep ensure'.\n\n"
)


class Project(Element):
    _extra_field = "extra"

    branch: str
    name: str
    packages: list[str]
    revision: str
    version: str
    extra: dict[str, typing.Any] = dataclasses.field(default_factory=dict, repr=False)


class LockFile(Element):
    _extra_field = "extra"

    projects: list[Project] = dataclasses.field(default_factory=list)
    solve_meta: dict[str, typing.Any] = dataclasses.field(default_factory=dict)
    extra: dict[str, typing.Any] = dataclasses.field(default_factory=dict, repr=False)


class Encoder(toml.TomlEncoder):
    """TOML encoder writing one array element per line."""

    def dump_list(self, v):
        if not v:
            return "[]"
        items = ",\n".join(f"  {self.dump_value(u)}" for u in v)
        return f"[\n{items}\n]"


def load(file: pathlib.Path) -> LockFile:
    with open(file, encoding="utf-8") as f:
        data = toml.load(f)
    lock = LockFile.fromdict(data)
    for i, p in enumerate(lock.projects):
        if not p.name:
            raise ValueError(f"project entry {i} has no name")
        if not isinstance(p.revision, str):
            raise ValueError(f"project {p.name} has no revision")
    return lock


def dump(lock: LockFile, file: pathlib.Path):
    """Atomically replace `file` with the serialization of `lock`.

    On failure the temporary file is removed and `file` is left untouched.
    """
    tmp = tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=file.parent,
        prefix=f".{file.name}.",
        suffix=".new",
        delete=False,
    )
    try:
        with tmp:
            tmp.write(HEADER)
            toml.dump(lock.asdict(), tmp, encoder=Encoder())
        try:
            shutil.copymode(file, tmp.name)
        except FileNotFoundError:
            pass
        pathlib.Path(tmp.name).replace(file)
    except BaseException:
        pathlib.Path(tmp.name).unlink(missing_ok=True)
        raise
