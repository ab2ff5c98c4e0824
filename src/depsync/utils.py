import os
import pathlib
import typing

from ruamel.yaml import YAML

from .element import Element

yaml = YAML()


class Error(Exception):
    pass


class UsageError(Error):
    pass


class MissingVendorEntry(Error):
    pass


class MissingLockFile(Error):
    pass


class MalformedLockFile(Error):
    pass


class PersistError(Error):
    pass


class ReconvergeError(Error):
    pass


def config_file() -> pathlib.Path:
    return pathlib.Path("depsync.yml")


T = typing.TypeVar("T")


def load(ty: type[T], file: pathlib.Path) -> T:
    assert issubclass(ty, Element), "load() can only be used with Element subclasses"
    try:
        data = yaml.load(file)
    except FileNotFoundError:
        return ty()
    return ty.fromdict(data or {})


def vendored_project(vendor_dir: pathlib.Path, project: str) -> pathlib.Path:
    """Return the directory of `project` under `vendor_dir`, checking it is there."""
    # like a path join, an absolute project is still looked up below `vendor_dir`
    relative = pathlib.PurePath(project)
    relative = relative.relative_to(relative.anchor)
    if ".." in relative.parts:
        raise MissingVendorEntry(
            f"Project {project} is missing from the vendor directory."
        )
    path = vendor_dir / relative
    try:
        is_dir = path.is_dir()
        exists = is_dir or path.exists()
    except OSError as e:
        raise MissingVendorEntry(f"Unable to inspect {path}: {e}") from e
    if not exists:
        raise MissingVendorEntry(
            f"Project {project} is missing from the vendor directory. "
            "Please run `dep ensure` and verify it is a dependency of the current project."
        )
    if not is_dir:
        raise MissingVendorEntry(
            f"Project {project} is in vendor, but it is not a directory."
        )
    return path


def package_path() -> str:
    """Name the current project by its import path below `$GOPATH/src`.

    Outside of `$GOPATH/src` this is a relative path such as `../../x`; without
    `GOPATH` it is the absolute current directory.
    """
    cwd = pathlib.Path.cwd()
    gopath = [p for p in os.environ.get("GOPATH", "").split(os.pathsep) if p]
    if not gopath:
        return str(cwd)
    try:
        return os.path.relpath(cwd, pathlib.Path(gopath[0], "src"))
    except ValueError:
        return str(cwd)
