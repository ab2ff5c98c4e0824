import argparse
import logging
import pathlib
import subprocess
import sys
import typing

from . import lockfile
from .config import Config
from .diff import diff_projects
from .lockfile import LockFile, Project
from .utils import (
    MalformedLockFile,
    MissingLockFile,
    PersistError,
    ReconvergeError,
    UsageError,
    package_path,
    vendored_project,
)

help = "compare the locked dependencies with the ones of a vendored project"


def add_arguments(parser: argparse.ArgumentParser):
    """Add command-line options for the reconcile command."""
    parser.add_argument(
        "projects",
        type=str,
        nargs="*",
        help="The vendored project to compare against (e.g. `github.com/owner/repo`)",
        metavar="project",
    )
    parser.add_argument(
        "--fix",
        action="store_true",
        help="Update the locked revisions to match the ones of the vendored project, "
        "then run the resolver to validate the result",
    )


class Report:
    """Print differences as a unified diff, with a header before the first one."""

    def __init__(self, ours: str, theirs: str, out: typing.TextIO | None = None):
        self.ours = ours
        self.theirs = theirs
        self.out = out or sys.stdout
        self.header_printed = False

    def __call__(self, name: str, mine: Project, theirs: Project):
        if not self.header_printed:
            print(f"--- {self.ours}", file=self.out)
            print(f"+++ {self.theirs}", file=self.out)
            self.header_printed = True
        print(f"- {name} {mine.revision}", file=self.out)
        print(f"+ {name} {theirs.revision}", file=self.out)


def _fix(name: str, mine: Project, theirs: Project):
    logging.info(f"{name}: {mine.revision}")
    logging.info(f"    → {theirs.revision}")
    mine.revision = theirs.revision


def _load(file: pathlib.Path, missing: str, unreadable: str) -> LockFile:
    logging.debug(f"← {file}")
    try:
        return lockfile.load(file)
    except FileNotFoundError as e:
        raise MissingLockFile(missing) from e
    except (OSError, ValueError) as e:
        raise MalformedLockFile(f"{unreadable}: {e}.") from e


def _persist(lock: LockFile, file: pathlib.Path):
    logging.debug(f"→ {file}")
    try:
        lockfile.dump(lock, file)
    except (OSError, ValueError, TypeError) as e:
        raise PersistError(f"Unable to update {file} file: {e}.") from e


def _reconverge(config: Config, file: pathlib.Path):
    logging.info(f"running `{config.resolver_name}`")
    try:
        subprocess.run(config.resolver_command, check=True)
    except (subprocess.CalledProcessError, OSError) as e:
        raise ReconvergeError(
            f"Unable to execute `{config.resolver_name}` with updated {file}."
        ) from e


def run(opts: argparse.Namespace) -> int:
    if len(opts.projects) != 1:
        raise UsageError("Exactly one project must be specified.")
    [project] = opts.projects
    config = opts.config
    lock_name = config.lock_file

    vendored = vendored_project(pathlib.Path(config.vendor_directory), project)
    theirs = _load(
        vendored / lock_name,
        missing=f"Project {project} does not have a {lock_name} file.",
        unreadable=f"Unable to read the {lock_name} file for project {project}",
    )

    ours = pathlib.Path(lock_name)
    # fixing happens at most once, then the result is checked again
    for fix in [True, False] if opts.fix else [False]:
        mine = _load(
            ours,
            missing=f"No {lock_name} file in the current directory.",
            unreadable=f"Unable to read the {lock_name} file for the current directory",
        )
        on_diff = _fix if fix else Report(package_path(), project)
        if not diff_projects(mine, theirs, on_diff):
            logging.debug(f"{ours} matches {vendored / lock_name}")
            return 0
        if not fix:
            return 1
        _persist(mine, ours)
        _reconverge(config, ours)
    assert False, "the last pass never fixes"
