import typing

from .lockfile import LockFile, Project

OnDiff = typing.Callable[[str, Project, Project], None]


def diff_projects(a: LockFile, b: LockFile, on_diff: OnDiff | None = None) -> int:
    """Compare the dependencies locked in `a` against the ones locked in `b`.

    Every project present in both lock files with a different revision counts
    as a difference. Projects present in only one of them are ignored. For each
    difference `on_diff` is called, in the order projects appear in `a`, with
    the project name and the entries from `a` and `b`; it may modify them.

    Returns the number of differences.
    """
    # with duplicate names the last entry wins, reported at its first position
    adeps = {p.name: p for p in a.projects}
    bdeps = {p.name: p for p in b.projects}

    differences = 0
    for name, aproj in adeps.items():
        bproj = bdeps.get(name)
        if bproj is None or aproj.revision == bproj.revision:
            continue
        if on_diff is not None:
            on_diff(name, aproj, bproj)
        differences += 1
    return differences
