"""Deterministic directory walking shared by discovery and archiving."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Iterator


def rel_posix(path: str | Path, root: str | Path) -> str:
    """Return *path* relative to *root* with ``/`` separators (``""`` for root)."""
    rel = os.path.relpath(path, root)
    if rel == os.curdir:
        return ""
    return rel.replace(os.sep, "/")


def walk_tree(
    root: str | Path,
    *,
    follow_symlinks: bool = False,
    prune: frozenset[str] = frozenset(),
    onerror: Callable[[OSError], None] | None = None,
) -> Iterator[tuple[str, list[str], list[str]]]:
    """Yield ``(rel_dir, dirnames, filenames)`` top-down in lexical order.

    Directory names listed in *prune* are dropped before descending.

    When *follow_symlinks* is ``False`` (default), symlinked directories
    appear in *dirnames* but are not descended into.  When ``True``, a
    directory whose real path is the same as one of its own ancestors is
    reported but its contents are skipped, which breaks symlink cycles.
    """
    base = Path(root)
    # {rel_dir: realpath} for directories on the current walk
    reals: dict[str, str] = {}
    for dirpath, dirnames, filenames in os.walk(
        base, followlinks=follow_symlinks, onerror=onerror,
    ):
        rel_dir = rel_posix(dirpath, base)
        if follow_symlinks:
            real = os.path.realpath(dirpath)
            parts = rel_dir.split("/") if rel_dir else []
            ancestors = {reals.get("/".join(parts[:i])) for i in range(len(parts))}
            if real in ancestors:
                dirnames.clear()
                continue
            reals[rel_dir] = real
        dirnames[:] = sorted(d for d in dirnames if d not in prune)
        filenames.sort()
        yield rel_dir, dirnames, filenames
