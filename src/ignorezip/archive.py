"""Zip archive creation from a directory filtered by ignore rules."""

from __future__ import annotations

import contextlib
import os
import stat
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from ._discover import RuleSet, _join, discover
from ._resolve import Resolver
from ._walk import rel_posix, walk_tree
from .exceptions import ConfigurationError, FileAccessError, OutputWriteError


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class ArchiveEntry:
    """A path left out of the archive, with the reason why.

    Attributes:
        path: Root-relative path (forward slashes).
        reason: Human-readable explanation.
        is_dir: True for directories.
    """
    path: str
    reason: str
    is_dir: bool = False


@dataclass
class ArchiveSummary:
    """Result of :func:`scan_tree` or :func:`create_archive`.

    Attributes:
        included: Entry names of files included (written, unless dry run).
        excluded: Files and directories excluded by the rules.
        errors: Entries skipped because they could not be read.
        output: Archive path written, or ``None`` when nothing was written.
    """
    included: list[str] = field(default_factory=list)
    excluded: list[ArchiveEntry] = field(default_factory=list)
    errors: list[ArchiveEntry] = field(default_factory=list)
    output: str | None = None

    @property
    def files_included(self) -> int:
        return len(self.included)

    @property
    def entries_excluded(self) -> int:
        return len(self.excluded)


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------

def _check_root(root: str | Path) -> Path:
    base = Path(root)
    if not base.exists():
        raise ConfigurationError(f"Root folder not found: {root}")
    if not base.is_dir():
        raise ConfigurationError(f"Root folder is not a directory: {root}")
    return base


def scan_tree(
    root: str | Path,
    rules: RuleSet,
    *,
    output: str | Path | None = None,
    follow_symlinks: bool = False,
    progress: Callable[[str], None] | None = None,
) -> ArchiveSummary:
    """Resolve every file and directory under *root* against *rules*.

    Nothing is written.  If *output* lies inside *root*, even when reached
    through a symlink, that file is reported as excluded rather than
    included.  Entries that are not regular files (FIFOs, sockets, device
    nodes, dangling symlinks) are recorded in :attr:`ArchiveSummary.errors`.
    """
    base = _check_root(root)
    resolver = Resolver(rules)
    summary = ArchiveSummary()

    output_real = os.path.realpath(output) if output is not None else None

    def _report(msg: str) -> None:
        if progress:
            progress(msg)

    def _onerror(exc: OSError) -> None:
        path = rel_posix(exc.filename, base) if exc.filename else str(base)
        err = FileAccessError(path, exc.strerror or str(exc))
        summary.errors.append(ArchiveEntry(path, str(err), is_dir=True))
        _report(f"Skipped unreadable directory: {path} ({exc.strerror or exc})")

    for rel_dir, dirnames, filenames in walk_tree(
        base, follow_symlinks=follow_symlinks, onerror=_onerror,
    ):
        for name in filenames:
            rel = _join(rel_dir, name)
            if output_real and os.path.realpath(base / rel) == output_real:
                summary.excluded.append(ArchiveEntry(rel, "output archive"))
                _report(f"Excluded: {rel} (output archive)")
                continue
            res = resolver.resolve(rel)
            if res.included:
                try:
                    _check_regular(base, rel)
                except FileAccessError as exc:
                    summary.errors.append(ArchiveEntry(rel, str(exc)))
                    _report(f"Skipped: {rel} ({exc})")
                    continue
                summary.included.append(rel)
                _report(f"Included file: {rel}")
            else:
                summary.excluded.append(ArchiveEntry(rel, res.reason))
                _report(f"Excluded: {rel} ({res.reason})")
        for name in dirnames:
            rel = _join(rel_dir, name)
            res = resolver.resolve(rel)
            if not res.included:
                summary.excluded.append(ArchiveEntry(rel, res.reason, is_dir=True))
                _report(f"Directory '{rel}' is excluded ({res.reason})")

    return summary


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------

def _check_regular(base: Path, rel: str) -> None:
    """Raise :class:`FileAccessError` unless *rel* is (or links to) a regular file."""
    try:
        st = os.stat(base / rel)
    except OSError as exc:
        raise FileAccessError(rel, exc.strerror or str(exc)) from exc
    if not stat.S_ISREG(st.st_mode):
        raise FileAccessError(rel, "not a regular file")


def _read_source(base: Path, rel: str) -> tuple[zipfile.ZipInfo, bytes]:
    """Return ``(ZipInfo, content)`` for the file at *rel* under *base*.

    The whole file is read before anything reaches the archive, so a read
    failure never leaves a truncated member behind.
    """
    _check_regular(base, rel)
    src = base / rel
    try:
        info = zipfile.ZipInfo.from_file(src, rel, strict_timestamps=False)
        data = src.read_bytes()
    except OSError as exc:
        raise FileAccessError(rel, exc.strerror or str(exc)) from exc
    info.compress_type = zipfile.ZIP_DEFLATED
    return info, data


def _remove_existing(output: str, progress: Callable[[str], None] | None) -> None:
    if not os.path.lexists(output):
        return
    if os.path.isdir(output) and not os.path.islink(output):
        raise OutputWriteError(output, "path is a directory")
    if progress:
        progress(f"Deleting existing archive at {output}...")
    try:
        os.remove(output)
    except OSError as exc:
        raise OutputWriteError(output, exc.strerror or str(exc)) from exc


def create_archive(
    root: str | Path,
    output: str | Path,
    *,
    dry_run: bool = False,
    follow_symlinks: bool = False,
    progress: Callable[[str], None] | None = None,
) -> ArchiveSummary:
    """Write every file under *root* not excluded by ignore rules to a zip.

    Ignore files are discovered first (see :func:`~ignorezip.discover`),
    then every entry under *root* is resolved.  Entry names are
    root-relative with ``/`` separators.  An existing file at *output* is
    deleted before the new archive is written.

    A file that cannot be read is reported, recorded in
    :attr:`ArchiveSummary.errors` and skipped.  Failure to delete, create
    or write *output* raises :class:`OutputWriteError`.

    With *dry_run*, rules are resolved and reported but *output* is not
    touched.
    """
    base = _check_root(root)
    output = os.fspath(output)
    if progress:
        progress("Loading ignore patterns...")
    rules = discover(base, follow_symlinks=follow_symlinks, progress=progress)
    if progress:
        progress("Scanning files and directories...")
    summary = scan_tree(
        base, rules, output=output,
        follow_symlinks=follow_symlinks, progress=progress,
    )
    if dry_run:
        return summary

    if progress:
        progress(f"Creating archive at {output}...")
    _remove_existing(output, progress)

    written: list[str] = []
    try:
        with zipfile.ZipFile(output, "w", zipfile.ZIP_DEFLATED) as zf:
            for rel in summary.included:
                try:
                    info, data = _read_source(base, rel)
                except FileAccessError as exc:
                    summary.errors.append(ArchiveEntry(rel, str(exc)))
                    if progress:
                        progress(f"Skipped unreadable file: {rel} ({exc})")
                    continue
                zf.writestr(info, data)
                written.append(rel)
    except OSError as exc:
        with contextlib.suppress(OSError):
            os.remove(output)
        raise OutputWriteError(output, exc.strerror or str(exc)) from exc

    summary.included = written
    summary.output = output
    if progress:
        progress(f"Archive created successfully at {output}")
    return summary
