"""Discovery of ``.gitignore`` and ``.customignore`` files under a root.

Every directory under the root is visited in lexical order.  Rules from
all ignore files accumulate into one :class:`RuleSet` that applies to
the whole tree; a rule's anchoring (leading ``/``) still scopes it to
its own directory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, Mapping

from ._pattern import OVERRIDE_PRIORITY, IgnoreRule, compile_rule
from ._walk import walk_tree
from .exceptions import FileAccessError

GITIGNORE = ".gitignore"
CUSTOMIGNORE = ".customignore"
RESERVED_DIR = ".git"


@dataclass(frozen=True)
class RuleSet:
    """Immutable, ordered collection of compiled ignore rules.

    Attributes:
        rules: All rules in discovery order.
        override_names: ``{rel_dir: names}`` where *names* are the lines of
            that directory's ``.customignore``, used for exact-name matching.
        overrides: Rules with override priority, in discovery order.
        normal: The remaining rules, ordered by priority (stable).
    """
    rules: tuple[IgnoreRule, ...] = ()
    override_names: Mapping[str, frozenset[str]] = field(default_factory=dict)
    overrides: tuple[IgnoreRule, ...] = field(init=False, repr=False, compare=False)
    normal: tuple[IgnoreRule, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "overrides", tuple(r for r in self.rules if r.is_override),
        )
        object.__setattr__(
            self, "normal",
            tuple(sorted((r for r in self.rules if not r.is_override),
                         key=lambda r: r.priority)),
        )

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[IgnoreRule]:
        return iter(self.rules)


def read_ignore_lines(path: str | Path) -> list[tuple[int, str]]:
    """Return ``(line_number, text)`` for each rule line in *path*.

    Lines are stripped; blank lines and ``#`` comments are dropped.
    Raises :class:`FileAccessError` if the file cannot be read.
    """
    try:
        content = Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileAccessError(str(path), str(exc)) from exc
    result = []
    for number, raw in enumerate(content.splitlines(), start=1):
        line = raw.strip()
        if line and not line.startswith("#"):
            result.append((number, line))
    return result


def _join(rel_dir: str, name: str) -> str:
    return f"{rel_dir}/{name}" if rel_dir else name


def discover(
    root: str | Path,
    *,
    follow_symlinks: bool = False,
    progress: Callable[[str], None] | None = None,
) -> RuleSet:
    """Load every ignore file under *root* into a :class:`RuleSet`.

    ``.gitignore`` rules get increasing priorities in discovery order;
    ``.customignore`` rules get ``OVERRIDE_PRIORITY``.  The first invalid
    pattern raises :class:`~ignorezip.exceptions.PatternCompileError`.
    """
    base = Path(root)
    rules: list[IgnoreRule] = []
    override_names: dict[str, frozenset[str]] = {}

    def _load(rel_dir: str, name: str, override: bool) -> None:
        path = base / rel_dir / name if rel_dir else base / name
        if not path.is_file():
            return
        source = _join(rel_dir, name)
        if progress:
            progress(f"Processing {name} file: {source}")
        lines = read_ignore_lines(path)
        for number, text in lines:
            rule = compile_rule(
                text, rel_dir,
                priority=OVERRIDE_PRIORITY if override else len(rules),
                source=source, line_number=number,
            )
            rules.append(rule)
            if progress:
                progress(
                    f"Loaded pattern '{rule.original_text}' as regex "
                    f"'{rule.pattern.pattern}' from '{source}'"
                )
        if override:
            override_names[rel_dir] = frozenset(text for _n, text in lines)

    for rel_dir, _dirnames, _filenames in walk_tree(
        base, follow_symlinks=follow_symlinks, prune=frozenset({RESERVED_DIR}),
    ):
        _load(rel_dir, GITIGNORE, override=False)
        _load(rel_dir, CUSTOMIGNORE, override=True)

    if progress:
        progress(f"Total ignore patterns loaded: {len(rules)}")
    return RuleSet(tuple(rules), override_names)
