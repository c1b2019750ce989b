"""Inclusion decisions for individual paths.

A path is checked against four guards, strictly in order; the first one
that decides ends the resolution:

1. Any ``.git`` path segment excludes the path outright.
2. An override rule (from ``.customignore``) matching the path or any
   of its ancestors excludes it.
3. Normal rules are applied to each ancestor and then to the path
   itself.  An excluded ancestor excludes everything below it and no
   deeper negation can re-include it.  Otherwise the last rule matching
   the path itself decides; no match means included.
4. A path still included is excluded if its bare name is listed in the
   ``.customignore`` of its parent directory or of any directory above.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ._discover import CUSTOMIGNORE, RESERVED_DIR, RuleSet, _join
from ._pattern import IgnoreRule


class Outcome(str, Enum):
    """Which guard decided a :class:`Resolution`."""
    INCLUDED = "included"
    EXCLUDED_HARDCODED = "excluded-hardcoded"
    EXCLUDED_OVERRIDE = "excluded-override"
    EXCLUDED_RULE = "excluded-rule"
    EXCLUDED_NAME = "excluded-name"

    def __str__(self) -> str:          # noqa: D105
        return self.value


@dataclass(frozen=True)
class Resolution:
    """The decision for one path.

    Attributes:
        included: True if the path belongs in the archive.
        reason: Human-readable explanation.
        matched_rule: The rule that decided, if any.
        outcome: Which guard decided.
    """
    included: bool
    reason: str
    matched_rule: IgnoreRule | None = None
    outcome: Outcome = Outcome.INCLUDED


class Resolver:
    """Resolves root-relative paths against a discovered :class:`RuleSet`."""

    def __init__(self, rules: RuleSet) -> None:
        self._rules = rules

    @property
    def rules(self) -> RuleSet:
        return self._rules

    def resolve(self, rel_path: str) -> Resolution:
        """Decide whether *rel_path* (root-relative, ``/``-separated) is included."""
        parts = [p for p in rel_path.split("/") if p]
        if not parts:
            raise ValueError("Cannot resolve the root itself")
        if RESERVED_DIR in parts:
            return Resolution(
                False, "reserved version-control directory",
                outcome=Outcome.EXCLUDED_HARDCODED,
            )

        prefixes = ["/".join(parts[:i]) for i in range(1, len(parts) + 1)]
        full = prefixes[-1]

        for prefix in prefixes:
            for rule in self._rules.overrides:
                if rule.matches(prefix):
                    where = "" if prefix == full else f" on parent directory '{prefix}'"
                    return Resolution(
                        False, f"override rule {rule}{where}", rule,
                        Outcome.EXCLUDED_OVERRIDE,
                    )

        final: IgnoreRule | None = None
        for prefix in prefixes:
            last: IgnoreRule | None = None
            for rule in self._rules.normal:
                if rule.matches(prefix):
                    last = rule
            if last is None:
                continue
            if prefix != full:
                if not last.is_negation:
                    return Resolution(
                        False, f"parent directory '{prefix}' excluded by {last}",
                        last, Outcome.EXCLUDED_RULE,
                    )
            else:
                final = last

        if final is not None and not final.is_negation:
            return Resolution(
                False, f"matched rule {final}", final, Outcome.EXCLUDED_RULE,
            )

        name = parts[-1]
        parents = parts[:-1]
        for depth in range(len(parents), -1, -1):
            rel_dir = "/".join(parents[:depth])
            if name in self._rules.override_names.get(rel_dir, ()):
                return Resolution(
                    False,
                    f"file name '{name}' listed in {_join(rel_dir, CUSTOMIGNORE)}",
                    outcome=Outcome.EXCLUDED_NAME,
                )

        if final is not None:
            return Resolution(True, f"re-included by {final}", final)
        return Resolution(True, "no matching rule")
