"""Translation of gitignore-style lines into compiled match rules.

Each non-blank, non-comment line of a ``.gitignore`` or ``.customignore``
file becomes one :class:`IgnoreRule`.  The rule's regex is anchored at
both ends and is matched against a candidate's root-relative path
(forward slashes, no leading ``/``).

Pattern syntax:

* ``*`` matches any run of characters except ``/``.
* ``**`` matches any run of characters, ``/`` included.
* ``?`` matches exactly one character other than ``/``.
* ``[...]`` is a character class; ``[!...]`` negates it.
* A leading ``!`` negates the rule (re-includes what it matches).
* A leading ``/`` anchors the pattern at the directory holding the
  ignore file; otherwise it may match at any depth.
* A trailing ``/`` matches the named directory and everything below it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .exceptions import PatternCompileError

OVERRIDE_PRIORITY = -1

# re.escape() output that must keep its gitignore meaning.
_UNESCAPE = (
    (r"\[", "["),
    (r"\]", "]"),
    (r"\!", "!"),
    (r"\-", "-"),
    (r"\#", "#"),
    (r"\ ", " "),
)


@dataclass(frozen=True)
class IgnoreRule:
    """A single compiled ignore rule.

    Attributes:
        pattern: Compiled regex, matched with ``fullmatch``.
        is_negation: True for ``!pattern`` lines.
        base_path: Root-relative directory of the ignore file (``""`` for root).
        original_text: The line as written, including any leading ``!``.
        priority: Sort key among normal rules; ``OVERRIDE_PRIORITY`` for
            rules sourced from ``.customignore``.
        source: Root-relative path of the ignore file.
        line_number: 1-based line number in *source*.
    """
    pattern: re.Pattern
    is_negation: bool
    base_path: str
    original_text: str
    priority: int
    source: str = ""
    line_number: int = 0

    @property
    def is_override(self) -> bool:
        return self.priority == OVERRIDE_PRIORITY

    def matches(self, rel_path: str) -> bool:
        """True if *rel_path* (root-relative, ``/``-separated) matches."""
        return self.pattern.fullmatch(rel_path) is not None

    def __str__(self) -> str:
        if self.source:
            return f"{self.original_text} ({self.source}:{self.line_number})"
        return self.original_text


def translate(text: str, base_path: str = "") -> str:
    """Translate a gitignore pattern (negation already stripped) to regex source.

    *base_path* is the root-relative directory of the ignore file; it is
    only used when *text* starts with ``/``.
    """
    anchored = text.startswith("/")
    if anchored:
        text = text[1:]

    body = re.escape(text)
    for escaped, plain in _UNESCAPE:
        body = body.replace(escaped, plain)
    body = body.replace("[!", "[^")
    body = body.replace(r"\*\*", ".*")
    body = body.replace(r"\*", "[^/]*")
    body = body.replace(r"\?", "[^/]")
    if body.endswith("/"):
        body = body.rstrip("/") + "(/.*)?"

    if anchored:
        prefix = re.escape(base_path) + "/" if base_path else ""
    else:
        prefix = "(.*?/)?"
    return "^" + prefix + body + "$"


def compile_rule(
    raw_line: str,
    base_path: str,
    *,
    priority: int,
    source: str = "",
    line_number: int = 0,
) -> IgnoreRule:
    """Compile one ignore-file line into an :class:`IgnoreRule`.

    *raw_line* must already be known to be neither blank nor a comment.
    Raises :class:`PatternCompileError` if the translated regex is invalid.
    """
    text = raw_line.strip()
    is_negation = text.startswith("!")
    body = text[1:] if is_negation else text
    if not body:
        raise PatternCompileError(source, line_number, text, "empty pattern")
    try:
        pattern = re.compile(translate(body, base_path))
    except re.error as exc:
        raise PatternCompileError(source, line_number, text, str(exc)) from exc
    return IgnoreRule(
        pattern=pattern,
        is_negation=is_negation,
        base_path=base_path,
        original_text=text,
        priority=priority,
        source=source,
        line_number=line_number,
    )
