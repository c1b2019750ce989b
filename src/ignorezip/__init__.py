from ._pattern import IgnoreRule, OVERRIDE_PRIORITY, compile_rule, translate
from ._discover import RuleSet, discover, read_ignore_lines
from ._resolve import Outcome, Resolution, Resolver
from .archive import ArchiveEntry, ArchiveSummary, create_archive, scan_tree
from .exceptions import (
    ConfigurationError,
    FileAccessError,
    IgnoreZipError,
    OutputWriteError,
    PatternCompileError,
)

__all__ = [
    "IgnoreRule", "OVERRIDE_PRIORITY", "compile_rule", "translate",
    "RuleSet", "discover", "read_ignore_lines",
    "Outcome", "Resolution", "Resolver",
    "ArchiveEntry", "ArchiveSummary", "create_archive", "scan_tree",
    "IgnoreZipError", "ConfigurationError", "PatternCompileError",
    "FileAccessError", "OutputWriteError",
]
