"""Exceptions for ignorezip."""


class IgnoreZipError(Exception):
    """Base class for all errors raised by ignorezip."""


class ConfigurationError(IgnoreZipError):
    """Raised before any work when the requested operation cannot start.

    For example the root folder does not exist or is not a directory.
    """


class PatternCompileError(IgnoreZipError):
    """Raised when an ignore-file line cannot be compiled into a matcher.

    Ignore rules are configuration, so a bad line aborts the whole load
    phase instead of silently matching nothing.

    Attributes:
        source: Path of the ignore file holding the line.
        line_number: 1-based line number within *source*.
        pattern: The offending line as written.
    """

    def __init__(self, source: str, line_number: int, pattern: str, message: str) -> None:
        self.source = source
        self.line_number = line_number
        self.pattern = pattern
        super().__init__(
            f"Invalid pattern {pattern!r} at {source}:{line_number}: {message}"
        )


class FileAccessError(IgnoreZipError):
    """Raised when a single file or directory cannot be read."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"Cannot read {path}: {message}")


class OutputWriteError(IgnoreZipError):
    """Raised when the output archive cannot be deleted, created or written."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"Cannot write archive {path}: {message}")
