"""Exceptions raised by duplint."""


class DuplintError(Exception):
    """Base class for errors surfaced by a duplication scan."""


class ConfigurationError(DuplintError, ValueError):
    """Raised when the scan configuration is invalid.

    Validation happens before any document is read, so a run that raises this
    error has not performed any comparison work.
    """


class EmptyCorpusError(ConfigurationError):
    """Raised when a scan analyzed zero lines and the score is undefined."""

    def __init__(self, total_files: int):
        super().__init__(
            f"Nothing to score: {total_files} file(s) with 0 lines analyzed. "
            f"Check the file patterns and ignore settings.")
        self.total_files = total_files


class DocumentReadError(DuplintError, OSError):
    """Raised when a selected document cannot be read. Aborts the whole run."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Error reading file {path!r}: {reason}")
        self.path = path
