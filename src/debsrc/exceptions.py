"""Exception hierarchy for debsrc.

Everything raised on purpose by this package derives from DebsrcError, so callers (and the CLI)
can catch one type. Errors are never retried or rolled back here; partial results of a failed
transfer are left on disk for the caller to inspect.
"""

from pathlib import Path


class DebsrcError(Exception):
    """Base class for debsrc errors."""


class ParseError(DebsrcError):
    """A control stanza or one of its fields could not be decoded."""


class DependencyResolutionError(DebsrcError):
    """A dependency expression could not be turned into concrete relations."""


class InvalidDestination(DebsrcError):
    """A transfer destination exists and is not a directory."""

    def __init__(self, dest: Path):
        super().__init__(f"Attempting to transfer .dsc to a non-directory: {dest}")
        self.dest = dest


class IOTransferError(DebsrcError):
    """Copying, moving or removing one file of a descriptor's file set failed."""

    def __init__(self, path: Path, cause: OSError):
        super().__init__(f"{path}: {cause}")
        self.path = path
        self.cause = cause


class CycleDetected(DebsrcError):
    """The build dependency graph is not acyclic."""

    def __init__(self, participants: list[str]):
        super().__init__(f"Dependency cycle detected: {' -> '.join([*participants, *participants[:1]])}")
        self.participants = participants


class UnknownNodeError(DebsrcError, KeyError):
    """An edge refers to a node that was never added to the network."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""
