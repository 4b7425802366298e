"""Exception hierarchy for projj."""

from typing import Any


class ProjjError(Exception):
    """Base exception for all projj errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigError(ProjjError):
    """Persisted configuration or index could not be read or is malformed."""


class ProcessError(ProjjError):
    """An external command exited with a non-zero status."""

    def __init__(self, cmd: str, returncode: int, stderr: bytes = b"") -> None:
        super().__init__(
            f"Run \"{cmd}\" error, exit code {returncode}",
            details={"cmd": cmd, "returncode": returncode},
        )
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr


class RepositoryExistsError(ProjjError):
    """The repository is already registered in the index."""


class RepositoryURLError(ProjjError):
    """A repository URL does not map to a path inside the base directory."""
