"""Core domain models and exceptions for projj."""

from projj.core.exceptions import (
    ConfigError,
    ProcessError,
    ProjjError,
    RepositoryExistsError,
    RepositoryURLError,
)
from projj.core.models import ProjjConfig, RepositoryEntry

__all__ = [
    # Models
    "ProjjConfig",
    "RepositoryEntry",
    # Exceptions
    "ProjjError",
    "ConfigError",
    "ProcessError",
    "RepositoryExistsError",
    "RepositoryURLError",
]
