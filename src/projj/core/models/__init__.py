"""Domain models for projj."""

from projj.core.models.config import ProjjConfig
from projj.core.models.repository import RepositoryEntry

__all__ = [
    "ProjjConfig",
    "RepositoryEntry",
]
