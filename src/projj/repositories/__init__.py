"""Persisted repository index."""

from projj.repositories.index import RepositoryIndex

__all__ = ["RepositoryIndex"]
