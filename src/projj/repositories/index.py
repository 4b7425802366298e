"""JSON-file repository index (``cache.json``)."""

import json
from pathlib import Path
from typing import Any, overload

import aiofiles
import aiofiles.os
import structlog
from pydantic import ValidationError

from projj.core.exceptions import ConfigError
from projj.core.models.repository import RepositoryEntry

logger = structlog.get_logger(__name__)


class RepositoryIndex:
    """Mapping from canonical path to repository metadata.

    The file is read once, on the first ``get``; mutations made with
    ``set`` and ``remove`` stay in memory until ``dump`` is called.

    There is no locking: two processes dumping the same file concurrently
    can lose each other's updates.
    """

    def __init__(self, cache_path: str | Path) -> None:
        self._cache_path = Path(cache_path)
        self._entries: dict[str, RepositoryEntry] | None = None

    @property
    def cache_path(self) -> Path:
        return self._cache_path

    @overload
    async def get(self) -> dict[str, RepositoryEntry]: ...

    @overload
    async def get(self, key: str) -> bool: ...

    async def get(self, key: str | None = None) -> dict[str, RepositoryEntry] | bool:
        """Return the whole index, or whether ``key`` is present."""
        if self._entries is None:
            self._entries = await self._load()
        if key is None:
            return self._entries
        return key in self._entries

    def set(self, key: str, value: RepositoryEntry | dict[str, Any]) -> None:
        """Insert or replace ``key`` in memory."""
        if not isinstance(value, RepositoryEntry):
            value = RepositoryEntry.model_validate(value)
        self._require_loaded()[key] = value

    def remove(self, key: str) -> None:
        """Delete ``key`` from memory if present."""
        self._require_loaded().pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._require_loaded())

    async def dump(self) -> None:
        """Write the in-memory index to ``cache.json``.

        The content goes to a temporary file that then replaces the
        index, so a crash mid-write leaves the previous file intact.
        """
        entries = self._require_loaded()
        data = {key: entry.model_dump() for key, entry in entries.items()}

        await aiofiles.os.makedirs(self._cache_path.parent, exist_ok=True)
        tmp_path = self._cache_path.with_name(self._cache_path.name + ".tmp")
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(data, indent=2))
        await aiofiles.os.replace(tmp_path, self._cache_path)
        logger.debug("Index dumped", path=str(self._cache_path), entries=len(data))

    def _require_loaded(self) -> dict[str, RepositoryEntry]:
        if self._entries is None:
            raise RuntimeError("Repository index is not loaded, call get() first")
        return self._entries

    async def _load(self) -> dict[str, RepositoryEntry]:
        if not await aiofiles.os.path.exists(self._cache_path):
            logger.debug("Index not found, starting empty", path=str(self._cache_path))
            return {}

        try:
            async with aiofiles.open(self._cache_path, encoding="utf-8") as f:
                content = await f.read()
            data = json.loads(content) if content.strip() else {}
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ConfigError(
                f"Unable to read {self._cache_path}: {e}",
                details={"path": str(self._cache_path)},
            ) from e

        if not isinstance(data, dict):
            raise ConfigError(
                f"{self._cache_path} must contain a JSON object",
                details={"path": str(self._cache_path)},
            )
        try:
            entries = {key: RepositoryEntry.model_validate(value) for key, value in data.items()}
        except ValidationError as e:
            raise ConfigError(
                f"Invalid entry in {self._cache_path}: {e}",
                details={"path": str(self._cache_path)},
            ) from e

        logger.debug("Index loaded", path=str(self._cache_path), entries=len(entries))
        return entries
