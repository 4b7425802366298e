"""Loading, defaulting and persisting ``config.json``."""

import json
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os
import structlog
from pydantic import ValidationError

from projj.config.settings import Settings
from projj.core.exceptions import ConfigError
from projj.core.models.config import ProjjConfig

logger = structlog.get_logger(__name__)

BasePrompt = Callable[[str], str]


def resolve_config(
    partial: Mapping[str, Any] | ProjjConfig,
    defaults: Mapping[str, Any] | ProjjConfig,
    config_dir: str | Path,
    cwd: str | None = None,
    home: str | None = None,
) -> ProjjConfig:
    """Merge ``partial`` over ``defaults`` and make ``base`` absolute.

    The merge is shallow: a key present in ``partial`` replaces the
    default wholesale. ``base`` is resolved by its first character:

    - ``.`` is relative to the configuration directory
    - ``~`` expands to the home directory
    - ``/`` is already absolute
    - anything else is relative to the current working directory
    """
    merged = {**_as_dict(defaults), **_as_dict(partial)}
    base = merged.get("base")
    if base:
        merged["base"] = _resolve_base(base, str(config_dir), cwd, home)

    try:
        return ProjjConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}", details={"errors": e.errors()}) from e


def _resolve_base(base: str, config_dir: str, cwd: str | None, home: str | None) -> str:
    if not isinstance(base, str):
        raise ConfigError(f"Invalid base directory: {base!r}")

    if base.startswith("."):
        return os.path.normpath(os.path.join(config_dir, base))
    if base.startswith("~"):
        return base.replace("~", home or os.path.expanduser("~"), 1)
    if base.startswith("/"):
        return base
    return os.path.normpath(os.path.join(cwd or os.getcwd(), base))


def _as_dict(value: Mapping[str, Any] | ProjjConfig) -> dict[str, Any]:
    if isinstance(value, ProjjConfig):
        return value.model_dump()
    return dict(value)


class ConfigResolver:
    """Ensures a usable configuration exists for the current invocation."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    @property
    def defaults(self) -> dict[str, Any]:
        return {
            "base": self._settings.default_base,
            "hooks": {},
            "alias": dict(self._settings.default_alias),
        }

    def resolve(self, partial: Mapping[str, Any] | ProjjConfig) -> ProjjConfig:
        return resolve_config(partial, self.defaults, self._settings.config_dir)

    async def ensure_config(self, prompt: BasePrompt | None = None) -> ProjjConfig:
        """Load ``config.json``, asking for a base directory if it has none.

        ``prompt`` receives the default base directory and returns the
        chosen one; without a prompt the default is used. The answer is
        written back to ``config.json``.
        """
        await aiofiles.os.makedirs(self._settings.config_dir, exist_ok=True)

        config_path = self._settings.config_path
        if await aiofiles.os.path.exists(config_path):
            config = self.resolve(await self._read_json(config_path))
            if config.base:
                logger.debug("Configuration loaded", path=str(config_path), base=config.base)
                return config

        default_base = self.defaults["base"]
        base = prompt(default_base) if prompt else default_base
        config = self.resolve({"base": base})
        await self.save(config)
        logger.info("Configuration created", path=str(config_path), base=config.base)
        return config

    async def save(self, config: ProjjConfig) -> None:
        """Write ``config`` to ``config.json``."""
        async with aiofiles.open(self._settings.config_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(config.model_dump(), indent=2))

    @staticmethod
    async def _read_json(path: Path) -> dict[str, Any]:
        try:
            async with aiofiles.open(path, encoding="utf-8") as f:
                content = await f.read()
            data = json.loads(content)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ConfigError(f"Unable to read {path}: {e}", details={"path": str(path)}) from e

        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a JSON object", details={"path": str(path)})
        return data
