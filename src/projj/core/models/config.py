"""User configuration model (``config.json``)."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProjjConfig(BaseModel):
    """Configuration persisted in ``<config_dir>/config.json``.

    Besides the recognized keys, any extra top-level key is kept and
    treated as configuration for the hook of the same name.
    """

    model_config = ConfigDict(extra="allow")

    base: str | None = None
    alias: dict[str, str] = Field(default_factory=dict)
    hooks: dict[str, str] = Field(default_factory=dict)

    def hook_config(self, name: str) -> Any | None:
        """Return the hook-specific configuration stored under ``name``."""
        return (self.model_extra or {}).get(name)

    def has_hook_config(self, name: str) -> bool:
        return name in (self.model_extra or {})
