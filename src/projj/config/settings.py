"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process settings loaded from ``PROJJ_*`` environment variables.

    These locate the configuration directory and its files; the user's
    workspace configuration itself lives in ``config.json``.
    """

    model_config = SettingsConfigDict(
        env_prefix="PROJJ_",
        case_sensitive=False,
    )

    # Directory holding config.json, cache.json and hooks/
    home: str = "~/.projj"

    # Defaults merged under config.json
    default_base: str = "~/projj"
    default_alias: dict[str, str] = {"github://": "https://github.com/"}

    # Helper used as the ssh transport for git clone
    git_ssh: str | None = None

    log_level: str = "INFO"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.home = str(Path(self.home).expanduser())
        self.default_base = str(Path(self.default_base).expanduser())
        if self.git_ssh is None:
            self.git_ssh = str(Path(__file__).resolve().parent.parent / "git" / "ssh.py")

    @property
    def config_dir(self) -> Path:
        return Path(self.home)

    @property
    def config_path(self) -> Path:
        return self.config_dir / "config.json"

    @property
    def cache_path(self) -> Path:
        return self.config_dir / "cache.json"

    @property
    def hooks_dir(self) -> Path:
        return self.config_dir / "hooks"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
