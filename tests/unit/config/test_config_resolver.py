"""Tests for configuration resolution."""

import json
from pathlib import Path

import pytest

from projj.config.resolver import ConfigResolver, resolve_config
from projj.config.settings import Settings
from projj.core.exceptions import ConfigError
from projj.core.models.config import ProjjConfig

DEFAULTS = {
    "base": "/home/user/projj",
    "hooks": {},
    "alias": {"github://": "https://github.com/"},
}


@pytest.mark.unit
class TestResolveConfig:
    """Tests for resolve_config."""

    def _resolve(self, base: str) -> str:
        config = resolve_config(
            {"base": base},
            DEFAULTS,
            config_dir="/home/user/.projj",
            cwd="/tmp/cwd",
            home="/home/user",
        )
        return config.base

    def test_dot_relative_to_config_dir(self) -> None:
        assert self._resolve("./code") == "/home/user/.projj/code"
        assert self._resolve("../code") == "/home/user/code"

    def test_tilde_expands_home(self) -> None:
        assert self._resolve("~/code") == "/home/user/code"

    def test_absolute_is_kept(self) -> None:
        assert self._resolve("/work") == "/work"

    def test_bare_relative_to_cwd(self) -> None:
        assert self._resolve("code") == "/tmp/cwd/code"

    @pytest.mark.parametrize("base", ["./a", "~/b", "/c", "d"])
    def test_base_is_absolute(self, base: str) -> None:
        assert Path(self._resolve(base)).is_absolute()

    def test_default_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        config = resolve_config({"base": "code"}, DEFAULTS, config_dir="/cfg")
        assert config.base == str(tmp_path / "code")

    def test_partial_wins_shallow(self) -> None:
        config = resolve_config(
            {"alias": {"gl://": "https://gitlab.com/"}},
            DEFAULTS,
            config_dir="/cfg",
        )
        assert config.alias == {"gl://": "https://gitlab.com/"}
        assert config.base == "/home/user/projj"
        assert config.hooks == {}

    def test_idempotent(self) -> None:
        partial = {"base": "~/code", "hooks": {"preadd": "echo pre"}, "preadd": {"x": 1}}
        once = resolve_config(partial, DEFAULTS, config_dir="/cfg", cwd="/tmp", home="/home/user")
        twice = resolve_config(once, DEFAULTS, config_dir="/cfg", cwd="/tmp", home="/home/user")
        assert twice == once
        assert twice.model_dump() == once.model_dump()

    def test_extra_keys_are_hook_config(self) -> None:
        config = resolve_config({"postadd": {"remote": "origin"}}, DEFAULTS, config_dir="/cfg")
        assert config.has_hook_config("postadd")
        assert config.hook_config("postadd") == {"remote": "origin"}
        assert not config.has_hook_config("preadd")

    def test_invalid_hooks_type(self) -> None:
        with pytest.raises(ConfigError):
            resolve_config({"hooks": ["echo"]}, DEFAULTS, config_dir="/cfg")

    def test_invalid_base_type(self) -> None:
        with pytest.raises(ConfigError):
            resolve_config({"base": 42}, DEFAULTS, config_dir="/cfg")


@pytest.mark.unit
class TestConfigResolver:
    """Tests for ConfigResolver.ensure_config."""

    @pytest.mark.asyncio
    async def test_creates_config_with_prompt(self, settings: Settings, tmp_path: Path) -> None:
        asked = []

        def prompt(default: str) -> str:
            asked.append(default)
            return str(tmp_path / "chosen")

        config = await ConfigResolver(settings).ensure_config(prompt)

        assert asked == [settings.default_base]
        assert config.base == str(tmp_path / "chosen")
        assert settings.config_dir.is_dir()
        saved = json.loads(settings.config_path.read_text())
        assert saved["base"] == str(tmp_path / "chosen")
        assert saved["alias"] == {"github://": "https://github.com/"}
        assert saved["hooks"] == {}

    @pytest.mark.asyncio
    async def test_creates_config_with_default(self, settings: Settings) -> None:
        config = await ConfigResolver(settings).ensure_config()
        assert config.base == settings.default_base
        assert settings.config_path.exists()

    @pytest.mark.asyncio
    async def test_existing_base_skips_prompt(self, settings: Settings) -> None:
        settings.config_dir.mkdir(parents=True)
        settings.config_path.write_text(json.dumps({"base": "/work", "hooks": {"preadd": "echo pre"}}))

        def prompt(default: str) -> str:
            raise AssertionError("prompt should not be called")

        config = await ConfigResolver(settings).ensure_config(prompt)
        assert config.base == "/work"
        assert config.hooks == {"preadd": "echo pre"}
        assert config.alias == {"github://": "https://github.com/"}

    @pytest.mark.asyncio
    async def test_missing_base_uses_default(self, settings: Settings) -> None:
        settings.config_dir.mkdir(parents=True)
        settings.config_path.write_text(json.dumps({"hooks": {}}))

        config = await ConfigResolver(settings).ensure_config(lambda default: "/elsewhere")
        assert config.base == settings.default_base

    @pytest.mark.asyncio
    async def test_null_base_prompts(self, settings: Settings, tmp_path: Path) -> None:
        settings.config_dir.mkdir(parents=True)
        settings.config_path.write_text(json.dumps({"base": None}))

        config = await ConfigResolver(settings).ensure_config(lambda default: str(tmp_path / "new"))
        assert config.base == str(tmp_path / "new")
        assert json.loads(settings.config_path.read_text())["base"] == str(tmp_path / "new")

    @pytest.mark.asyncio
    async def test_dot_base_relative_to_config_dir(self, settings: Settings) -> None:
        settings.config_dir.mkdir(parents=True)
        settings.config_path.write_text(json.dumps({"base": "./repos"}))

        config = await ConfigResolver(settings).ensure_config()
        assert config.base == str(settings.config_dir / "repos")

    @pytest.mark.asyncio
    async def test_malformed_config(self, settings: Settings) -> None:
        settings.config_dir.mkdir(parents=True)
        settings.config_path.write_text("{not json")

        with pytest.raises(ConfigError):
            await ConfigResolver(settings).ensure_config()

    @pytest.mark.asyncio
    async def test_config_not_an_object(self, settings: Settings) -> None:
        settings.config_dir.mkdir(parents=True)
        settings.config_path.write_text("[]")

        with pytest.raises(ConfigError):
            await ConfigResolver(settings).ensure_config()

    @pytest.mark.asyncio
    async def test_save_round_trip(self, settings: Settings) -> None:
        resolver = ConfigResolver(settings)
        settings.config_dir.mkdir(parents=True)
        config = ProjjConfig(base="/work", hooks={"postadd": "make"}, postadd={"jobs": 2})

        await resolver.save(config)
        loaded = await resolver.ensure_config()

        assert loaded.base == "/work"
        assert loaded.hook_config("postadd") == {"jobs": 2}
