"""Workspace service: initialization and the add-repository workflow."""

import os
import shlex
import sys
from collections.abc import Awaitable, Callable

import structlog

from projj import console
from projj.config.resolver import BasePrompt, ConfigResolver
from projj.config.settings import Settings
from projj.core.exceptions import ProjjError, RepositoryExistsError
from projj.core.models.config import ProjjConfig
from projj.git.url_resolver import URLResolver
from projj.hooks.invoker import HookInvoker
from projj.process.runner import ScriptRunner
from projj.repositories.index import RepositoryIndex

logger = structlog.get_logger(__name__)

Operation = Callable[["WorkspaceService"], Awaitable[None]]


class WorkspaceService:
    """Runs one projj command against the workspace.

    ``init`` loads the configuration and the repository index; the
    operations below then compose the hook invoker, the script runner
    and the index. Every step runs in order and the first failure stops
    the remaining ones. Nothing is rolled back.
    """

    def __init__(self, settings: Settings, runner: ScriptRunner | None = None) -> None:
        self._settings = settings
        self._resolver = ConfigResolver(settings)
        self._runner = runner or ScriptRunner()
        self._config: ProjjConfig | None = None
        self._hooks: HookInvoker | None = None
        self.index = RepositoryIndex(settings.cache_path)

    @property
    def config(self) -> ProjjConfig:
        if self._config is None:
            raise RuntimeError("Workspace is not initialized, call init() first")
        return self._config

    @property
    def hooks(self) -> HookInvoker:
        if self._hooks is None:
            raise RuntimeError("Workspace is not initialized, call init() first")
        return self._hooks

    async def init(self, prompt: BasePrompt | None = None) -> None:
        """Load configuration and index."""
        self._config = await self._resolver.ensure_config(prompt)
        await self.index.get()
        self._hooks = HookInvoker(
            config=self._config,
            index=self.index,
            runner=self._runner,
            hooks_dir=self._settings.hooks_dir,
        )

    async def run(self, operation: Operation, prompt: BasePrompt | None = None) -> None:
        """Initialize and run ``operation``, exiting with status 1 on failure."""
        try:
            await self.init(prompt)
            await operation(self)
        except (ProjjError, OSError) as e:
            logger.debug("Command failed", error=str(e), exc_info=True)
            console.error(getattr(e, "message", None) or str(e))
            raise SystemExit(1) from e
        console.done()

    def url_to_key(self, url: str) -> str:
        """Canonical path of ``url`` with the configured aliases applied.

        https://github.com/popomore/projj.git => github.com/popomore/projj
        """
        return URLResolver(self.config.alias).resolve(url)

    def target_path(self, key: str) -> str:
        return os.path.join(self.config.base, key.lstrip("/"))

    async def add(self, url: str) -> str:
        """Register ``url``, refusing repositories already in the index."""
        key = self.url_to_key(url)
        if await self.index.get(key):
            raise RepositoryExistsError(
                f"{key} already exists in {self.config.base}",
                details={"key": key},
            )
        await self.add_repo(url, key)
        return key

    async def add_repo(self, repo: str, key: str) -> None:
        """Clone ``repo`` into ``base/key`` and record it in the index."""
        await self.hooks.run_hook("preadd", key)

        target_path = self.target_path(key)
        console.info(f"Cloning into {console.highlight(target_path)}")
        env = {"GIT_SSH_COMMAND": self._git_ssh_command(), **os.environ}
        await self._runner.run(
            f"git clone {shlex.quote(repo)} {shlex.quote(target_path)} > /dev/null",
            env=env,
        )

        self.index.set(key, {"repo": repo})
        await self.index.dump()
        logger.debug("Repository added", key=key, repo=repo)

        await self.hooks.run_hook("postadd", key)

    async def run_hook(self, name: str, key: str) -> None:
        """Run a configured hook by hand against ``key``."""
        if name not in self.config.hooks:
            raise ProjjError(f'Hook "{name}" doesn\'t exist', details={"hook": name})
        await self.hooks.run_hook(name, key)

    def _git_ssh_command(self) -> str:
        return f"{shlex.quote(sys.executable)} {shlex.quote(self._settings.git_ssh)}"
