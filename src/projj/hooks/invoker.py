"""Lifecycle hook execution."""

import json
import os
from pathlib import Path

import aiofiles.os
import structlog

from projj import console
from projj.core.models.config import ProjjConfig
from projj.process.runner import ScriptRunner
from projj.repositories.index import RepositoryIndex

logger = structlog.get_logger(__name__)


class HookInvoker:
    """Runs the shell command configured for a named hook.

    Hooks are looked up in ``config.hooks``. The command runs with the
    hooks directory prepended to ``PATH`` and receives its name, and its
    configuration when there is one, through the environment:

    - ``PROJJ_HOOK_NAME``: the hook name
    - ``PROJJ_HOOK_CONFIG``: JSON of the top-level config key named after the hook
    """

    def __init__(
        self,
        config: ProjjConfig,
        index: RepositoryIndex,
        runner: ScriptRunner,
        hooks_dir: str | Path,
    ) -> None:
        self._config = config
        self._index = index
        self._runner = runner
        self._hooks_dir = Path(hooks_dir)

    def build_env(self, name: str) -> dict[str, str]:
        """Environment overlay for hook ``name``."""
        env = {
            "PATH": f"{self._hooks_dir}{os.pathsep}{os.environ.get('PATH', '')}",
            "PROJJ_HOOK_NAME": name,
        }
        if self._config.has_hook_config(name):
            env["PROJJ_HOOK_CONFIG"] = json.dumps(self._config.hook_config(name))
        return env

    async def resolve_cwd(self, key: str | None) -> str | None:
        """Working directory for a hook run against ``key``.

        A key in the index maps to its checkout under ``base``; any other
        key is used as a path. Paths that do not exist yield ``None``.
        """
        if not key:
            return None
        if await self._index.get(key):
            cwd = os.path.join(self._config.base, key.lstrip("/"))
        else:
            cwd = key
        return cwd if await aiofiles.os.path.exists(cwd) else None

    async def run_hook(self, name: str, key: str | None) -> None:
        """Run hook ``name`` for ``key``; does nothing if it is not configured."""
        hook = self._config.hooks.get(name)
        if not hook:
            logger.debug("Hook not configured", hook=name)
            return

        env = {**os.environ, **self.build_env(name)}
        cwd = await self.resolve_cwd(key)

        console.info(f"Run hook {console.highlight(name)} for {key}")
        logger.debug("Running hook", hook=name, key=key, cwd=cwd)
        await self._runner.run(hook, cwd=cwd, env=env)
