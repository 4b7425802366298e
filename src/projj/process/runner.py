"""Shell command execution with streamed output."""

import asyncio
import codecs
from collections.abc import Callable, Mapping

import structlog

from projj import console
from projj.core.exceptions import ProcessError

logger = structlog.get_logger(__name__)

OutputSink = Callable[[str], None]

CHUNK_SIZE = 4096


class ScriptRunner:
    """Runs shell command lines, streaming their stdout to a sink.

    Standard output is forwarded line by line while the command runs.
    Standard error is captured; when the command fails it is written to
    the sink and attached to the raised ``ProcessError``.
    """

    def __init__(self, sink: OutputSink | None = None) -> None:
        self._sink = sink or console.child_output

    async def run(
        self,
        cmd: str,
        cwd: str | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        """Run ``cmd`` through the shell and wait for it to finish.

        Raises ProcessError on a non-zero exit status. Errors raised by
        the sink stop the command and propagate.
        """
        logger.debug("Running command", cmd=cmd, cwd=cwd)
        process = await asyncio.create_subprocess_shell(
            cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
            env=dict(env) if env is not None else None,
        )
        stderr_task = asyncio.create_task(process.stderr.read())

        try:
            await self._pipe(process.stdout)
        except BaseException:
            if process.returncode is None:
                process.kill()
            await process.wait()
            stderr_task.cancel()
            await asyncio.gather(stderr_task, return_exceptions=True)
            raise

        stderr = await stderr_task
        returncode = await process.wait()
        if returncode != 0:
            logger.debug("Command failed", cmd=cmd, returncode=returncode)
            if stderr:
                for line in stderr.decode("utf-8", errors="replace").splitlines():
                    self._sink(line)
            raise ProcessError(cmd, returncode, stderr)

    async def _pipe(self, stream: asyncio.StreamReader) -> None:
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        # pieces of the current, unterminated line
        pending: list[str] = []
        while True:
            chunk = await stream.read(CHUNK_SIZE)
            if not chunk:
                break
            first, *rest = decoder.decode(chunk).split("\n")
            pending.append(first)
            if not rest:
                continue
            *lines, tail = rest
            self._sink("".join(pending).rstrip("\r"))
            for line in lines:
                self._sink(line.rstrip("\r"))
            pending = [tail]

        pending.append(decoder.decode(b"", final=True))
        last = "".join(pending)
        if last:
            self._sink(last)
