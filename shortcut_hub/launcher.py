"""
shortcut_hub.launcher: run one resolved command under a wall-clock budget.

Three event sources race to finish a launch:
  1. the process exits on its own (exit code)
  2. the process cannot be started or its pipes fail (launch error)
  3. the deadline fires (timed out)

All of them offer their result to a ResultLatch. Only the first offer is
kept; the others are counted and dropped.

Known limitation: a run counts as finished only once stdout and stderr are
both closed, not when the process itself exits. A launcher that exits but
leaves a background child holding its stdout (``xdg-open`` handing off to a
browser, ``cmd /c start``) is reported as TIMED_OUT, and its exit watcher
stays in ``_background_tasks`` until that child closes the pipe.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any, Awaitable, Callable, Optional, Sequence

from .models import ExecutionResult, Outcome

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30000

_READ_CHUNK = 4096

SpawnFunc = Callable[..., Awaitable[Any]]

# Exit watchers that outlive a timed-out request; kept referenced until done
_background_tasks: set[asyncio.Task] = set()


class ResultLatch:
    """Single-resolution holder for the outcome of one launch.

    ``offer`` checks and sets in one step with no ``await`` in between, so on
    the event loop it cannot interleave with another offer.
    """

    def __init__(self) -> None:
        self._future: asyncio.Future[ExecutionResult] = asyncio.get_running_loop().create_future()
        self.suppressed = 0

    def offer(self, result: ExecutionResult) -> bool:
        if self._future.done():
            self.suppressed += 1
            logger.debug(f"Suppressed late {result.outcome.value} result: {result.message}")
            return False
        self._future.set_result(result)
        return True

    @property
    def done(self) -> bool:
        return self._future.done()

    @property
    def result(self) -> Optional[ExecutionResult]:
        return self._future.result() if self._future.done() else None

    async def wait(self) -> ExecutionResult:
        return await asyncio.shield(self._future)


def _decode(buf: bytearray) -> str:
    return bytes(buf).decode("utf-8", errors="replace")


def _exit_result(code: int, stdout: str, stderr: str) -> ExecutionResult:
    if code == 0:
        return ExecutionResult(
            outcome=Outcome.SUCCESS,
            message="Command executed successfully",
            exit_code=code,
            stdout=stdout,
            stderr=stderr,
        )
    return ExecutionResult(
        outcome=Outcome.FAILURE,
        message=f"Command failed with exit code {code}",
        exit_code=code,
        stdout=stdout,
        stderr=stderr,
    )


def _launch_error(error: BaseException, stdout: str = "", stderr: str = "") -> ExecutionResult:
    return ExecutionResult(
        outcome=Outcome.LAUNCH_ERROR,
        message=f"Failed to execute command: {error}",
        stdout=stdout,
        stderr=stderr,
        details=repr(error),
    )


def timed_out_result(timeout_ms: int, stdout: str = "", stderr: str = "") -> ExecutionResult:
    return ExecutionResult(
        outcome=Outcome.TIMED_OUT,
        message=f"Command timed out after {timeout_ms}ms",
        stdout=stdout,
        stderr=stderr,
    )


async def _pump(stream: Optional[asyncio.StreamReader], buf: bytearray) -> None:
    if stream is None:
        return
    while True:
        chunk = await stream.read(_READ_CHUNK)
        if not chunk:
            break
        buf.extend(chunk)


def _terminate(proc: Any) -> None:
    """Best-effort: a process that is already gone is not an error."""
    if proc.returncode is not None:
        return
    try:
        proc.terminate()
    except ProcessLookupError:
        pass
    except OSError as e:
        logger.warning(f"Could not terminate pid {getattr(proc, 'pid', '?')}: {e}")


async def execute(
    program: str,
    arguments: Sequence[str] = (),
    working_directory: Optional[str] = None,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    *,
    spawn: SpawnFunc = asyncio.create_subprocess_exec,
    latch: Optional[ResultLatch] = None,
) -> ExecutionResult:
    """Spawn ``program`` with ``arguments`` and return exactly one result.

    stdin is closed, stdout/stderr are collected in full. When the deadline
    wins, the child is sent a termination signal and the caller gets
    TIMED_OUT right away, without waiting for the child to die.
    """
    latch = latch or ResultLatch()
    cwd = working_directory or os.getcwd()

    try:
        proc = await spawn(
            program,
            *arguments,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
        )
    except (OSError, ValueError) as e:
        latch.offer(_launch_error(e))
        return await latch.wait()

    stdout_buf = bytearray()
    stderr_buf = bytearray()

    async def watch_exit() -> None:
        try:
            await asyncio.gather(_pump(proc.stdout, stdout_buf), _pump(proc.stderr, stderr_buf))
            code = await proc.wait()
        except Exception as e:
            latch.offer(_launch_error(e, _decode(stdout_buf), _decode(stderr_buf)))
            return
        latch.offer(_exit_result(code, _decode(stdout_buf), _decode(stderr_buf)))

    def on_deadline() -> None:
        if latch.offer(timed_out_result(timeout_ms, _decode(stdout_buf), _decode(stderr_buf))):
            _terminate(proc)

    loop = asyncio.get_running_loop()
    watcher = asyncio.create_task(watch_exit())
    _background_tasks.add(watcher)
    watcher.add_done_callback(_background_tasks.discard)
    timer = loop.call_later(timeout_ms / 1000, on_deadline)

    try:
        return await latch.wait()
    finally:
        timer.cancel()
        if not latch.done:
            # caller was cancelled before any event won
            _terminate(proc)
