from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from .launcher import DEFAULT_TIMEOUT_MS, SpawnFunc, execute
from .logging_utils import log_execution, create_request_id
from .models import ExecutionResult, Outcome, ResolvedCommand, ShortcutRequest
from .resolver import Platform, detect_platform, resolve
from .validator import ValidationError, check_target


@dataclass(frozen=True)
class ShortcutDispatcher:
    """Runs one shortcut request through validation, resolution and launch.

    Every path ends in an ExecutionResult: validation rejections, resolver
    bugs and launcher crashes are all turned into LAUNCH_ERROR results so the
    HTTP layer never sees an exception from here.
    """

    platform: Platform = field(default_factory=detect_platform)
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    spawn: SpawnFunc = asyncio.create_subprocess_exec

    def __post_init__(self):
        # Child of the "shortcut_hub" logger, so LOG_LEVEL set up in main applies
        object.__setattr__(self, 'logger', logging.getLogger(__name__))

    async def dispatch(self, request: ShortcutRequest) -> ExecutionResult:
        request_id = create_request_id()
        start_time = time.time()
        command: Optional[ResolvedCommand] = None

        try:
            # Step 1: reject malformed targets before anything is spawned
            target = check_target(request.target)

            # Step 2: pure resolution for this host's platform family
            command = resolve(request.kind, target, request.parameters, self.platform)
            self.logger.debug(f"🚀 [{request_id}] Executing: {' '.join(command.argv())}")

            # Step 3: spawn and wait for exactly one terminal event
            result = await execute(
                command.program,
                command.arguments,
                request.working_directory,
                self.timeout_ms,
                spawn=self.spawn,
            )
        except ValidationError as e:
            result = ExecutionResult(
                outcome=Outcome.LAUNCH_ERROR,
                message=e.message,
                details=e.reason,
                rejected=True,
            )
        except Exception as e:
            self.logger.exception(f"[{request_id}] Unexpected dispatch error")
            result = ExecutionResult(
                outcome=Outcome.LAUNCH_ERROR,
                message=f"Failed to execute command: {e}",
                details=repr(e),
            )

        duration_ms = (time.time() - start_time) * 1000
        log_execution(
            self.logger, request_id, request.kind.value,
            command.program if command else None,
            command.arguments if command else (),
            result.outcome.value, duration_ms,
            exit_code=result.exit_code,
            output=result.stdout if result.success else (result.stderr or result.stdout),
            error=None if result.success else result.message,
        )
        return result


def to_response(result: ExecutionResult) -> dict[str, Any]:
    """Serialize a result into the wire shape the UI expects."""
    if result.outcome == Outcome.SUCCESS:
        return {
            "success": True,
            "message": result.message,
            "output": result.stdout,
            "exitCode": result.exit_code,
        }

    response: dict[str, Any] = {"success": False, "error": result.message}

    if result.outcome == Outcome.FAILURE:
        response["output"] = result.stderr or result.stdout
        response["exitCode"] = result.exit_code
    elif result.outcome == Outcome.LAUNCH_ERROR and result.details:
        response["details"] = result.details

    return response
