import itertools
import logging
import time
from typing import Optional, Sequence


def setup_logger(name: str = "shortcut_hub", level: str = "INFO") -> logging.Logger:
    """Setup standardized logger for dispatch operations with UTF-8 support."""
    logger = logging.getLogger(name)

    if not logger.handlers:  # Avoid duplicate handlers
        handler = logging.StreamHandler()
        # Command output can contain any text; keep the stream UTF-8
        if hasattr(handler.stream, 'reconfigure'):
            handler.stream.reconfigure(encoding='utf-8')

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return logger


def log_execution(logger: logging.Logger,
                  request_id: str,
                  kind: str,
                  program: Optional[str],
                  arguments: Sequence[str],
                  outcome: str,
                  duration_ms: float,
                  exit_code: Optional[int] = None,
                  output: Optional[str] = None,
                  error: Optional[str] = None) -> None:
    """Log one dispatched request in a structured format.

    Successful runs are logged at INFO, nonzero exits and timeouts at
    WARNING, and anything that never produced a running process at ERROR.
    """

    log_data = {
        "request_id": request_id,
        "kind": kind,
        "program": program,
        "arguments": list(arguments),
        "outcome": outcome,
        "duration_ms": round(duration_ms, 1)
    }

    if exit_code is not None:
        log_data["exit_code"] = exit_code

    if output:
        log_data["output"] = _truncate(output)

    if error:
        log_data["error"] = error

    status_icon = "✅" if outcome == "success" else "❌"
    action_desc = outcome.replace("_", " ").title()

    if outcome == "success":
        logger.info(f"{status_icon} {action_desc}: {log_data}")
    elif outcome in ("failure", "timed_out"):
        logger.warning(f"{status_icon} {action_desc}: {log_data}")
    else:
        logger.error(f"{status_icon} {action_desc}: {log_data}")


def _truncate(text: str, limit: int = 200) -> str:
    """Keep logged output previews to a single short line."""
    first_line = text.strip().split('\n')[0]
    if len(first_line) > limit:
        return first_line[:limit - 3] + "..."
    return first_line


_request_counter = itertools.count(1)


def create_request_id() -> str:
    """Create unique request ID for tracking."""
    return f"req_{int(time.time() * 1000)}_{next(_request_counter)}"
