"""
Target validation for shortcut execution.

This is advisory filtering only: it turns away obviously malformed targets
before anything is spawned. It is NOT a security boundary. Anything that
passes (any bare command on PATH, any absolute path, any allow-listed
script) is executed with the full privileges of the backend process.
"""

from __future__ import annotations

from pathlib import PurePosixPath, PureWindowsPath
import posixpath

URL_PREFIXES = ("http://", "https://", "file://")

ALLOWED_EXTENSIONS = (".exe", ".bat", ".cmd", ".ps1", ".sh", ".py", ".js", ".mjs", ".ts")

PATH_SEPARATORS = ("/", "\\")

MISSING_TARGET = "missing_target"
INVALID_TARGET = "invalid_target"


class ValidationError(ValueError):
    """Target was rejected before any process was started."""

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message


def extension_of(target: str) -> str:
    """Lower-cased extension of the last path component ("" when none).

    Both separator styles are honoured regardless of the host, so the result
    does not depend on which platform the backend runs on.
    """
    base = target.replace("\\", "/").rsplit("/", 1)[-1]
    return posixpath.splitext(base)[1].lower()


def is_absolute_path(target: str) -> bool:
    return PurePosixPath(target).is_absolute() or PureWindowsPath(target).is_absolute()


def validate(target: str) -> bool:
    """
    Decide whether a target is an acceptable thing to execute.

    Rules (first match wins):
        1. URL with http://, https:// or file:// scheme
        2. allow-listed executable/script extension (case-insensitive)
        3. bare command: no separator and no extension (resolved via PATH)
        4. absolute filesystem path
        5. anything else is rejected

    Rule 3 is deliberately broad: any separator-free, extension-free string
    is treated as a system command (``..`` included).
    """
    if target.startswith(URL_PREFIXES):
        return True
    if target.lower().endswith(ALLOWED_EXTENSIONS):
        return True
    if not any(sep in target for sep in PATH_SEPARATORS) and not extension_of(target):
        return True
    if is_absolute_path(target):
        return True
    return False


def check_target(target: str | None) -> str:
    """Return the target unchanged or raise ValidationError."""
    if not target or not target.strip():
        raise ValidationError(MISSING_TARGET, "Executable path is required")
    if not validate(target):
        raise ValidationError(INVALID_TARGET, "Invalid executable path")
    return target
