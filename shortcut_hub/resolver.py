from __future__ import annotations

import sys
from enum import Enum
from typing import Optional

from .models import ResolvedCommand, ShortcutKind, URL_KINDS
from .validator import extension_of


class Platform(str, Enum):
    """Platform families with distinct open/shell conventions."""
    WINDOWS = "win32"
    MACOS = "darwin"
    LINUX = "linux"  # every other POSIX-like host


def detect_platform(sys_platform: str = sys.platform) -> Platform:
    if sys_platform.startswith(("win", "cygwin", "msys")):
        return Platform.WINDOWS
    if sys_platform == "darwin":
        return Platform.MACOS
    return Platform.LINUX


# "Open in default handler" per platform: (program, leading arguments)
OPEN_COMMANDS: dict[Platform, tuple[str, tuple[str, ...]]] = {
    Platform.WINDOWS: ("cmd", ("/c", "start", "")),
    Platform.MACOS: ("open", ()),
    Platform.LINUX: ("xdg-open", ()),
}

_BATCH_WRAPPER = ("cmd", ("/c",))

# (platform or None for "any", kind, extension) -> (program, leading arguments).
# The target is appended after the leading arguments.
WRAPPERS: dict[tuple[Optional[Platform], ShortcutKind, str], tuple[str, tuple[str, ...]]] = {
    (Platform.WINDOWS, ShortcutKind.SCRIPT, ".py"): ("python", ()),
    (None, ShortcutKind.SCRIPT, ".py"): ("python3", ()),
    (None, ShortcutKind.SCRIPT, ".js"): ("node", ()),
    (None, ShortcutKind.SCRIPT, ".mjs"): ("node", ()),
    (Platform.WINDOWS, ShortcutKind.SCRIPT, ".ps1"): ("powershell", ("-ExecutionPolicy", "Bypass", "-File")),
    (None, ShortcutKind.SCRIPT, ".ps1"): ("pwsh", ("-ExecutionPolicy", "Bypass", "-File")),
    (None, ShortcutKind.SCRIPT, ".sh"): ("bash", ()),
    (Platform.WINDOWS, ShortcutKind.SCRIPT, ".bat"): _BATCH_WRAPPER,
    (Platform.WINDOWS, ShortcutKind.SCRIPT, ".cmd"): _BATCH_WRAPPER,
    (Platform.WINDOWS, ShortcutKind.SYSTEM, ".bat"): _BATCH_WRAPPER,
    (Platform.WINDOWS, ShortcutKind.SYSTEM, ".cmd"): _BATCH_WRAPPER,
}


def split_parameters(parameters: str | None) -> tuple[str, ...]:
    """Naive whitespace split; quoting is not supported."""
    return tuple((parameters or "").split())


def _lookup_wrapper(platform: Platform, kind: ShortcutKind, ext: str):
    return WRAPPERS.get((platform, kind, ext)) or WRAPPERS.get((None, kind, ext))


def resolve(
    kind: ShortcutKind,
    target: str,
    parameters: str = "",
    platform: Platform = Platform.LINUX,
) -> ResolvedCommand:
    """
    Map a shortcut to the concrete program and argument list to spawn.

    Pure function: the platform is passed in, nothing is read from the
    environment and nothing touches the filesystem.

    Strategy:
    1. url / web-app: platform "open" command; parameters are a literal
       suffix of the URL (query strings), not a separate argument
    2. script / system: interpreter or shell wrapper looked up by
       (platform, kind, extension); no entry means the target runs directly
    3. parameters of non-URL kinds are whitespace-split and appended
    """
    kind = ShortcutKind(kind)

    if kind in URL_KINDS:
        program, leading = OPEN_COMMANDS[platform]
        return ResolvedCommand(program, (*leading, target + (parameters or "")))

    wrapper = _lookup_wrapper(platform, kind, extension_of(target))
    if wrapper:
        program, leading = wrapper
        arguments = (*leading, target)
    else:
        program, arguments = target, ()

    return ResolvedCommand(program, arguments + split_parameters(parameters))
