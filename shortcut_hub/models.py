from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ShortcutKind(str, Enum):
    URL = "url"
    WEB_APP = "web-app"
    SYSTEM = "system"
    SCRIPT = "script"


URL_KINDS = frozenset({ShortcutKind.URL, ShortcutKind.WEB_APP})


class Outcome(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    TIMED_OUT = "timed_out"
    LAUNCH_ERROR = "launch_error"


class ShortcutRequest(BaseModel):
    """One execution request as sent by the UI.

    ``executable`` and ``type`` are the field names older clients send;
    they are accepted as aliases of ``target`` and ``kind``.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    target: str = Field("", validation_alias=AliasChoices("target", "executable"))
    parameters: str = ""
    kind: ShortcutKind = Field(ShortcutKind.SYSTEM, validation_alias=AliasChoices("kind", "type"))
    working_directory: Optional[str] = Field(
        None, validation_alias=AliasChoices("workingDirectory", "working_directory")
    )


@dataclass(frozen=True)
class ResolvedCommand:
    program: str
    arguments: tuple[str, ...] = ()

    def argv(self) -> list[str]:
        return [self.program, *self.arguments]


@dataclass(frozen=True)
class ExecutionResult:
    outcome: Outcome
    message: str
    exit_code: Optional[int] = None
    stdout: str = ""
    stderr: str = ""
    details: Optional[str] = None
    rejected: bool = False  # refused by validation, nothing was spawned

    @property
    def success(self) -> bool:
        return self.outcome == Outcome.SUCCESS


class ShortcutRecord(BaseModel):
    """A saved shortcut as kept by the shortcut store."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str = ""
    target: str = Field(..., validation_alias=AliasChoices("target", "executable"))
    parameters: str = ""
    icon: str = "Terminal"
    category: str = "General"
    kind: ShortcutKind = Field(ShortcutKind.SYSTEM, validation_alias=AliasChoices("kind", "type"))
    workingDirectory: Optional[str] = None
    createdAt: datetime = Field(default_factory=lambda: datetime.now().astimezone())
    lastUsed: Optional[datetime] = None

    def to_request(self) -> ShortcutRequest:
        return ShortcutRequest(
            target=self.target,
            parameters=self.parameters,
            kind=self.kind,
            working_directory=self.workingDirectory or None,
        )


class ShortcutList(BaseModel):
    shortcuts: List[ShortcutRecord]
