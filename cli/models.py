"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True)
class SetPerfIntervalCommand:
    """Set the performance monitor interval on one or all servers."""

    mount_point: str
    interval: int
    server: Optional[str] = None
    command: Literal["set-perf-interval"] = "set-perf-interval"


@dataclass(frozen=True)
class SetModeCommand:
    """Switch servers between admin and normal mode."""

    mount_point: str
    mode: str
    server: Optional[str] = None
    command: Literal["set-mode"] = "set-mode"


@dataclass(frozen=True)
class MkdirCommand:
    """Create a directory inside a mounted filesystem."""

    path: str
    command: Literal["mkdir"] = "mkdir"


@dataclass(frozen=True)
class VersionCommand:
    """Print the tool version."""

    command: Literal["version"] = "version"


CommandRequest = (
    SetPerfIntervalCommand
    | SetModeCommand
    | MkdirCommand
    | VersionCommand
)
