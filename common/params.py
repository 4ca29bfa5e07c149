"""Server parameter specs.

Each parameter kind is its own class that owns and validates its value,
so a kind can never be paired with the wrong value representation.
"""

from dataclasses import dataclass
from typing import ClassVar, Literal, Union

from common.constants import UINT64_MAX


@dataclass(frozen=True)
class PerfInterval:
    """Performance monitor sampling interval, in milliseconds."""

    milliseconds: int
    kind: ClassVar[str] = "perf_interval"
    value_type: ClassVar[str] = "uint64"

    def __post_init__(self):
        if isinstance(self.milliseconds, bool) or not isinstance(self.milliseconds, int):
            raise TypeError(f"interval must be an int, got {type(self.milliseconds).__name__}")
        if not 0 < self.milliseconds <= UINT64_MAX:
            raise ValueError(f"interval must be between 1 and {UINT64_MAX}, got {self.milliseconds}")

    @property
    def value(self) -> int:
        return self.milliseconds

    def describe(self) -> str:
        return f"interval ({self.milliseconds} ms)"

    def to_wire(self) -> dict:
        return {"kind": self.kind, "type": self.value_type, "value": self.milliseconds}


@dataclass(frozen=True)
class ServerMode:
    """Server operating mode; admin mode refuses ordinary client requests."""

    mode: Literal["admin", "normal"]
    kind: ClassVar[str] = "mode"
    value_type: ClassVar[str] = "string"

    MODES: ClassVar[tuple[str, ...]] = ("admin", "normal")

    def __post_init__(self):
        if self.mode not in self.MODES:
            raise ValueError(f"mode must be one of {', '.join(self.MODES)}, got {self.mode!r}")

    @property
    def value(self) -> str:
        return self.mode

    def describe(self) -> str:
        return f"mode ({self.mode})"

    def to_wire(self) -> dict:
        return {"kind": self.kind, "type": self.value_type, "value": self.mode}


ParameterSpec = Union[PerfInterval, ServerMode]
