from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Protocol


@dataclass(frozen=True)
class ControlCommand:
    v: float
    w: float


class CommandSink(Protocol):
    def __call__(self, cmd: ControlCommand) -> None:
        ...


@dataclass
class RecordingSink:
    """Sink that keeps every command it receives (tests, simulation, replay)."""

    commands: List[ControlCommand] = field(default_factory=list)

    def __call__(self, cmd: ControlCommand) -> None:
        self.commands.append(cmd)

    @property
    def last(self) -> Optional[ControlCommand]:
        return self.commands[-1] if self.commands else None


class CommandEmitter:
    """Maps a (linear, angular) velocity pair to an actuator command and forwards it."""

    def __init__(self, sink: Optional[CommandSink] = None) -> None:
        self.sink = sink
        self.last: Optional[ControlCommand] = None
        self.count = 0

    def emit(self, v: float, w: float) -> ControlCommand:
        cmd = ControlCommand(v=float(v), w=float(w))
        if self.sink is not None:
            self.sink(cmd)
        self.last = cmd
        self.count += 1
        return cmd
