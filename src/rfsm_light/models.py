"""Core data models for rfsm-light: signals, states and transitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Union

from rfsm_light.stimulus import Stimulus

# Reserved id of the pseudo-state in persisted documents.
PSEUDO_STATE_ID = "_init"


class IoKind(Enum):
    """Kind of a signal, valued by its wire name."""

    INPUT = "input"
    OUTPUT = "output"
    SHARED = "shared"

    @property
    def rfsm(self) -> str:
        """Direction keyword used in RFSM parameter lists."""
        return {"input": "in", "output": "out", "shared": "inout"}[self.value]

    @classmethod
    def of_string(cls, s: str) -> IoKind:
        try:
            return cls(s)
        except ValueError:
            raise ValueError(f"Invalid IO kind: {s!r}") from None


class IoType(Enum):
    EVENT = "event"
    INT = "int"
    BOOL = "bool"

    @classmethod
    def of_string(cls, s: str) -> IoType:
        try:
            return cls(s)
        except ValueError:
            raise ValueError(f"Invalid IO type: {s!r}") from None


@dataclass
class Signal:
    """A typed input, output or shared variable declaration."""

    name: str
    kind: IoKind
    type: IoType
    stimulus: Stimulus = field(default_factory=Stimulus)

    @property
    def is_input_event(self) -> bool:
        return self.kind is IoKind.INPUT and self.type is IoType.EVENT

    def to_string(self, with_stim: bool = True) -> str:
        s = f"{self.kind.value} {self.name}: {self.type.value}"
        if with_stim and self.kind is IoKind.INPUT and not self.stimulus.is_none:
            s += f" = {self.stimulus.to_string()}"
        return s

    def copy(self) -> Signal:
        return Signal(self.name, self.kind, self.type, self.stimulus)


def string_of_signals(signals: list[Signal]) -> str:
    """Multi-line description of a signal list, as shown in DOT captions."""
    return "\\n".join(s.to_string(with_stim=False) for s in signals)


class Location(IntEnum):
    """Placement hint for self-loop transitions."""

    NONE = 0
    NORTH = 1
    SOUTH = 2
    EAST = 3
    WEST = 4

    @classmethod
    def of_int(cls, n: int) -> Location:
        try:
            return cls(n)
        except ValueError:
            return cls.NONE


@dataclass(eq=False)
class NormalState:
    """A regular automaton state."""

    id: str
    attrs: list[str] = field(default_factory=list)
    position: tuple[float, float] = (0.0, 0.0)
    key: int = -1
    incident: set[int] = field(default_factory=set)

    @property
    def is_pseudo(self) -> bool:
        return False

    def __str__(self) -> str:
        if self.attrs:
            return f"{self.id}[{','.join(self.attrs)}]"
        return self.id


@dataclass(eq=False)
class PseudoState:
    """The unique entry point of an automaton. Has no user identity."""

    position: tuple[float, float] = (0.0, 0.0)
    key: int = -1
    incident: set[int] = field(default_factory=set)

    @property
    def is_pseudo(self) -> bool:
        return True

    @property
    def id(self) -> str:
        return PSEUDO_STATE_ID

    @property
    def attrs(self) -> list[str]:
        return []

    def __str__(self) -> str:
        return "<init>"


State = Union[NormalState, PseudoState]


@dataclass(eq=False)
class Transition:
    """A directed edge between two states of the same automaton.

    Endpoints are non-owning references; the owning automaton keeps each
    state's set of incident transition keys up to date.
    """

    src: State
    dst: State
    event: str = ""
    guards: list[str] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)
    location: Location = Location.NONE
    key: int = -1

    @property
    def is_initial(self) -> bool:
        return self.src.is_pseudo

    @property
    def is_self_loop(self) -> bool:
        return self.src is self.dst

    @property
    def label(self) -> str:
        r = self.event
        if self.guards:
            r += "." + ".".join(self.guards)
        if self.actions:
            r += "/" + ";".join(self.actions)
        return r

    def __str__(self) -> str:
        s = f"{self.src.id} -> {self.dst.id}"
        label = self.label
        if label:
            s += f" [{label}]"
        return s


@dataclass
class ToolConfig:
    """Project configuration for rfsm-light."""

    version: str = "0.1.0"
    compiler: str = ""  # path to rfsmc; empty disables fragment checking
    compiler_timeout: float = 10.0
    dot_captions: bool = True
    check_stimuli: bool = False
