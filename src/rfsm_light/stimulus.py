"""Input stimuli: how an input signal is driven during simulation.

Two textual forms exist:

- the wire form stored in ``.fsd`` files, e.g. ``Periodic(10,0,100)``,
  ``Sporadic(5,15)``, ``ValueChanges(0:1,10:0)`` and ``""`` for none;
- the RFSM literal form, e.g. ``periodic(10,0,100)``, ``sporadic(5,15)``,
  ``value_changes(0:1,10:0)``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum


class StimulusKind(Enum):
    NONE = 0
    PERIODIC = 1
    SPORADIC = 2
    VALUE_CHANGES = 3


_WIRE_NAMES = {
    StimulusKind.PERIODIC: "Periodic",
    StimulusKind.SPORADIC: "Sporadic",
    StimulusKind.VALUE_CHANGES: "ValueChanges",
}

_RFSM_NAMES = {
    StimulusKind.PERIODIC: "periodic",
    StimulusKind.SPORADIC: "sporadic",
    StimulusKind.VALUE_CHANGES: "value_changes",
}

_STIM_RE = re.compile(r"^\s*(\w+)\s*\((.*)\)\s*$")


@dataclass(frozen=True)
class Stimulus:
    """A tagged stimulus descriptor. Immutable, embedded by value in a Signal."""

    kind: StimulusKind = StimulusKind.NONE
    period: int = 0
    start_time: int = 0
    end_time: int = 0
    dates: tuple[int, ...] = ()
    changes: tuple[tuple[int, int], ...] = field(default=())

    @classmethod
    def none(cls) -> Stimulus:
        return cls()

    @classmethod
    def periodic(cls, period: int, start_time: int, end_time: int) -> Stimulus:
        return cls(
            kind=StimulusKind.PERIODIC,
            period=period,
            start_time=start_time,
            end_time=end_time,
        )

    @classmethod
    def sporadic(cls, dates: list[int] | tuple[int, ...]) -> Stimulus:
        return cls(kind=StimulusKind.SPORADIC, dates=tuple(dates))

    @classmethod
    def value_changes(
        cls, changes: list[tuple[int, int]] | tuple[tuple[int, int], ...]
    ) -> Stimulus:
        return cls(
            kind=StimulusKind.VALUE_CHANGES,
            changes=tuple((t, v) for t, v in changes),
        )

    @property
    def is_none(self) -> bool:
        return self.kind is StimulusKind.NONE

    def _args(self) -> str:
        if self.kind is StimulusKind.PERIODIC:
            return f"{self.period},{self.start_time},{self.end_time}"
        if self.kind is StimulusKind.SPORADIC:
            return ",".join(str(t) for t in self.dates)
        if self.kind is StimulusKind.VALUE_CHANGES:
            return ",".join(f"{t}:{v}" for t, v in self.changes)
        return ""

    def to_string(self) -> str:
        """Return the wire form used in ``.fsd`` files."""
        if self.is_none:
            return ""
        return f"{_WIRE_NAMES[self.kind]}({self._args()})"

    def to_rfsm(self) -> str:
        """Return the RFSM literal form (empty for no stimulus)."""
        if self.is_none:
            return ""
        return f"{_RFSM_NAMES[self.kind]}({self._args()})"

    def __str__(self) -> str:
        return self.to_string()


def parse_stimulus(text: str) -> Stimulus:
    """Parse the wire form of a stimulus.

    Raises ValueError on malformed text.
    """
    if not text or not text.strip() or text.strip() == "None":
        return Stimulus.none()
    m = _STIM_RE.match(text)
    if not m:
        raise ValueError(f"Invalid stimulus: {text!r}")
    name, body = m.group(1), m.group(2)
    items = [p.strip() for p in body.split(",") if p.strip()]
    try:
        if name == "Periodic":
            if len(items) != 3:
                raise ValueError(f"Periodic stimulus needs 3 arguments: {text!r}")
            period, start, end = (int(p) for p in items)
            return Stimulus.periodic(period, start, end)
        if name == "Sporadic":
            return Stimulus.sporadic([int(p) for p in items])
        if name == "ValueChanges":
            changes: list[tuple[int, int]] = []
            for item in items:
                t, sep, v = item.partition(":")
                if not sep:
                    raise ValueError(f"Invalid value change {item!r} in {text!r}")
                changes.append((int(t), int(v)))
            return Stimulus.value_changes(changes)
    except ValueError as e:
        raise ValueError(f"Invalid stimulus: {text!r} ({e})") from e
    raise ValueError(f"Unknown stimulus kind {name!r}")
