"""Models: global signals plus an ordered list of automatons."""

from __future__ import annotations

import logging

from rfsm_light.automaton import Automaton
from rfsm_light.checker import FragmentChecker
from rfsm_light.errors import EmptyName, MissingStimulus, NoInputEvent
from rfsm_light.graph import unreachable_states
from rfsm_light.models import IoKind, IoType, Signal
from rfsm_light.stimulus import Stimulus

logger = logging.getLogger(__name__)

AUTOMATON_PREFIX = "A"


class Model:
    """Top-level container of global signals and automatons."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.ios: list[Signal] = []
        self.automatons: list[Automaton] = []
        self._automaton_counter = 0

    def __repr__(self) -> str:
        return f"Model({self.name!r}, ios={len(self.ios)}, automatons={len(self.automatons)})"

    def clear(self) -> None:
        self.name = ""
        self.ios = []
        for a in self.automatons:
            a.clear()
        self.automatons = []
        self._automaton_counter = 0

    # IOs

    def add_io(
        self,
        name: str,
        kind: IoKind,
        type: IoType,
        stimulus: Stimulus | None = None,
    ) -> Signal:
        io = Signal(name, kind, type, stimulus if stimulus is not None else Stimulus())
        logger.debug("Model %s: adding IO %s", self.name, io.to_string())
        self.ios.append(io)
        return io

    def remove_io(self, io: Signal) -> None:
        self.ios = [s for s in self.ios if s is not io]

    def get_io(self, name: str) -> Signal | None:
        for io in self.ios:
            if io.name == name:
                return io
        return None

    def _names(self, kind: IoKind, event: bool | None = None) -> list[str]:
        r = []
        for io in self.ios:
            if io.kind is not kind:
                continue
            if event is True and io.type is not IoType.EVENT:
                continue
            if event is False and io.type is IoType.EVENT:
                continue
            r.append(io.name)
        return r

    def inputs(self) -> list[str]:
        return self._names(IoKind.INPUT)

    def outputs(self) -> list[str]:
        return self._names(IoKind.OUTPUT)

    def shared(self) -> list[str]:
        return self._names(IoKind.SHARED)

    def inp_events(self) -> list[str]:
        return self._names(IoKind.INPUT, event=True)

    def shared_events(self) -> list[str]:
        return self._names(IoKind.SHARED, event=True)

    def inp_non_events(self) -> list[str]:
        return self._names(IoKind.INPUT, event=False)

    def outp_non_events(self) -> list[str]:
        return self._names(IoKind.OUTPUT, event=False)

    def signal_context(self, automaton: Automaton) -> list[Signal]:
        """Signals visible from inside ``automaton``: globals then locals."""
        return list(self.ios) + list(automaton.vars)

    # Automatons

    def add_automaton(self, automaton: Automaton | None = None) -> Automaton:
        if automaton is None:
            automaton = Automaton()
        if not automaton.name:
            automaton.name = f"{AUTOMATON_PREFIX}{self._automaton_counter}"
        self._automaton_counter += 1
        logger.debug("Model %s: adding automaton %s", self.name, automaton.name)
        self.automatons.append(automaton)
        return automaton

    def remove_automaton(self, automaton: Automaton) -> None:
        logger.debug("Model %s: removing automaton %s", self.name, automaton.name)
        self.automatons = [a for a in self.automatons if a is not automaton]

    def get_automaton(self, name: str) -> Automaton | None:
        for a in self.automatons:
            if a.name == name:
                return a
        return None

    # Checking

    def check(self, with_stimuli: bool = False, checker: FragmentChecker | None = None) -> None:
        """Validate the whole model. Raises the first error found."""
        if not self.name:
            raise EmptyName("model")
        if not self.inp_events():
            raise NoInputEvent()
        if with_stimuli:
            for io in self.ios:
                if io.kind is IoKind.INPUT and io.stimulus.is_none:
                    raise MissingStimulus(io.name)
        for a in self.automatons:
            a.check(self.ios, checker)
            for s in unreachable_states(a):
                logger.warning("State %s of automaton %s is unreachable", s.id, a.name)

    def dump(self) -> str:
        lines = [f"Model {self.name}", "  ios ="]
        lines.extend(f"    {io.to_string()}" for io in self.ios)
        lines.append("  automatons =")
        lines.extend(a.dump() for a in self.automatons)
        return "\n".join(lines)
