"""Automatons: one FSM graph of states, transitions and local variables.

States and transitions live in an arena keyed by stable integer handles.
Each state keeps the set of keys of its incident transitions; transitions
hold plain references to their two endpoints.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from rfsm_light.checker import AcceptAllChecker, FragmentChecker
from rfsm_light.errors import (
    DanglingState,
    DuplicateStateId,
    EmptyName,
    IllegalFragment,
    MissingInitialTransition,
    MultipleInitialTransitions,
    MultiplePseudoStates,
    PseudoStateExists,
    PseudoStateTarget,
    StateNotFound,
    TransitionNotFound,
    UnknownEvent,
)
from rfsm_light.models import (
    PSEUDO_STATE_ID,
    IoKind,
    IoType,
    Location,
    NormalState,
    PseudoState,
    Signal,
    State,
    Transition,
)

logger = logging.getLogger(__name__)


class Automaton:
    """A single finite-state machine within a Model."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.vars: list[Signal] = []
        self._states: dict[int, State] = {}
        self._transitions: dict[int, Transition] = {}
        self._next_key = 0
        self._listeners: list[Callable[[], None]] = []

    def __repr__(self) -> str:
        return (
            f"Automaton({self.name!r}, states={len(self._states)}, "
            f"transitions={len(self._transitions)})"
        )

    # Change notification

    def on_modified(self, callback: Callable[[], None]) -> None:
        """Register a callback run after each structural deletion."""
        self._listeners.append(callback)

    def _modified(self) -> None:
        for callback in self._listeners:
            callback()

    def _new_key(self) -> int:
        key = self._next_key
        self._next_key += 1
        return key

    # Local variables

    def add_var(self, name: str, type: IoType) -> Signal:
        logger.debug("Automaton %s: adding var %s: %s", self.name, name, type.value)
        var = Signal(name, IoKind.SHARED, type)
        self.vars.append(var)
        return var

    def remove_var(self, var: Signal) -> None:
        self.vars = [v for v in self.vars if v is not var]

    def var_names(self) -> list[str]:
        return [v.name for v in self.vars]

    # States

    def states(self) -> list[State]:
        return list(self._states.values())

    def state(self, key: int) -> State:
        try:
            return self._states[key]
        except KeyError:
            raise StateNotFound(key, self.name) from None

    def get_state(self, state_id: str) -> State | None:
        for s in self._states.values():
            if s.id == state_id:
                return s
        return None

    def has_state(self, state: State) -> bool:
        return self._states.get(state.key) is state

    def pseudo_state(self) -> PseudoState | None:
        for s in self._states.values():
            if isinstance(s, PseudoState):
                return s
        return None

    def has_pseudo_state(self) -> bool:
        return self.pseudo_state() is not None

    def _insert_state(self, state: State) -> State:
        state.key = self._new_key()
        state.incident = set()
        self._states[state.key] = state
        return state

    def add_state(
        self,
        state_id: str,
        attrs: Iterable[str] = (),
        position: tuple[float, float] = (0.0, 0.0),
    ) -> NormalState:
        if state_id == PSEUDO_STATE_ID or self.get_state(state_id) is not None:
            raise DuplicateStateId(state_id, self.name)
        logger.debug("Automaton %s: adding state %s", self.name, state_id)
        state = NormalState(state_id, list(attrs), position)
        self._insert_state(state)
        return state

    def add_pseudo_state(self, position: tuple[float, float] = (0.0, 0.0)) -> PseudoState:
        if self.has_pseudo_state():
            raise PseudoStateExists(self.name)
        logger.debug("Automaton %s: adding pseudo-state", self.name)
        state = PseudoState(position)
        self._insert_state(state)
        return state

    def remove_state(self, state: State) -> None:
        """Remove a state and every transition incident to it."""
        if not self.has_state(state):
            raise StateNotFound(state, self.name)
        logger.debug("Automaton %s: removing state %s", self.name, state)
        for tkey in sorted(state.incident):
            self._detach(self._transitions[tkey])
        del self._states[state.key]
        self._modified()

    # Transitions

    def transitions(self) -> list[Transition]:
        return list(self._transitions.values())

    def has_transition(self, transition: Transition) -> bool:
        return self._transitions.get(transition.key) is transition

    def transitions_of(self, state: State) -> list[Transition]:
        """Transitions incident to ``state``, in insertion order."""
        return [self._transitions[k] for k in sorted(state.incident)]

    def transitions_between(self, src: State, dst: State) -> list[Transition]:
        return [t for t in self.transitions_of(src) if t.src is src and t.dst is dst]

    def add_transition(
        self,
        src: State,
        dst: State,
        event: str = "",
        guards: Iterable[str] = (),
        actions: Iterable[str] = (),
        location: Location = Location.NONE,
    ) -> Transition:
        for s in (src, dst):
            if not self.has_state(s):
                raise StateNotFound(s, self.name)
        transition = Transition(src, dst, event, list(guards), list(actions), location)
        if dst.is_pseudo:
            raise PseudoStateTarget(str(transition), self.name)
        transition.key = self._new_key()
        self._transitions[transition.key] = transition
        src.incident.add(transition.key)
        if dst is not src:
            dst.incident.add(transition.key)
        logger.debug("Automaton %s: adding transition %s", self.name, transition)
        return transition

    def _detach(self, transition: Transition) -> None:
        transition.src.incident.discard(transition.key)
        transition.dst.incident.discard(transition.key)
        del self._transitions[transition.key]

    def remove_transition(self, transition: Transition) -> None:
        """Remove a transition.

        Removing the initial transition removes its pseudo-state too.
        """
        if not self.has_transition(transition):
            raise TransitionNotFound(transition, self.name)
        logger.debug("Automaton %s: removing transition %s", self.name, transition)
        if transition.is_initial and self.has_state(transition.src):
            self.remove_state(transition.src)
            return
        self._detach(transition)
        self._modified()

    def init_transition(self) -> Transition | None:
        for t in self._transitions.values():
            if t.is_initial:
                return t
        return None

    def init_state(self) -> State | None:
        t = self.init_transition()
        return t.dst if t is not None else None

    def clear(self) -> None:
        self.name = ""
        self.vars = []
        self._states.clear()
        self._transitions.clear()

    # Checking

    def check_structure(self) -> None:
        """Check graph-level invariants (pseudo-state and initial transition)."""
        pseudos = [s for s in self._states.values() if s.is_pseudo]
        if len(pseudos) > 1:
            raise MultiplePseudoStates(self.name, len(pseudos))
        for t in self._transitions.values():
            if t.dst.is_pseudo:
                raise PseudoStateTarget(str(t), self.name)
        initials = [t for t in self._transitions.values() if t.is_initial]
        if not initials:
            raise MissingInitialTransition(self.name)
        if len(initials) > 1:
            raise MultipleInitialTransitions(self.name, len(initials))

    def check(
        self,
        global_ios: list[Signal],
        checker: FragmentChecker | None = None,
    ) -> None:
        """Validate this automaton against the model's global signals.

        Fail-fast: raises the first error found.
        """
        if not self.name:
            raise EmptyName("automaton")
        self.check_structure()
        events = {
            io.name
            for io in global_ios
            if io.type is IoType.EVENT and io.kind in (IoKind.INPUT, IoKind.SHARED)
        }
        if checker is None:
            checker = AcceptAllChecker()
        checker.bind(list(global_ios) + self.vars)
        for s in self._states.values():
            for attr in s.attrs:
                if not checker.check_state_valuation(attr):
                    raise IllegalFragment(
                        "state valuation", attr, checker.get_errors(), self.name, state=s.id
                    )
        for t in self._transitions.values():
            self._check_transition(t, events, checker)

    def _check_transition(
        self, t: Transition, events: set[str], checker: FragmentChecker
    ) -> None:
        if not self.has_state(t.src) or not self.has_state(t.dst):
            raise DanglingState(self.name, str(t))
        if not t.is_initial and t.event not in events:
            raise UnknownEvent(self.name, str(t), t.event)
        for guard in t.guards:
            if not checker.check_guard(guard):
                raise IllegalFragment(
                    "guard", guard, checker.get_errors(), self.name, str(t)
                )
        for action in t.actions:
            if not checker.check_action(action):
                raise IllegalFragment(
                    "action", action, checker.get_errors(), self.name, str(t)
                )

    # Copying

    def duplicate(self) -> Automaton:
        """Return a deep, independent copy with the same name."""
        logger.debug("Duplicating automaton %s", self.name)
        copy = Automaton(self.name)
        mapping: dict[int, State] = {}
        for s in self._states.values():
            if isinstance(s, PseudoState):
                mapping[s.key] = copy._insert_state(PseudoState(s.position))
            else:
                mapping[s.key] = copy._insert_state(
                    NormalState(s.id, list(s.attrs), s.position)
                )
        for t in self._transitions.values():
            copy.add_transition(
                mapping[t.src.key],
                mapping[t.dst.key],
                t.event,
                t.guards,
                t.actions,
                t.location,
            )
        copy.vars = [v.copy() for v in self.vars]
        return copy

    def dump(self) -> str:
        """Human-readable summary, for debugging."""
        lines = [f"Automaton {self.name}"]
        lines.append("  vars = " + ", ".join(v.to_string() for v in self.vars))
        lines.append("  states = " + ", ".join(str(s) for s in self._states.values()))
        lines.append("  transitions =")
        lines.extend(f"    {t}" for t in self._transitions.values())
        init = self.init_state()
        if init is not None:
            lines.append(f"  initial state = {init}")
        return "\n".join(lines)
