"""Error taxonomy for rfsm-light.

Four families, all rooted at :class:`RfsmLightError`:

- :class:`GraphError`: structural misuse of an automaton graph.
- :class:`ValidationError`: semantic rule violations found by ``check``.
- :class:`DecodeError`: malformed or inconsistent persisted documents.
- :class:`ExportError`: precondition failures while emitting DOT/RFSM text.
"""

from __future__ import annotations


class RfsmLightError(Exception):
    """Base class for every error raised by rfsm-light."""


# Graph errors


class GraphError(RfsmLightError):
    """Structural graph misuse."""


class StateNotFound(GraphError):
    def __init__(self, state: object, automaton: str = "") -> None:
        self.state = state
        self.automaton = automaton
        where = f" in automaton {automaton}" if automaton else ""
        super().__init__(f"State {state} is not a member{where}")


class TransitionNotFound(GraphError):
    def __init__(self, transition: object, automaton: str = "") -> None:
        self.transition = transition
        self.automaton = automaton
        where = f" in automaton {automaton}" if automaton else ""
        super().__init__(f"Transition {transition} is not a member{where}")


class DuplicateStateId(GraphError):
    def __init__(self, state_id: str, automaton: str = "") -> None:
        self.state_id = state_id
        self.automaton = automaton
        super().__init__(f"Duplicate state id {state_id!r} in automaton {automaton}")


class PseudoStateExists(GraphError):
    """Raised when a second pseudo-state is added to an automaton."""

    def __init__(self, automaton: str = "") -> None:
        self.automaton = automaton
        super().__init__(f"Automaton {automaton} already has a pseudo-state")


class MultiplePseudoStates(GraphError):
    def __init__(self, automaton: str, count: int) -> None:
        self.automaton = automaton
        self.count = count
        super().__init__(
            f"Automaton {automaton} has {count} pseudo-states (at most one allowed)"
        )


class PseudoStateTarget(GraphError):
    """Raised when a transition ends at the pseudo-state."""

    def __init__(self, transition: str, automaton: str = "") -> None:
        self.transition = transition
        self.automaton = automaton
        super().__init__(
            f"Transition {transition} in automaton {automaton} targets the pseudo-state"
        )


class MissingInitialTransition(GraphError):
    def __init__(self, automaton: str) -> None:
        self.automaton = automaton
        super().__init__(f"No initial transition in automaton {automaton}")


class MultipleInitialTransitions(GraphError):
    def __init__(self, automaton: str, count: int) -> None:
        self.automaton = automaton
        self.count = count
        super().__init__(
            f"Automaton {automaton} has {count} initial transitions (exactly one required)"
        )


# Validation errors


class ValidationError(RfsmLightError):
    """Semantic rule violation found by a ``check`` pass."""


class EmptyName(ValidationError):
    def __init__(self, entity: str) -> None:
        self.entity = entity
        super().__init__(f"No name specified for {entity}")


class NoInputEvent(ValidationError):
    def __init__(self) -> None:
        super().__init__("There should be at least one input with type event")


class DanglingState(ValidationError):
    def __init__(self, automaton: str, transition: str) -> None:
        self.automaton = automaton
        self.transition = transition
        super().__init__(
            f"Transition {transition} in automaton {automaton} "
            "refers to a state which is not part of it"
        )


class UnknownEvent(ValidationError):
    def __init__(self, automaton: str, transition: str, event: str) -> None:
        self.automaton = automaton
        self.transition = transition
        self.event = event
        super().__init__(
            f"The triggering event {event!r} for transition {transition} "
            f"in automaton {automaton} is not / no longer part of the enclosing model"
        )


class IllegalFragment(ValidationError):
    def __init__(
        self,
        kind: str,
        text: str,
        diagnostics: list[str] | None = None,
        automaton: str = "",
        transition: str = "",
        state: str = "",
    ) -> None:
        self.kind = kind
        self.text = text
        self.diagnostics = list(diagnostics or [])
        self.automaton = automaton
        self.transition = transition
        self.state = state
        msg = f'Illegal {kind}: "{text}"'
        if transition:
            msg += f" (transition {transition} in automaton {automaton})"
        elif state:
            msg += f" (state {state} in automaton {automaton})"
        if self.diagnostics:
            msg += "\n" + "\n".join(self.diagnostics)
        super().__init__(msg)


# Decode errors


class DecodeError(RfsmLightError):
    """Malformed or inconsistent persisted document."""


class MalformedDocument(DecodeError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Malformed document: {reason}")


class UnknownStateId(DecodeError):
    def __init__(self, automaton: str, state_id: str) -> None:
        self.automaton = automaton
        self.state_id = state_id
        super().__init__(
            f"Transition in automaton {automaton} refers to unknown state id {state_id!r}"
        )


# Export errors


class ExportError(RfsmLightError):
    """Precondition failure at export time."""


class NoInitialState(ExportError):
    def __init__(self, automaton: str) -> None:
        self.automaton = automaton
        super().__init__(f"Initial state undefined in automaton {automaton}")


class NoInitialTransition(ExportError):
    def __init__(self, automaton: str) -> None:
        self.automaton = automaton
        super().__init__(f"Initial transition undefined in automaton {automaton}")


class MissingStimulus(ValidationError, ExportError):
    """An input signal has no stimulus. Raised both by ``check`` and by the RFSM emitter."""

    def __init__(self, signal: str) -> None:
        self.signal = signal
        super().__init__(f"No stimulus for input {signal}")
