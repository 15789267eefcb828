"""RFSM text export.

The emitted program has one ``fsm model`` block per automaton, followed by
the global I/O declarations (with stimuli) and, optionally, a testbench
made of one instance per automaton.
"""

from __future__ import annotations

from rfsm_light.automaton import Automaton
from rfsm_light.errors import MissingStimulus, NoInitialState, NoInitialTransition
from rfsm_light.model import Model
from rfsm_light.models import IoKind, Signal, State, Transition

INDENT = "  "


def string_of_state(state: State) -> str:
    if state.attrs:
        return f"{state.id} where {' and '.join(state.attrs)}"
    return state.id


def string_of_transition(t: Transition) -> str:
    s = f"{t.src.id} -> {t.dst.id}"
    if t.event:
        s += f" on {t.event}"
    if t.guards:
        guards = t.guards if len(t.guards) == 1 else [f"({g})" for g in t.guards]
        s += " when " + ".".join(guards)
    if t.actions:
        s += " with " + ",".join(t.actions)
    return s


def string_of_vars(vs: list[Signal]) -> str:
    return ", ".join(f"{v.name}: {v.type.value}" for v in vs)


def export_automaton_model(automaton: Automaton, global_ios: list[Signal]) -> list[str]:
    """Return the lines of the ``fsm model`` block for one automaton.

    Every global signal becomes a model parameter, whether or not the
    automaton uses it.
    """
    init_transition = automaton.init_transition()
    if init_transition is None:
        raise NoInitialTransition(automaton.name)
    init_state = init_transition.dst
    if not automaton.has_state(init_state) or init_state.is_pseudo:
        raise NoInitialState(automaton.name)

    lines: list[str] = []
    if global_ios:
        lines.append(f"fsm model {automaton.name}(")
        params = [f"{INDENT}{io.kind.rfsm} {io.name}: {io.type.value}" for io in global_ios]
        lines.append(",\n".join(params))
        lines.append(f"{INDENT})")
    else:
        lines.append(f"fsm model {automaton.name}()")
    lines.append("{")

    states = [string_of_state(s) for s in automaton.states() if not s.is_pseudo]
    lines.append(f"{INDENT}states: {', '.join(states)};")

    if automaton.vars:
        lines.append(f"{INDENT}vars: {string_of_vars(automaton.vars)};")

    trans = [string_of_transition(t) for t in automaton.transitions() if not t.is_initial]
    if trans:
        lines.append(f"{INDENT}trans:")
        lines.extend(f"{INDENT}| {t}" for t in trans)
        lines[-1] += ";"
    else:
        lines.append(f"{INDENT}trans: ;")

    itrans = f"| -> {init_state.id}"
    if init_transition.actions:
        itrans += " with " + ",".join(init_transition.actions)
    lines.append(f"{INDENT}itrans: {itrans};")
    lines.append("}")
    return lines


def export_ios(global_ios: list[Signal]) -> list[str]:
    lines: list[str] = []
    for io in global_ios:
        if io.kind is IoKind.INPUT:
            stim = io.stimulus.to_rfsm()
            if not stim:
                raise MissingStimulus(io.name)
            lines.append(f"input {io.name} : {io.type.value} = {stim}")
        elif io.kind is IoKind.OUTPUT:
            lines.append(f"output {io.name} : {io.type.value}")
        else:
            lines.append(f"shared {io.name} : {io.type.value}")
    return lines


def export_instance(automaton: Automaton, global_ios: list[Signal]) -> str:
    args = ", ".join(io.name for io in global_ios)
    return f"fsm {automaton.name} = {automaton.name}({args})"


def export_rfsm(model: Model, testbench: bool = False) -> str:
    """Export ``model`` as RFSM source text.

    Raises an ExportError on the first failed precondition; no partial
    text is ever returned.
    """
    lines: list[str] = []
    for a in model.automatons:
        lines.extend(export_automaton_model(a, model.ios))
        lines.append("")
    lines.extend(export_ios(model.ios))
    lines.append("")
    if testbench:
        lines.append("")
        lines.extend(export_instance(a, model.ios) for a in model.automatons)
    return "\n".join(lines) + "\n"
