"""Graph analysis of automatons, built on networkx."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import networkx as nx

if TYPE_CHECKING:
    from rfsm_light.automaton import Automaton
    from rfsm_light.models import State


@dataclass
class AutomatonSummary:
    """Structural facts about one automaton."""

    name: str
    states: list[str] = field(default_factory=list)
    transitions: int = 0
    init_state: str | None = None
    unreachable: list[str] = field(default_factory=list)
    terminal: list[str] = field(default_factory=list)
    cycles: list[list[str]] = field(default_factory=list)


def to_networkx(automaton: Automaton) -> nx.MultiDiGraph:
    """Convert an automaton to a MultiDiGraph keyed by state keys.

    Parallel transitions between the same pair of states are kept as
    distinct edges.
    """
    g: nx.MultiDiGraph = nx.MultiDiGraph()
    for s in automaton.states():
        g.add_node(s.key, id=s.id, pseudo=s.is_pseudo)
    for t in automaton.transitions():
        g.add_edge(t.src.key, t.dst.key, key=t.key, event=t.event, label=t.label)
    return g


def reachable_states(automaton: Automaton) -> list[State]:
    """States reachable from the initial state, in automaton order."""
    init = automaton.init_state()
    if init is None:
        return []
    g = to_networkx(automaton)
    keys = nx.descendants(g, init.key) | {init.key}
    return [s for s in automaton.states() if s.key in keys and not s.is_pseudo]


def unreachable_states(automaton: Automaton) -> list[State]:
    reachable = {s.key for s in reachable_states(automaton)}
    return [s for s in automaton.states() if not s.is_pseudo and s.key not in reachable]


def terminal_states(automaton: Automaton) -> list[State]:
    """Non-pseudo states with no outgoing transition other than self-loops."""
    r = []
    for s in automaton.states():
        if s.is_pseudo:
            continue
        if not any(t.src is s and t.dst is not s for t in automaton.transitions_of(s)):
            r.append(s)
    return r


def summarize(automaton: Automaton) -> AutomatonSummary:
    g = nx.DiGraph(to_networkx(automaton))
    ids = nx.get_node_attributes(g, "id")
    init = automaton.init_state()
    return AutomatonSummary(
        name=automaton.name,
        states=[s.id for s in automaton.states() if not s.is_pseudo],
        transitions=len(automaton.transitions()),
        init_state=init.id if init is not None else None,
        unreachable=[s.id for s in unreachable_states(automaton)],
        terminal=[s.id for s in terminal_states(automaton)],
        cycles=[sorted(ids[k] for k in c) for c in nx.simple_cycles(g)],
    )
