"""Graphviz DOT export for models and automatons."""

from __future__ import annotations

from rfsm_light.automaton import Automaton
from rfsm_light.model import Model
from rfsm_light.models import string_of_signals

_PREAMBLE = [
    "layout = dot",
    "rankdir = UD",
    'size = "8.5,11"',
    "center = 1",
    'nodesep = "0.350000"',
    'ranksep = "0.400000"',
    "fontsize = 14",
    "mindist=1.0",
]


def transition_label(label: str, lrpad: str = "") -> str:
    """Lay out ``trigger/actions`` on two lines separated by an underline rule.

    Labels that do not split into exactly two parts on ``/`` are returned
    unchanged.
    """
    parts = [p for p in label.split("/") if p]
    if len(parts) != 2:
        return label
    top, bottom = parts
    n = max(len(top), len(bottom))
    return (
        f"{lrpad}{top}{lrpad}\n"
        f"{lrpad}{'_' * n}{lrpad}\n"
        f"{lrpad}{bottom}{lrpad}"
    )


def qual_id(automaton: Automaton, state_id: str) -> str:
    """Node identifier namespaced by automaton name."""
    return f"{state_id}_{automaton.name}"


def export_automaton_dot(automaton: Automaton, with_vars: bool = True) -> list[str]:
    """Return the DOT node and edge lines for one automaton."""
    lines: list[str] = []
    if with_vars and automaton.vars:
        lines.append(
            f'{qual_id(automaton, "_vars")} '
            f'[label="{string_of_signals(automaton.vars)}", shape=rect, style=rounded]'
        )
    for s in automaton.states():
        if s.is_pseudo:
            lines.append(f"{qual_id(automaton, s.id)} [shape=point]")
        else:
            lbl = "\\n".join([_escape(s.id)] + [_escape(a) for a in s.attrs])
            lines.append(f'{qual_id(automaton, s.id)} [label="{lbl}", shape=circle, style=solid]')
    for t in automaton.transitions():
        label = _escape(transition_label(t.label))
        lines.append(
            f"{qual_id(automaton, t.src.id)} -> {qual_id(automaton, t.dst.id)} "
            f'[label="{label}"]'
        )
    return lines


def _header(name: str) -> list[str]:
    return [f"digraph {name} {{"] + _PREAMBLE


def _ios_node(model: Model) -> str:
    return f'_ios [label="{string_of_signals(model.ios)}", shape=rect, style=solid]'


def export_dot(model: Model, captions: bool = True) -> str:
    """Export a whole model as a single DOT document, one cluster per automaton."""
    lines = _header(model.name or "main")
    if captions:
        lines.append(_ios_node(model))
    for a in model.automatons:
        lines.append(f"subgraph cluster_{a.name} {{")
        lines.append(f"label = {a.name}")
        lines.extend(export_automaton_dot(a, with_vars=captions))
        lines.append("}")
    lines.append("}")
    return "\n".join(lines) + "\n"


def export_dots(model: Model, captions: bool = True) -> dict[str, str]:
    """Export each automaton as its own DOT document, keyed by automaton name."""
    docs: dict[str, str] = {}
    for a in model.automatons:
        lines = _header(a.name)
        if captions and model.ios:
            lines.append(_ios_node(model))
        lines.extend(export_automaton_dot(a, with_vars=captions))
        lines.append("}")
        docs[a.name] = "\n".join(lines) + "\n"
    return docs


def _escape(text: str) -> str:
    """Escape a string for a DOT quoted label."""
    return text.replace('"', '\\"').replace("\n", "\\n")
