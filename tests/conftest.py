"""Shared test fixtures for rfsm-light."""

import json
from pathlib import Path

import pytest

from rfsm_light.model import Model
from rfsm_light.models import IoKind, IoType, Location
from rfsm_light.stimulus import Stimulus


def build_counter_model() -> Model:
    """One input event ``tick`` driving a self-looping counter automaton ``A0``."""
    model = Model("counter")
    model.add_io("tick", IoKind.INPUT, IoType.EVENT, Stimulus.periodic(10, 0, 100))
    a = model.add_automaton()
    a.add_var("x", IoType.INT)
    init = a.add_pseudo_state((50.0, 10.0))
    s0 = a.add_state("S0", position=(50.0, 100.0))
    a.add_transition(init, s0, actions=["x:=0"])
    a.add_transition(s0, s0, "tick", ["x<5"], ["x:=x+1"], Location.EAST)
    return model


@pytest.fixture
def counter_model() -> Model:
    return build_counter_model()


@pytest.fixture
def sample_doc() -> dict:
    """Return a two-state, two-automaton model document."""
    return {
        "name": "ctrl",
        "ios": [
            {"name": "clk", "kind": "input", "type": "event", "stim": "Periodic(10,0,80)"},
            {"name": "start", "kind": "input", "type": "bool", "stim": "ValueChanges(0:0,25:1)"},
            {"name": "go", "kind": "input", "type": "event", "stim": "Sporadic(15,45)"},
            {"name": "busy", "kind": "output", "type": "bool", "stim": ""},
            {"name": "done", "kind": "shared", "type": "event", "stim": ""},
        ],
        "automatons": [
            {
                "name": "main",
                "vars": [{"name": "k", "type": "int"}],
                "states": [
                    {"id": "_init", "attr": "", "x": 20, "y": 20},
                    {"id": "Idle", "attr": "busy=0", "x": 100, "y": 100},
                    {"id": "Run", "attr": "busy=1", "x": 100, "y": 250},
                ],
                "transitions": [
                    {"src_state": "_init", "dst_state": "Idle", "event": "",
                     "guard": "", "actions": "k:=0", "location": 0},
                    {"src_state": "Idle", "dst_state": "Run", "event": "clk",
                     "guard": "start=1", "actions": "k:=0", "location": 0},
                    {"src_state": "Run", "dst_state": "Run", "event": "clk",
                     "guard": "k<8", "actions": "k:=k+1", "location": 2},
                    {"src_state": "Run", "dst_state": "Idle", "event": "clk",
                     "guard": "k=8", "actions": "done", "location": 0},
                ],
            },
            {
                "name": "watch",
                "vars": [],
                "states": [
                    {"id": "_init", "attr": "", "x": 0, "y": 0},
                    {"id": "W", "attr": "", "x": 0, "y": 50},
                ],
                "transitions": [
                    {"src_state": "_init", "dst_state": "W", "event": "",
                     "guard": "", "actions": "", "location": 0},
                    {"src_state": "W", "dst_state": "W", "event": "done",
                     "guard": "", "actions": "", "location": 9},
                ],
            },
        ],
    }


@pytest.fixture
def sample_fsd_file(tmp_path: Path, sample_doc: dict) -> Path:
    """Write the sample document to a .fsd file and return the path."""
    path = tmp_path / "ctrl.fsd"
    path.write_text(json.dumps(sample_doc, indent=2))
    return path
