"""Unit tests for rfsm_light.models."""

import pytest

from rfsm_light.models import (
    PSEUDO_STATE_ID,
    IoKind,
    IoType,
    Location,
    NormalState,
    PseudoState,
    Signal,
    ToolConfig,
    Transition,
    string_of_signals,
)
from rfsm_light.stimulus import Stimulus


class TestSignal:
    def test_defaults(self) -> None:
        s = Signal("out1", IoKind.OUTPUT, IoType.BOOL)
        assert s.stimulus.is_none
        assert not s.is_input_event

    def test_input_event(self) -> None:
        s = Signal("tick", IoKind.INPUT, IoType.EVENT, Stimulus.periodic(10, 0, 100))
        assert s.is_input_event
        assert s.to_string() == "input tick: event = Periodic(10,0,100)"
        assert s.to_string(with_stim=False) == "input tick: event"

    def test_copy_is_independent(self) -> None:
        s = Signal("v", IoKind.SHARED, IoType.INT)
        c = s.copy()
        c.name = "w"
        assert s.name == "v"

    def test_kind_strings(self) -> None:
        assert IoKind.of_string("shared") is IoKind.SHARED
        assert IoKind.SHARED.rfsm == "inout"
        assert IoKind.INPUT.rfsm == "in"
        with pytest.raises(ValueError, match="Invalid IO kind"):
            IoKind.of_string("var")

    def test_type_strings(self) -> None:
        assert IoType.of_string("bool") is IoType.BOOL
        with pytest.raises(ValueError, match="Invalid IO type"):
            IoType.of_string("float")

    def test_string_of_signals(self) -> None:
        sigs = [
            Signal("a", IoKind.INPUT, IoType.EVENT),
            Signal("b", IoKind.OUTPUT, IoType.INT),
        ]
        assert string_of_signals(sigs) == "input a: event\\noutput b: int"


class TestLocation:
    def test_known(self) -> None:
        assert Location.of_int(3) is Location.EAST

    def test_unknown_defaults_to_none(self) -> None:
        assert Location.of_int(42) is Location.NONE
        assert Location.of_int(-1) is Location.NONE


class TestStates:
    def test_normal_state(self) -> None:
        s = NormalState("S0", ["o=1"])
        assert not s.is_pseudo
        assert str(s) == "S0[o=1]"

    def test_pseudo_state(self) -> None:
        p = PseudoState()
        assert p.is_pseudo
        assert p.id == PSEUDO_STATE_ID
        assert p.attrs == []

    def test_identity_equality(self) -> None:
        assert NormalState("S0") != NormalState("S0")


class TestTransition:
    def test_label_full(self) -> None:
        t = Transition(NormalState("A"), NormalState("B"), "e", ["x>0", "y"], ["x:=0", "z"])
        assert t.label == "e.x>0.y/x:=0;z"

    def test_label_event_only(self) -> None:
        t = Transition(NormalState("A"), NormalState("B"), "e")
        assert t.label == "e"

    def test_initial(self) -> None:
        t = Transition(PseudoState(), NormalState("B"))
        assert t.is_initial
        assert not t.is_self_loop

    def test_self_loop(self) -> None:
        s = NormalState("A")
        t = Transition(s, s, "e")
        assert t.is_self_loop
        assert not t.is_initial
        assert str(t) == "A -> A [e]"


class TestToolConfig:
    def test_defaults(self) -> None:
        c = ToolConfig()
        assert c.compiler == ""
        assert c.dot_captions is True
        assert c.check_stimuli is False
