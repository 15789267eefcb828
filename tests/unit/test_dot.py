"""Unit tests for rfsm_light.exporters.dot."""

from rfsm_light.automaton import Automaton
from rfsm_light.codec import decode, encode
from rfsm_light.exporters.dot import (
    export_automaton_dot,
    export_dot,
    export_dots,
    qual_id,
    transition_label,
)
from rfsm_light.model import Model


class TestTransitionLabel:
    def test_two_lines(self) -> None:
        assert transition_label("tick.x<5/x:=x+1") == "tick.x<5\n________\nx:=x+1"

    def test_width_from_longer_part(self) -> None:
        assert transition_label("e/long_action") == "e\n___________\nlong_action"

    def test_padding(self) -> None:
        assert transition_label("a/b", " ") == " a \n _ \n b "

    def test_no_slash_unchanged(self) -> None:
        assert transition_label("tick.x<5") == "tick.x<5"

    def test_initial_label_unchanged(self) -> None:
        assert transition_label("/x:=0") == "/x:=0"

    def test_several_slashes_unchanged(self) -> None:
        assert transition_label("a/b/c") == "a/b/c"


class TestExportAutomaton:
    def test_nodes_and_edges(self, counter_model: Model) -> None:
        lines = export_automaton_dot(counter_model.automatons[0])
        assert '_vars_A0 [label="shared x: int", shape=rect, style=rounded]' in lines
        assert "_init_A0 [shape=point]" in lines
        assert 'S0_A0 [label="S0", shape=circle, style=solid]' in lines
        assert '_init_A0 -> S0_A0 [label="/x:=0"]' in lines
        assert 'S0_A0 -> S0_A0 [label="tick.x<5\\n________\\nx:=x+1"]' in lines

    def test_attrs_in_label(self) -> None:
        a = Automaton("B")
        a.add_state("Run", ["busy=1", "led=0"])
        lines = export_automaton_dot(a)
        assert lines == ['Run_B [label="Run\\nbusy=1\\nled=0", shape=circle, style=solid]']

    def test_quotes_escaped(self) -> None:
        a = Automaton("B")
        s = a.add_state("S")
        a.add_transition(s, s, 'e', ['m="x"'])
        assert 'S_B -> S_B [label="e.m=\\"x\\""]' in export_automaton_dot(a)

    def test_qual_id(self) -> None:
        assert qual_id(Automaton("A3"), "S1") == "S1_A3"


class TestExportModel:
    def test_single_document(self, counter_model: Model) -> None:
        text = export_dot(counter_model)
        assert text.startswith("digraph counter {\n")
        assert "layout = dot" in text
        assert '_ios [label="input tick: event", shape=rect, style=solid]' in text
        assert "subgraph cluster_A0 {" in text
        assert "label = A0" in text
        assert text.count("shape=circle") == 1
        assert text.count("S0_A0 -> S0_A0") == 1
        assert text.endswith("}\n")

    def test_unnamed_model(self, counter_model: Model) -> None:
        counter_model.name = ""
        assert export_dot(counter_model).startswith("digraph main {")

    def test_no_captions(self, counter_model: Model) -> None:
        text = export_dot(counter_model, captions=False)
        assert "_ios" not in text
        assert "_vars_A0" not in text

    def test_namespacing(self, sample_doc: dict) -> None:
        m = decode(sample_doc)
        text = export_dot(m)
        assert "_init_main [shape=point]" in text
        assert "_init_watch [shape=point]" in text

    def test_one_file_per_automaton(self, sample_doc: dict) -> None:
        docs = export_dots(decode(sample_doc))
        assert list(docs) == ["main", "watch"]
        assert docs["watch"].startswith("digraph watch {")
        assert "Idle_main" not in docs["watch"]

    def test_does_not_mutate(self, counter_model: Model) -> None:
        before = encode(counter_model)
        export_dot(counter_model)
        export_dots(counter_model)
        assert encode(counter_model) == before

    def test_never_fails_without_initial_state(self) -> None:
        m = Model("m")
        a = m.add_automaton()
        a.add_state("S")
        assert "S_A0" in export_dot(m)
