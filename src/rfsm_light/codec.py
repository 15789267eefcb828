"""JSON persistence of models (``.fsd`` files).

Guards, actions and state attributes are stored as single comma-joined
strings for compatibility with existing files.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from rfsm_light.automaton import Automaton
from rfsm_light.errors import GraphError, MalformedDocument, UnknownStateId
from rfsm_light.model import Model
from rfsm_light.models import PSEUDO_STATE_ID, IoKind, IoType, Location, Signal, State
from rfsm_light.stimulus import Stimulus, parse_stimulus

logger = logging.getLogger(__name__)


def _split(text: str) -> list[str]:
    return [p for p in text.split(",") if p]


def _field(obj: Any, key: str, types: type | tuple[type, ...], where: str) -> Any:
    if not isinstance(obj, dict):
        raise MalformedDocument(f"{where}: expected an object")
    if key not in obj:
        raise MalformedDocument(f"{where}: missing field {key!r}")
    value = obj[key]
    if isinstance(value, bool) or not isinstance(value, types):
        raise MalformedDocument(f"{where}: field {key!r} has wrong type")
    return value


def _list_field(obj: Any, key: str, where: str) -> list[Any]:
    return _field(obj, key, list, where)


# Decoding


def _decode_signal(obj: Any, where: str) -> Signal:
    name = _field(obj, "name", str, where)
    try:
        kind = IoKind.of_string(_field(obj, "kind", str, where))
        type_ = IoType.of_string(_field(obj, "type", str, where))
        stim = parse_stimulus(_field(obj, "stim", str, where))
    except ValueError as e:
        raise MalformedDocument(f"{where}: {e}") from e
    return Signal(name, kind, type_, stim)


def _decode_var(obj: Any, where: str) -> Signal:
    name = _field(obj, "name", str, where)
    try:
        type_ = IoType.of_string(_field(obj, "type", str, where))
    except ValueError as e:
        raise MalformedDocument(f"{where}: {e}") from e
    return Signal(name, IoKind.SHARED, type_, Stimulus())


def decode_automaton(obj: Any, index: int = 0) -> Automaton:
    """Build a fresh Automaton from its JSON description."""
    where = f"automaton #{index}"
    name = _field(obj, "name", str, where)
    where = f"automaton {name or index}"
    automaton = Automaton(name)

    states: dict[str, State] = {}
    try:
        for i, js in enumerate(_list_field(obj, "states", where)):
            swhere = f"{where}, state #{i}"
            sid = _field(js, "id", str, swhere)
            attrs = _split(_field(js, "attr", str, swhere))
            pos = (
                float(_field(js, "x", (int, float), swhere)),
                float(_field(js, "y", (int, float), swhere)),
            )
            if sid in states:
                raise MalformedDocument(f"{swhere}: duplicate state id {sid!r}")
            if sid == PSEUDO_STATE_ID:
                states[sid] = automaton.add_pseudo_state(pos)
            else:
                states[sid] = automaton.add_state(sid, attrs, pos)
    except GraphError as e:
        raise MalformedDocument(f"{where}: {e}") from e

    for i, jt in enumerate(_list_field(obj, "transitions", where)):
        twhere = f"{where}, transition #{i}"
        src_id = _field(jt, "src_state", str, twhere)
        dst_id = _field(jt, "dst_state", str, twhere)
        event = _field(jt, "event", str, twhere)
        guards = _split(_field(jt, "guard", str, twhere))
        actions = _split(_field(jt, "actions", str, twhere))
        location = Location.of_int(_field(jt, "location", int, twhere))
        for sid in (src_id, dst_id):
            if sid not in states:
                raise UnknownStateId(name, sid)
        try:
            automaton.add_transition(
                states[src_id], states[dst_id], event, guards, actions, location
            )
        except GraphError as e:
            raise MalformedDocument(f"{twhere}: {e}") from e

    for i, jv in enumerate(_list_field(obj, "vars", where)):
        automaton.vars.append(_decode_var(jv, f"{where}, var #{i}"))

    return automaton


def load_into(model: Model, doc: Any) -> Model:
    """Replace the content of ``model`` with the one described by ``doc``.

    All-or-nothing: everything is decoded into fresh objects first, and
    ``model`` is only touched once decoding has fully succeeded.
    """
    name = _field(doc, "name", str, "model")
    ios = [
        _decode_signal(jio, f"io #{i}")
        for i, jio in enumerate(_list_field(doc, "ios", "model"))
    ]
    automatons = [
        decode_automaton(ja, i)
        for i, ja in enumerate(_list_field(doc, "automatons", "model"))
    ]

    model.clear()
    model.name = name
    model.ios.extend(ios)
    for a in automatons:
        model.add_automaton(a)
    logger.debug("Loaded model %s: %d IOs, %d automatons", name, len(ios), len(automatons))
    return model


def decode(doc: Any) -> Model:
    return load_into(Model(), doc)


def loads(text: str, model: Model | None = None) -> Model:
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedDocument(f"invalid JSON: {e}") from e
    return load_into(model if model is not None else Model(), doc)


def read_file(path: Path | str, model: Model | None = None) -> Model:
    """Read a model from a ``.fsd`` file."""
    path = Path(path)
    logger.debug("Reading model from file %s", path)
    return loads(path.read_text(encoding="utf-8"), model)


# Encoding


def _encode_signals(signals: list[Signal], what: str, full: bool) -> list[dict[str, Any]]:
    r: list[dict[str, Any]] = []
    for i, io in enumerate(signals, 1):
        if not io.name:
            logger.warning("%s #%d has no name. Ignoring it", what, i)
            continue
        if full:
            r.append({
                "name": io.name,
                "kind": io.kind.value,
                "type": io.type.value,
                "stim": io.stimulus.to_string(),
            })
        else:
            r.append({"name": io.name, "type": io.type.value})
    return r


def encode_automaton(automaton: Automaton) -> dict[str, Any]:
    return {
        "name": automaton.name,
        "vars": _encode_signals(automaton.vars, "Var", full=False),
        "states": [
            {
                "id": s.id,
                "attr": ",".join(s.attrs),
                "x": s.position[0],
                "y": s.position[1],
            }
            for s in automaton.states()
        ],
        "transitions": [
            {
                "src_state": t.src.id,
                "dst_state": t.dst.id,
                "event": t.event,
                "guard": ",".join(t.guards),
                "actions": ",".join(t.actions),
                "location": int(t.location),
            }
            for t in automaton.transitions()
        ],
    }


def encode(model: Model) -> dict[str, Any]:
    """Return the JSON document describing ``model``. Never fails."""
    return {
        "name": model.name,
        "ios": _encode_signals(model.ios, "IO", full=True),
        "automatons": [encode_automaton(a) for a in model.automatons],
    }


def dumps(model: Model, indent: int = 2) -> str:
    return json.dumps(encode(model), indent=indent)


def write_text_atomic(path: Path | str, text: str) -> Path:
    """Write ``text`` to a temporary sibling of ``path``, then rename it over ``path``."""
    path = Path(path)
    fd, tmp = tempfile.mkstemp(dir=path.parent or ".", prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp, path)
    except BaseException:
        os.unlink(tmp)
        raise
    return path


def save_file(model: Model, path: Path | str) -> Path:
    """Save a model to a ``.fsd`` file."""
    logger.debug("Saving model to file %s", path)
    return write_text_atomic(path, dumps(model) + "\n")
