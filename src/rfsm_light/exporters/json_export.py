"""JSON export for models."""

from __future__ import annotations

from rfsm_light.codec import dumps
from rfsm_light.model import Model


def export_json(model: Model, indent: int = 2) -> str:
    """Export a Model as a JSON string, in the ``.fsd`` file format."""
    return dumps(model, indent=indent)
