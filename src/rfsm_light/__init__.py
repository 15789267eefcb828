"""rfsm-light: FSM model core with validation and DOT / RFSM / JSON export."""

__version__ = "2.0.0"
