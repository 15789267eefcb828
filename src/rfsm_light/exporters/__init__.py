"""Text projections of models: DOT, RFSM and JSON."""
