"""Infrastructure facades (logging, metrics, events)."""
