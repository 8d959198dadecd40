"""Single-user task board with three lanes, local persistence and derived views."""

__version__ = "0.1.0"
