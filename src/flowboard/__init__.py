"""flowboard - terminal Kanban board with optimistic card moves."""

__version__ = "0.1.0"
