# src/taskdeck/__init__.py

"""taskdeck: a local-first personal task manager."""

__version__ = "0.1.0"
