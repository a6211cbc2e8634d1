# src/taskdeck/connectors/__init__.py

"""User-facing front ends driving a TaskStore."""
