# src/taskdeck/cli/__init__.py

"""Command-line entrypoint, composition root and slash commands."""
