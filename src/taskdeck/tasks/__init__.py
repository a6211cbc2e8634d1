# src/taskdeck/tasks/__init__.py

"""
Task domain: pure commands, the TaskStore dispatcher, recurrence,
view queries and statistics.
"""
