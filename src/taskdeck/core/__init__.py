"""
Domain core.

Components:
- models.py: entities and the AppState aggregate
- events.py: domain events + CommandResult
- errors.py: ValidationError / NotFoundError / PersistenceError
- ports.py: BlobStore and EventSink protocols
- relations.py: delete policy table (cascade / reassign / strip)
- dates.py: calendar-day helpers
"""
