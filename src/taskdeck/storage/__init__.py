"""
Persistence subsystem.

Components:
- codec.py: AppState <-> JSON with tagged dates
- migrations.py: schema-versioned backfills for older blobs
- blob_store.py: SQLite-backed and in-memory blob stores
- persistence.py: PersistenceAdapter (save/load, never raises)
"""
