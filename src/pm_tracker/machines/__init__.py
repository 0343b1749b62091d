"""
Machine subsystem.

Components:
- models.py: TypedDict shapes of the persisted collection
- defaults.py: built-in machine set + migration ids
- gateway.py: load/save through a KeyValueStore, active machine resolution
- migrations.py: one-shot structural fixes run at load time
- device_id.py: "PM-XXXXXXXX" identifiers
- api.py: machine/task mutations and the task rows the UI renders
- backup.py: JSON export/import
"""
