"""
Task subsystem.

Components:
- task_models.py: data structure (Task)
- task_store.py: SQLite-backed record store (TaskStore, StoreError)
"""
