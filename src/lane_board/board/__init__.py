"""
Board subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, Priority, AddDraft, EditDraft)
- ids.py: id allocation from the current collection
- persistence.py: SQLite key-value store + JSON gateway for the collection
- seed.py: one-shot seed loader used when storage is empty
- task_store.py: in-memory collection with write-through mutations
- drag.py: drag-and-drop outcome -> move request
- view.py: filter / sort / lane partition / duplicate counts
"""
