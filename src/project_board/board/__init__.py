"""
Task board subsystem.

Components:
- models.py: data structures (TaskRecord, TaskStatus, TaskDraft, TaskChanges)
- errors.py: store error taxonomy (NotFoundError, StoreIOError)
- store.py: SQLite-backed storage (fetch_all/create/update/delete)
- partition.py: splits fetched records into TODO/DOING/DONE columns
- display.py: per-row display projection (formatted due date, overdue flag)
- controller.py: fetch -> partition -> render, and user intents
"""
