"""
Chore subsystem.

Components:
- chore_models.py: data structures (Task, Category, DueState, StatusInfo)
- chore_status.py: due-state classification and next-due computation
- chore_store.py: task/category access over a generic RecordStore
"""
