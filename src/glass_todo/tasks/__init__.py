"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Priority, ValidationError, FilterOption, SortOption)
- task_store.py: in-memory ordered store with validation and write-through persistence
- task_view.py: pure filter + sort projection used for display
- persistence.py: whole-collection JSON blob load/save over a key-value storage
"""
