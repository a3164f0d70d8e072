"""
glass_todo: a small to-do list manager.

Layout:
- tasks/: data model, in-memory store, view projection, blob persistence
- storage/: key-value backends (memory, JSON file, SQLite)
- core/: ports (Protocols) and the AppState presentation boundary
- cli/, connectors/: console front-end
"""

__version__ = "0.1.0"
