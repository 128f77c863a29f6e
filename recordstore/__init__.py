"""
RecordStore — Application Package Initializer
==============================================

What: Marks the `recordstore` directory as a Python package.
Who:  Used by uvicorn (`recordstore.main:app`), pytest and `python -m recordstore`.

Architecture Note:
    The service follows the same thin layering on every request:

    ┌─────────────────────────────────────┐
    │        Routes (HTTP Layer)          │  ← envelopes and status codes
    ├─────────────────────────────────────┤
    │     Services (Record Service)       │  ← find, merge, append, filter
    ├─────────────────────────────────────┤
    │        Models (Record value)        │  ← reserved fields + open map
    ├─────────────────────────────────────┤
    │     Persistence (Record Store)      │  ← one JSON file, whole rewrite
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
