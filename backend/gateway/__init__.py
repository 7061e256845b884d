"""
Document Store Gateway — Application Package Initializer
=========================================================

What: Marks the `gateway` directory as a Python package.
Who:  Imported by uvicorn (`gateway.main:app`), pytest, and `python -m gateway`.

Architecture Note:
    The gateway is a thin layer over a MongoDB database:

    ┌─────────────────────────────────────┐
    │      Routes (HTTP dispatch)         │  ← path matching, body parsing
    ├─────────────────────────────────────┤
    │   Dependencies (collection lookup)  │  ← name → collection reference
    ├─────────────────────────────────────┤
    │   CollectionService (store calls)   │  ← one driver call per request
    ├─────────────────────────────────────┤
    │   StoreHandle (pymongo async)       │  ← one client for the process
    └─────────────────────────────────────┘

    Documents are never inspected; whatever the client sends is forwarded
    to the store and whatever the store returns is serialized back.
"""

__version__ = "1.0.0"
