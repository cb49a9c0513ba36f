"""
Hiring Notifier Backend — Application Package Initializer
==========================================================

What: Marks the `hiring_notifier` directory as a Python package.
Who:  Imported by uvicorn (`uvicorn hiring_notifier.main:app`) and pytest.

Architecture Note:
    The backend is layered the same way top to bottom:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │  Services (Directory, Repository,   │  ← business rules, orchestration
    │  Dispatcher, Submission)            │
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← pydantic entities + API contracts
    ├─────────────────────────────────────┤
    │     Record Store (Persistence)      │  ← JSON collections under data/
    └─────────────────────────────────────┘

    Only the Record Store touches the data directory. Services receive the
    store (and each other) explicitly when the app is created.
"""

__version__ = "1.0.0"
