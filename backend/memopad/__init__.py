"""
MemoPad — Application Package Initializer
==========================================

What: Marks the `memopad` directory as a Python package.
Who:  Used by uvicorn (`memopad.main:app`), the `memopad` console script and pytest.

Architecture Note:

    ┌─────────────────────────────────────┐
    │      Routes (API + static pages)    │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │       Services (MemoStore)          │  ← CRUD rules, id generation
    ├─────────────────────────────────────┤
    │       Schemas (Pydantic)            │  ← Memo record + request body
    └─────────────────────────────────────┘

    There is no persistence layer: memos live in process memory and are
    lost on restart.
"""

__version__ = "1.0.0"
