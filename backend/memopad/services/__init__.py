# Services package init
"""
MemoPad — Services Layer
=========================

What:  Business logic sitting between routes (HTTP) and the in-memory data.

Service Inventory:
    - MemoStore: create/read/update/delete of memos held in process memory
"""
