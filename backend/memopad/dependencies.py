"""
MemoPad — Route Dependencies
=============================

What:  FastAPI dependencies handing per-app objects to route handlers.
How:   create_app() puts the store, the detected server address and the
       static root on `app.state`; these functions read them back from the
       request, so every app instance (and every test) has its own store.
"""

from pathlib import Path

from fastapi import Request

from memopad.schemas.memo import ServerInfo
from memopad.services.memo_store import MemoStore


def get_store(request: Request) -> MemoStore:
    return request.app.state.store


def get_server_info(request: Request) -> ServerInfo:
    return request.app.state.server_info


def get_static_root(request: Request) -> Path:
    return request.app.state.static_root
