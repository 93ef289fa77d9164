"""
MemoPad — Page, Diagnostics and Static File Routes
===================================================

What:  Serves the browser front end, /server-info, and any other GET path
       as a file under the static root.
How:   The static catch-all is registered last, after the memo API and the
       API docs, so it only sees paths nothing else claimed.

Security:
    Requested paths are resolved and must stay inside the static root;
    anything escaping it (e.g. ../../etc/passwd) is answered as not found.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from memopad.dependencies import get_server_info, get_static_root
from memopad.exceptions import ROUTE_NOT_FOUND_MESSAGE, NotFoundError
from memopad.schemas.memo import ServerInfo

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"])

INDEX_PAGE = "restFront.html"


def resolve_static_path(static_root: Path, requested: str) -> Optional[Path]:
    """
    Map a request path onto a file under `static_root`.

    Returns:
        The resolved file path, or None if it escapes the root, does not
        exist, or is not a regular file.
    """
    root = static_root.resolve()
    candidate = (root / requested.lstrip("/")).resolve()
    if not candidate.is_relative_to(root):
        logger.warning("Refused static path outside root: %s", requested)
        return None
    if not candidate.is_file():
        return None
    return candidate


def _file_response(static_root: Path, requested: str) -> FileResponse:
    path = resolve_static_path(static_root, requested)
    if path is None:
        raise NotFoundError(resource="file", resource_id=requested, message=ROUTE_NOT_FOUND_MESSAGE)
    return FileResponse(path)


@router.get("/", response_class=FileResponse, summary="메모 관리 페이지")
async def index(static_root: Path = Depends(get_static_root)) -> FileResponse:
    return _file_response(static_root, INDEX_PAGE)


@router.get("/server-info", response_model=ServerInfo, summary="서버 정보")
async def server_info(info: ServerInfo = Depends(get_server_info)) -> ServerInfo:
    """Detected host/port, local and public addresses, environment name."""
    return info


@router.get("/{file_path:path}", include_in_schema=False)
async def static_file(
    file_path: str,
    static_root: Path = Depends(get_static_root),
) -> FileResponse:
    return _file_response(static_root, file_path)
