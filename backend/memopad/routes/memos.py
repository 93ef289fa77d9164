"""
MemoPad — Memo Route Handlers
==============================

What:  CRUD endpoints for memos.
How:   Reads/validates the JSON body, delegates to MemoStore, answers with
       JSON (reads) or a short plain-text confirmation (writes).
Who:   Called by the bundled browser page (restFront.js) and API clients.

Endpoints:
    GET    /memos        → {id: memo, ...}
    GET    /memo/{id}    → memo
    POST   /memo         → 201 "메모 작성 성공"
    PUT    /memo/{id}    → 200 "메모 수정 성공"
    DELETE /memo/{id}    → 200 "메모 삭제 성공"

Errors are raised as MemoPad exceptions and rendered by the handlers
registered in main.py.
"""

import logging
from typing import Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError as PydanticValidationError

from memopad.dependencies import get_store
from memopad.exceptions import MalformedBodyError
from memopad.schemas.memo import Memo, MemoPayload
from memopad.services.memo_store import MemoStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Memos"])

# Bodies are parsed by read_payload(), so the schema is declared by hand
# for the OpenAPI document.
PAYLOAD_OPENAPI = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": MemoPayload.model_json_schema()}},
    }
}

TEXT_RESPONSES = {
    400: {"description": "Missing fields or malformed JSON", "content": {"text/plain": {}}},
    404: {"description": "Memo not found", "content": {"text/plain": {}}},
}


async def read_payload(request: Request) -> MemoPayload:
    """
    Buffer and validate the request body.

    Raises:
        MalformedBodyError: Not JSON, not an object, or non-string fields (→ 400)
    """
    body = await request.body()
    logger.debug("%s body: %s", request.method, body.decode("utf-8", errors="replace"))
    try:
        return MemoPayload.model_validate_json(body)
    except PydanticValidationError as e:
        raise MalformedBodyError(context={"errors": e.errors(include_url=False)}) from e


@router.get(
    "/memos",
    response_model=Dict[str, Memo],
    response_model_exclude_none=True,
    summary="모든 메모 조회",
)
async def list_memos(store: MemoStore = Depends(get_store)) -> Dict[str, Memo]:
    """All memos keyed by id. Order is unspecified; sort by createdAt."""
    return store.list()


@router.get(
    "/memo/{memo_id}",
    response_model=Memo,
    response_model_exclude_none=True,
    responses={404: TEXT_RESPONSES[404]},
    summary="특정 메모 조회",
)
async def get_memo(memo_id: str, store: MemoStore = Depends(get_store)) -> Memo:
    return store.get(memo_id)


@router.post(
    "/memo",
    status_code=201,
    response_class=PlainTextResponse,
    responses={400: TEXT_RESPONSES[400]},
    openapi_extra=PAYLOAD_OPENAPI,
    summary="새 메모 작성",
)
async def create_memo(request: Request, store: MemoStore = Depends(get_store)) -> PlainTextResponse:
    payload = await read_payload(request)
    store.create(payload.title, payload.content)
    return PlainTextResponse("메모 작성 성공", status_code=201)


@router.put(
    "/memo/{memo_id}",
    response_class=PlainTextResponse,
    responses=TEXT_RESPONSES,
    openapi_extra=PAYLOAD_OPENAPI,
    summary="메모 수정",
)
async def update_memo(
    memo_id: str,
    request: Request,
    store: MemoStore = Depends(get_store),
) -> PlainTextResponse:
    """
    Partial update: only non-blank fields in the body are applied.

    The id is checked before the body is read, so an unknown id is a 404
    even when the body is malformed.
    """
    store.get(memo_id)
    payload = await read_payload(request)
    store.update(memo_id, title=payload.title, content=payload.content)
    return PlainTextResponse("메모 수정 성공")


@router.delete(
    "/memo/{memo_id}",
    response_class=PlainTextResponse,
    responses={404: TEXT_RESPONSES[404]},
    summary="메모 삭제",
)
async def delete_memo(memo_id: str, store: MemoStore = Depends(get_store)) -> PlainTextResponse:
    store.delete(memo_id)
    return PlainTextResponse("메모 삭제 성공")
