"""
MemoPad — Memo Store
=====================

What:  In-memory CRUD store mapping memo id → Memo.
How:   A plain dict owned by a MemoStore instance. The application factory
       creates one store per app and keeps it on `app.state`; routes get it
       through the `get_store` dependency.
Who:   Called by the memo route handlers.
When:  For every memo request; lives as long as the process.

Concurrency:
    Every method is synchronous and never awaits, so on the single asyncio
    event loop each operation runs to completion before another request is
    handled. No locks are taken. Simultaneous writes to the same id are
    last-write-wins.

Identifiers:
    Milliseconds since the epoch at creation time, as a string. Two memos
    created within the same millisecond would collide, so the generator
    bumps to `previous + 1` whenever the clock has not moved past the last
    issued id. Ids are therefore strictly increasing and never reused.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from memopad.exceptions import NotFoundError, ValidationError
from memopad.schemas.memo import Memo

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class MemoStore:
    """
    Process-local memo collection.

    Responsibilities:
        - list():   all memos, keyed by id (no ordering contract)
        - get():    single memo or NotFoundError
        - create(): validate, assign id and createdAt, store
        - update(): partial overwrite, stamp updatedAt
        - delete(): permanent removal

    Args:
        clock: Returns the current time. Injected by tests to control
               timestamps and id generation.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._memos: Dict[str, Memo] = {}
        self._clock = clock
        self._last_id = 0

    def __len__(self) -> int:
        return len(self._memos)

    def __contains__(self, memo_id: object) -> bool:
        return memo_id in self._memos

    def _next_id(self, now: datetime) -> str:
        candidate = int(now.timestamp() * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return str(candidate)

    def list(self) -> Dict[str, Memo]:
        """Return a shallow copy of the id → memo mapping."""
        return dict(self._memos)

    def get(self, memo_id: str) -> Memo:
        """
        Look up a memo by id.

        Raises:
            NotFoundError: No memo with this id (→ 404)
        """
        memo = self._memos.get(memo_id)
        if memo is None:
            raise NotFoundError(resource="memo", resource_id=memo_id)
        return memo

    def create(self, title: Optional[str], content: Optional[str]) -> Memo:
        """
        Create and store a new memo.

        Both fields must be non-empty after trimming; the stored values are
        the ones supplied, untrimmed. Nothing is stored when validation fails.

        Raises:
            ValidationError: title or content missing/blank (→ 400)
        """
        if _is_blank(title) or _is_blank(content):
            missing = [
                name for name, value in (("title", title), ("content", content))
                if _is_blank(value)
            ]
            raise ValidationError(context={"missing": missing})

        now = self._clock()
        memo = Memo(
            id=self._next_id(now),
            title=title,
            content=content,
            created_at=now,
        )
        self._memos[memo.id] = memo
        logger.info("Memo created: %s (%s)", memo.id, memo.title)
        return memo

    def update(
        self,
        memo_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Memo:
        """
        Overwrite the supplied, non-blank fields of an existing memo.

        Blank or omitted fields leave the current value untouched;
        `updated_at` is refreshed on every successful call.

        Raises:
            NotFoundError: No memo with this id (→ 404)
        """
        memo = self.get(memo_id)
        if not _is_blank(title):
            memo.title = title
        if not _is_blank(content):
            memo.content = content
        memo.updated_at = self._clock()
        logger.info("Memo updated: %s", memo_id)
        return memo

    def delete(self, memo_id: str) -> None:
        """
        Remove a memo permanently. Its id is never issued again.

        Raises:
            NotFoundError: No memo with this id (→ 404)
        """
        if memo_id not in self._memos:
            raise NotFoundError(resource="memo", resource_id=memo_id)
        del self._memos[memo_id]
        logger.info("Memo deleted: %s", memo_id)
