"""In-process account store; used by tests and STORE_BACKEND=memory."""

import asyncio
from typing import Any

from app.core.exceptions import ConflictError
from app.models.account import Account, AccountCreate, utcnow
from app.stores.base import AccountStore


class MemoryAccountStore(AccountStore):
    def __init__(self) -> None:
        self._rows: dict[str, Account] = {}
        self._lock = asyncio.Lock()

    async def _round_trip(self) -> None:
        # Let other callers run before the store sees this request.
        await asyncio.sleep(0)

    async def find_by_user_id(self, user_id: str) -> Account | None:
        await self._round_trip()
        row = self._rows.get(user_id)
        return row.model_copy() if row else None

    async def create(self, data: AccountCreate) -> Account:
        await self._round_trip()
        async with self._lock:
            if data.user_id in self._rows:
                raise ConflictError("Profile already exists", details={"user_id": data.user_id})
            row = Account(**data.model_dump())
            self._rows[row.user_id] = row
            return row.model_copy()

    async def conditional_update(
        self,
        user_id: str,
        *,
        inc: dict[str, int] | None = None,
        set_fields: dict[str, Any] | None = None,
        at_least: dict[str, int] | None = None,
    ) -> Account | None:
        await self._round_trip()
        async with self._lock:
            row = self._rows.get(user_id)
            if row is None:
                return None
            for field, bound in (at_least or {}).items():
                if getattr(row, field) < bound:
                    return None
            self._rows[user_id] = self._apply(row, inc, set_fields)
            return self._rows[user_id].model_copy()

    async def update_by_stripe_customer_id(
        self, stripe_customer_id: str, set_fields: dict[str, Any]
    ) -> Account | None:
        await self._round_trip()
        async with self._lock:
            for user_id, row in self._rows.items():
                if row.stripe_customer_id == stripe_customer_id:
                    self._rows[user_id] = self._apply(row, None, set_fields)
                    return self._rows[user_id].model_copy()
            return None

    async def delete(self, user_id: str) -> bool:
        await self._round_trip()
        async with self._lock:
            return self._rows.pop(user_id, None) is not None

    @staticmethod
    def _apply(row: Account, inc: dict[str, int] | None, set_fields: dict[str, Any] | None) -> Account:
        changes = dict(set_fields or {})
        for field, delta in (inc or {}).items():
            changes[field] = getattr(row, field) + delta
        changes["updated_at"] = utcnow()
        return row.model_copy(update=changes)
