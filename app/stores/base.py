from abc import ABC, abstractmethod
from typing import Any

from app.core.config import get_settings
from app.models.account import Account, AccountCreate


class AccountStore(ABC):
    """Persistence for profile records keyed by user id.

    Every write is atomic per record. ``conditional_update`` evaluates its
    guard against the pre-update row in the same step as the write, so a
    guarded decrement can never be interleaved with another writer.
    """

    @abstractmethod
    async def find_by_user_id(self, user_id: str) -> Account | None:
        ...

    @abstractmethod
    async def create(self, data: AccountCreate) -> Account:
        """Insert a new record; raise ConflictError if user_id exists."""
        ...

    @abstractmethod
    async def conditional_update(
        self,
        user_id: str,
        *,
        inc: dict[str, int] | None = None,
        set_fields: dict[str, Any] | None = None,
        at_least: dict[str, int] | None = None,
    ) -> Account | None:
        """Apply ``inc``/``set_fields`` if every ``at_least`` field >= its bound.

        Returns the updated record, or None when no record matched (absent,
        or the guard did not hold).
        """
        ...

    @abstractmethod
    async def update_by_stripe_customer_id(
        self, stripe_customer_id: str, set_fields: dict[str, Any]
    ) -> Account | None:
        ...

    @abstractmethod
    async def delete(self, user_id: str) -> bool:
        """Delete the record; return True if one existed."""
        ...


def get_account_store() -> AccountStore:
    settings = get_settings()
    if settings.store_backend == "memory":
        from app.stores.memory import MemoryAccountStore
        return MemoryAccountStore()
    from app.stores.mongo import MongoAccountStore
    return MongoAccountStore(retry_attempts=settings.store_retry_attempts)
