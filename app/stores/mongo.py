"""Account store over MongoDB (Beanie documents, Motor driver)."""

from typing import Any, Awaitable, Callable, TypeVar

from beanie import UpdateResponse
from beanie.operators import Inc, Set
from pymongo.errors import DuplicateKeyError, OperationFailure, PyMongoError

from app.core.exceptions import ConflictError, StorageFailureError
from app.core.logging import get_logger
from app.models.account import Account, AccountCreate, utcnow
from app.models.profile import Profile
from app.stores.base import AccountStore

log = get_logger(__name__)

R = TypeVar("R")

WRITE_CONFLICT = 112


def _is_write_conflict(exc: OperationFailure) -> bool:
    """Conflicts the server guarantees were not applied; safe to retry."""
    return exc.code == WRITE_CONFLICT or exc.has_error_label("TransientTransactionError")


def _to_account(doc: Profile | None) -> Account | None:
    if doc is None:
        return None
    return Account.model_validate(doc, from_attributes=True)


class MongoAccountStore(AccountStore):
    def __init__(self, retry_attempts: int = 3) -> None:
        self.retry_attempts = retry_attempts

    async def _call(self, op: Callable[[], Awaitable[R]]) -> R:
        # Network errors are not retried: an $inc may already have committed.
        attempt = 0
        while True:
            attempt += 1
            try:
                return await op()
            except DuplicateKeyError:
                raise
            except OperationFailure as e:
                if not _is_write_conflict(e) or attempt >= self.retry_attempts:
                    raise StorageFailureError(f"Store operation failed: {e}") from e
                log.warning("store_write_conflict", attempt=attempt, code=e.code)
            except PyMongoError as e:
                raise StorageFailureError(f"Store unreachable: {e}") from e

    async def find_by_user_id(self, user_id: str) -> Account | None:
        doc = await self._call(lambda: Profile.find_one(Profile.user_id == user_id))
        return _to_account(doc)

    async def create(self, data: AccountCreate) -> Account:
        doc = Profile(**data.model_dump())
        try:
            await self._call(doc.insert)
        except DuplicateKeyError as e:
            raise ConflictError("Profile already exists", details={"user_id": data.user_id}) from e
        return _to_account(doc)

    async def conditional_update(
        self,
        user_id: str,
        *,
        inc: dict[str, int] | None = None,
        set_fields: dict[str, Any] | None = None,
        at_least: dict[str, int] | None = None,
    ) -> Account | None:
        query: dict[str, Any] = {"user_id": user_id}
        for field, bound in (at_least or {}).items():
            query[field] = {"$gte": bound}
        ops = [Set({**(set_fields or {}), "updated_at": utcnow()})]
        if inc:
            ops.append(Inc(inc))
        doc = await self._call(
            lambda: Profile.find_one(query).update(*ops, response_type=UpdateResponse.NEW_DOCUMENT)
        )
        return _to_account(doc)

    async def update_by_stripe_customer_id(
        self, stripe_customer_id: str, set_fields: dict[str, Any]
    ) -> Account | None:
        doc = await self._call(
            lambda: Profile.find_one(Profile.stripe_customer_id == stripe_customer_id).update(
                Set({**set_fields, "updated_at": utcnow()}),
                response_type=UpdateResponse.NEW_DOCUMENT,
            )
        )
        return _to_account(doc)

    async def delete(self, user_id: str) -> bool:
        result = await self._call(lambda: Profile.find_one(Profile.user_id == user_id).delete())
        return bool(result and result.deleted_count)
