"""Shared FastAPI dependencies."""

from fastapi import Depends, Request

from app.core.config import get_settings
from app.core.exceptions import ForbiddenError, UnauthorizedError
from app.core.logging import bind_user_id
from app.services.ledger import CreditLedger
from app.services.profiles import ProfileService
from app.stores.base import AccountStore, get_account_store


async def get_current_user_id(request: Request) -> str:
    """Dependency: user id forwarded by the auth proxy; trusted as given."""
    user_id = (request.headers.get(get_settings().identity_header) or "").strip()
    if not user_id:
        raise UnauthorizedError("Not authenticated")
    bind_user_id(user_id)
    return user_id


async def require_admin(request: Request, user_id: str = Depends(get_current_user_id)) -> str:
    """Dependency: caller must carry the admin role from the auth proxy."""
    role = (request.headers.get(get_settings().role_header) or "").strip().lower()
    if role != "admin":
        raise ForbiddenError("Admin only")
    return user_id


def get_store(request: Request) -> AccountStore:
    """Dependency: process-wide store created at startup."""
    store = getattr(request.app.state, "account_store", None)
    if store is None:
        store = request.app.state.account_store = get_account_store()
    return store


def get_ledger(store: AccountStore = Depends(get_store)) -> CreditLedger:
    return CreditLedger(store)


def get_profile_service(store: AccountStore = Depends(get_store)) -> ProfileService:
    return ProfileService(store)
