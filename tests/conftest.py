import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGODB_DB_NAME", "credits_test")
os.environ.setdefault("STORE_BACKEND", "memory")

from app.models.account import AccountCreate  # noqa: E402
from app.services.ledger import CreditLedger  # noqa: E402
from app.services.profiles import ProfileService  # noqa: E402
from app.stores.memory import MemoryAccountStore  # noqa: E402


@pytest.fixture
def store() -> MemoryAccountStore:
    return MemoryAccountStore()


@pytest.fixture
def ledger(store) -> CreditLedger:
    return CreditLedger(store)


@pytest.fixture
def profiles(store) -> ProfileService:
    return ProfileService(store)


@pytest.fixture
def make_account(store):
    async def _make(user_id: str = "user_1", credits: int = 0, **fields):
        return await store.create(AccountCreate(user_id=user_id, credits=credits, **fields))
    return _make


@pytest_asyncio.fixture
async def client(store) -> AsyncGenerator[AsyncClient, None]:
    from app.deps import get_store
    from app.main import app
    app.dependency_overrides[get_store] = lambda: store
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
