"""MongoAccountStore against a live MongoDB; skipped when none is reachable."""

import asyncio
import os

import pytest
import pytest_asyncio
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from app.core.exceptions import ConflictError
from app.models.account import AccountCreate
from app.services.ledger import CreditLedger

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def mongo_store():
    uri = os.environ["MONGODB_URI"]
    probe = AsyncIOMotorClient(uri, serverSelectionTimeoutMS=500)
    try:
        await probe.admin.command("ping")
    except PyMongoError:
        pytest.skip("MongoDB not reachable")
    finally:
        probe.close()

    from app.db.init import init_db
    from app.models.profile import Profile
    from app.stores.mongo import MongoAccountStore
    client = await init_db(uri=uri, db_name=os.environ["MONGODB_DB_NAME"])
    await Profile.delete_all()
    yield MongoAccountStore(retry_attempts=3)
    await Profile.delete_all()
    client.close()


async def test_create_find_delete(mongo_store):
    created = await mongo_store.create(AccountCreate(user_id="m1", credits=2, stripe_customer_id="cus_m1"))
    assert created.credits == 2
    assert (await mongo_store.find_by_user_id("m1")).credits == 2
    assert await mongo_store.delete("m1") is True
    assert await mongo_store.find_by_user_id("m1") is None
    assert await mongo_store.delete("m1") is False


async def test_duplicate_user_id(mongo_store):
    await mongo_store.create(AccountCreate(user_id="m1"))
    with pytest.raises(ConflictError):
        await mongo_store.create(AccountCreate(user_id="m1"))


async def test_guarded_decrement(mongo_store):
    await mongo_store.create(AccountCreate(user_id="m1", credits=1))
    first = await mongo_store.conditional_update(
        "m1", inc={"credits": -1, "total_usage_count": 1}, at_least={"credits": 1}
    )
    assert first.credits == 0
    assert first.total_usage_count == 1
    second = await mongo_store.conditional_update(
        "m1", inc={"credits": -1, "total_usage_count": 1}, at_least={"credits": 1}
    )
    assert second is None


async def test_update_by_stripe_customer_id(mongo_store):
    await mongo_store.create(AccountCreate(user_id="m1", stripe_customer_id="cus_m1"))
    updated = await mongo_store.update_by_stripe_customer_id("cus_m1", {"membership": "pro"})
    assert updated.membership == "pro"
    assert await mongo_store.update_by_stripe_customer_id("cus_none", {"membership": "pro"}) is None


async def test_concurrent_debits_against_mongo(mongo_store):
    await mongo_store.create(AccountCreate(user_id="m1", credits=5))
    ledger = CreditLedger(mongo_store)
    results = await asyncio.gather(*(ledger.deduct_credit("m1") for _ in range(25)))
    successes = sum(r.success for r in results)
    stored = await mongo_store.find_by_user_id("m1")
    assert successes == 5
    assert stored.credits == 0
    assert stored.total_usage_count == 5
