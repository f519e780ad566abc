"""Profile CRUD and first-login bootstrap."""

from app.core.config import get_settings
from app.core.exceptions import ConflictError
from app.core.logging import get_logger
from app.core.result import ActionResult, fail, from_error, ok
from app.models.account import Account, AccountCreate, AccountUpdate
from app.stores.base import AccountStore

log = get_logger(__name__)


class ProfileService:
    def __init__(self, store: AccountStore) -> None:
        self.store = store

    async def create_profile(self, data: AccountCreate) -> ActionResult[Account]:
        try:
            account = await self.store.create(data)
            log.info("profile_created", user_id=account.user_id, credits=account.credits)
            return ok("Profile created successfully", account)
        except ConflictError as e:
            return from_error(e)
        except Exception:
            log.exception("create_profile_failed", user_id=data.user_id)
            return fail("Failed to create profile", "STORAGE_FAILURE")

    async def get_profile_by_user_id(self, user_id: str) -> ActionResult[Account]:
        try:
            account = await self.store.find_by_user_id(user_id)
            if account is None:
                return fail("Profile not found", "NOT_FOUND")
            return ok("Profile retrieved successfully", account)
        except Exception:
            log.exception("get_profile_failed", user_id=user_id)
            return fail("Failed to get profile", "STORAGE_FAILURE")

    async def update_profile(self, user_id: str, data: AccountUpdate) -> ActionResult[Account]:
        try:
            account = await self.store.conditional_update(user_id, set_fields=data.changes())
            if account is None:
                return fail("Profile not found to update", "NOT_FOUND")
            log.info("profile_updated", user_id=user_id, fields=sorted(data.changes()))
            return ok("Profile updated successfully", account)
        except Exception:
            log.exception("update_profile_failed", user_id=user_id)
            return fail("Failed to update profile", "STORAGE_FAILURE")

    async def update_profile_by_stripe_customer_id(
        self, stripe_customer_id: str, data: AccountUpdate
    ) -> ActionResult[Account]:
        """Billing-side update, keyed by the Stripe customer rather than the user."""
        try:
            account = await self.store.update_by_stripe_customer_id(stripe_customer_id, data.changes())
            if account is None:
                return fail("Profile not found by Stripe customer ID", "NOT_FOUND")
            log.info("profile_updated", user_id=account.user_id, stripe_customer_id=stripe_customer_id)
            return ok("Profile updated by Stripe customer ID successfully", account)
        except Exception:
            log.exception("update_profile_by_stripe_customer_failed", stripe_customer_id=stripe_customer_id)
            return fail("Failed to update profile by Stripe customer ID", "STORAGE_FAILURE")

    async def delete_profile(self, user_id: str) -> ActionResult[None]:
        try:
            existed = await self.store.delete(user_id)
            log.info("profile_deleted", user_id=user_id, existed=existed)
            return ok("Profile deleted successfully")
        except Exception:
            log.exception("delete_profile_failed", user_id=user_id)
            return fail("Failed to delete profile", "STORAGE_FAILURE")

    async def ensure_profile(self, user_id: str) -> ActionResult[Account]:
        """Return the caller's profile, creating it with default credits on first sight."""
        found = await self.get_profile_by_user_id(user_id)
        if found.success or found.code != "NOT_FOUND":
            return found
        created = await self.create_profile(
            AccountCreate(user_id=user_id, credits=get_settings().default_credits)
        )
        if created.code == "CONFLICT":
            # Another request created it first.
            return await self.get_profile_by_user_id(user_id)
        return created
