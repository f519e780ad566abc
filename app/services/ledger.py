"""Credit balance operations: check, deduct one, add.

The balance floor is enforced by the store in the same write as the
decrement, so concurrent debits for one user cannot drive it below zero.
Every operation returns an ActionResult; nothing raises past this module.
"""

from app.core.exceptions import InsufficientCreditsError, NotFoundError
from app.core.logging import get_logger
from app.core.result import ActionResult, fail, from_error, ok
from app.models.account import Account, CreditStatus
from app.stores.base import AccountStore

log = get_logger(__name__)


class CreditLedger:
    def __init__(self, store: AccountStore) -> None:
        self.store = store

    async def check_credits(self, user_id: str) -> ActionResult[CreditStatus]:
        try:
            account = await self.store.find_by_user_id(user_id)
            if account is None:
                raise NotFoundError("Profile not found")
            status = CreditStatus(has_credits=account.credits > 0, credits=account.credits)
            return ok("Credits checked successfully", status)
        except NotFoundError as e:
            return from_error(e)
        except Exception:
            log.exception("check_credits_failed", user_id=user_id)
            return fail("Failed to check credits", "STORAGE_FAILURE")

    async def deduct_credit(self, user_id: str) -> ActionResult[Account]:
        """Take one credit and count one usage, or refuse with the balance untouched."""
        try:
            account = await self.store.conditional_update(
                user_id,
                inc={"credits": -1, "total_usage_count": 1},
                at_least={"credits": 1},
            )
            if account is None:
                # Guard or lookup missed; tell the two apart.
                if await self.store.find_by_user_id(user_id) is None:
                    raise NotFoundError("Profile not found")
                raise InsufficientCreditsError()
            log.info("credit_deducted", user_id=user_id, credits=account.credits)
            return ok("Credit deducted successfully", account)
        except InsufficientCreditsError as e:
            log.info("credit_deduct_refused", user_id=user_id)
            return from_error(e)
        except NotFoundError as e:
            return from_error(e)
        except Exception:
            log.exception("deduct_credit_failed", user_id=user_id)
            return fail("Failed to deduct credit", "STORAGE_FAILURE")

    async def add_credits(self, user_id: str, amount: int) -> ActionResult[Account]:
        """Add ``amount`` to the balance. No floor: a negative amount is applied as is."""
        if amount < 0:
            log.warning("add_credits_negative_amount", user_id=user_id, amount=amount)
        try:
            account = await self.store.conditional_update(user_id, inc={"credits": amount})
            if account is None:
                raise NotFoundError("Profile not found")
            log.info("credits_added", user_id=user_id, amount=amount, credits=account.credits)
            return ok("Credits added successfully", account)
        except NotFoundError as e:
            return from_error(e)
        except Exception:
            log.exception("add_credits_failed", user_id=user_id)
            return fail("Failed to add credits", "STORAGE_FAILURE")
