from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from app.core.result import to_response
from app.deps import get_current_user_id, get_ledger, require_admin
from app.services.ledger import CreditLedger

router = APIRouter()


class AddCreditsRequest(BaseModel):
    user_id: str = Field(min_length=1)
    amount: int


@router.get("")
async def check_credits(
    user_id: str = Depends(get_current_user_id),
    ledger: CreditLedger = Depends(get_ledger),
):
    """Return current balance and whether any credit is left."""
    return to_response(await ledger.check_credits(user_id))


@router.post("/deduct")
async def deduct_credit(
    user_id: str = Depends(get_current_user_id),
    ledger: CreditLedger = Depends(get_ledger),
):
    """Spend one credit. 402 when the balance is exhausted."""
    return to_response(await ledger.deduct_credit(user_id))


@router.post("/add")
async def add_credits(
    body: AddCreditsRequest,
    _admin: str = Depends(require_admin),
    ledger: CreditLedger = Depends(get_ledger),
):
    """Grant credits to any account. Admin only."""
    return to_response(await ledger.add_credits(body.user_id, body.amount))
