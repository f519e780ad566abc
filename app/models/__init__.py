from app.models.account import Account, AccountCreate, AccountUpdate, CreditStatus, ProfilePatch
from app.models.profile import Profile

__all__ = [
    "Account",
    "AccountCreate",
    "AccountUpdate",
    "CreditStatus",
    "ProfilePatch",
    "Profile",
]
