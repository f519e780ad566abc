from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Membership = Literal["free", "pro"]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(BaseModel):
    """Profile record as seen by services; store-agnostic."""
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    credits: int = 0
    total_usage_count: int = 0
    membership: Membership = "free"
    stripe_customer_id: str | None = None
    stripe_subscription_id: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class AccountCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    user_id: str = Field(min_length=1)
    credits: int = Field(default=0, ge=0)
    membership: Membership = "free"
    stripe_customer_id: str | None = None
    stripe_subscription_id: str | None = None


class AccountUpdate(BaseModel):
    """Partial update; user_id and timestamps are not writable."""
    model_config = ConfigDict(extra="forbid")

    credits: int | None = Field(default=None, ge=0)
    total_usage_count: int | None = Field(default=None, ge=0)
    membership: Membership | None = None
    stripe_customer_id: str | None = None
    stripe_subscription_id: str | None = None

    def changes(self) -> dict:
        data = self.model_dump(exclude_unset=True)
        # counters and tier cannot be nulled out
        return {k: v for k, v in data.items() if v is not None or k.startswith("stripe_")}


class ProfilePatch(BaseModel):
    """Fields a caller may change on their own profile; counters are not among them."""
    model_config = ConfigDict(extra="forbid")

    membership: Membership | None = None
    stripe_customer_id: str | None = None
    stripe_subscription_id: str | None = None

    def to_update(self) -> AccountUpdate:
        return AccountUpdate(**self.model_dump(exclude_unset=True))


class CreditStatus(BaseModel):
    has_credits: bool
    credits: int
