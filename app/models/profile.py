from datetime import datetime

from beanie import Document, Indexed
from pydantic import Field

from app.models.account import Membership, utcnow


class Profile(Document):
    """One per identity; credits and usage counter live here."""
    user_id: Indexed(str, unique=True)
    credits: int = 0  # never negative through a debit
    total_usage_count: int = 0
    membership: Membership = "free"
    stripe_customer_id: Indexed(str) | None = None
    stripe_subscription_id: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    class Settings:
        name = "profiles"
