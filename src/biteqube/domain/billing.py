"""Subscription plan and checkout models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Plan:
    """A purchasable monthly plan; amount is in the currency's minor unit."""

    name: str
    amount: int
    description: str
    currency: str = "inr"
    interval: str = "month"


@dataclass(frozen=True)
class CheckoutSession:
    session_id: str
    url: str
