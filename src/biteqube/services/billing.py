"""Subscription plans and hosted checkout."""

import logging
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

from biteqube.domain.billing import CheckoutSession, Plan
from biteqube.domain.errors import CheckoutError, ValidationError

logger = logging.getLogger(__name__)

PLANS = {
    plan.name: plan
    for plan in (
        Plan(
            name="BiteQube Extra",
            amount=19900,
            description=(
                "Perfect for food enthusiasts - 50 scans/month, advanced recipes, "
                "meal planning"
            ),
        ),
        Plan(
            name="BiteQube Extra Large",
            amount=49900,
            description=(
                "For culinary professionals - Unlimited scans, priority support, "
                "advanced features"
            ),
        ),
    )
}


class PaymentsClient(Protocol):
    """Interface for the payment provider's checkout API."""

    async def create_checkout_session(
        self, params: dict[str, object]
    ) -> dict[str, object]:
        """Create a checkout session and return the provider's payload."""


@dataclass
class BillingService:
    client: PaymentsClient | None
    default_origin: str

    def resolve_plan(self, plan_name: str | None) -> Plan:
        if not plan_name:
            raise ValidationError("Plan is required")
        plan = PLANS.get(plan_name)
        if plan is None:
            raise ValidationError("Invalid plan selected")
        return plan

    async def create_checkout(
        self, plan_name: str | None, origin: str | None = None
    ) -> CheckoutSession:
        """Start a monthly subscription checkout for a named plan."""
        plan = self.resolve_plan(plan_name)
        if self.client is None:
            raise CheckoutError("Payments are not configured")
        params = checkout_params(plan, origin or self.default_origin)
        try:
            payload = await self.client.create_checkout_session(params)
        except Exception as exc:
            logger.exception(
                "Checkout session creation failed", extra={"plan": plan.name}
            )
            raise CheckoutError(str(exc)) from exc
        session_id = payload.get("id")
        url = payload.get("url")
        if not isinstance(session_id, str) or not isinstance(url, str):
            raise CheckoutError("Checkout session response missing id or url")
        return CheckoutSession(session_id=session_id, url=url)


def checkout_params(plan: Plan, origin: str) -> dict[str, object]:
    return {
        "payment_method_types": ["card"],
        "mode": "subscription",
        "line_items": [
            {
                "price_data": {
                    "currency": plan.currency,
                    "product_data": {
                        "name": plan.name,
                        "description": plan.description,
                    },
                    "unit_amount": plan.amount,
                    "recurring": {"interval": plan.interval},
                },
                "quantity": 1,
            }
        ],
        "success_url": (
            f"{origin}/success?session_id={{CHECKOUT_SESSION_ID}}"
            f"&plan={quote(plan.name, safe='')}"
        ),
        "cancel_url": f"{origin}/?canceled=true",
        "metadata": {"plan": plan.name},
    }
