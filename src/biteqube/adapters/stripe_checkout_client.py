"""Stripe SDK client for hosted checkout sessions."""

from dataclasses import dataclass

import stripe

from biteqube.services.billing import PaymentsClient


@dataclass
class StripeCheckoutClient(PaymentsClient):
    """Checkout client backed by the Stripe SDK."""

    client: stripe.StripeClient

    @classmethod
    def create(cls, secret_key: str) -> "StripeCheckoutClient":
        return cls(client=stripe.StripeClient(secret_key))

    async def create_checkout_session(
        self, params: dict[str, object]
    ) -> dict[str, object]:
        session = await self.client.v1.checkout.sessions.create_async(params=params)
        return {"id": session.id, "url": session.url}
