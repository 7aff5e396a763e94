import logging

import stripe

logger = logging.getLogger(__name__)


class PaymentProviderError(Exception):
    pass


class StripePaymentProvider:
    def __init__(self, api_key: str, currency: str = "usd"):
        self.api_key = api_key
        self.currency = currency

    def create_intent(self, amount: int) -> str:
        """Create a card PaymentIntent for `amount` cents and return its client secret."""
        try:
            intent = stripe.PaymentIntent.create(
                api_key=self.api_key,
                amount=amount,
                currency=self.currency,
                payment_method_types=["card"],
            )
        except stripe.StripeError as exc:
            logger.exception("Stripe PaymentIntent creation failed")
            raise PaymentProviderError(getattr(exc, "user_message", None) or "Payment provider error") from exc
        return intent.client_secret
