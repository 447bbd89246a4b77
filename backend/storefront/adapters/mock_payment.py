import asyncio
import logging
import random
from typing import Dict, Optional

from storefront.models.order import PaymentMethod
from storefront.utils.tokens import generate_transaction_id

log = logging.getLogger(__name__)


class PaymentDeclined(Exception):
    """Raised when the simulated gateway declines the charge."""
    pass


class MockPaymentAdapter:
    """
    Simulated payment gateway: a fixed delay, then success with probability
    ``success_rate``. Declines are never retried here; the caller surfaces them.
    """

    def __init__(
        self,
        delay_ms: int = 100,
        success_rate: float = 0.95,
        rng: Optional[random.Random] = None,
    ):
        self.delay_seconds = delay_ms / 1000.0
        self.success_rate = success_rate
        self.rng = rng or random.Random()

    async def charge(self, amount: int, payment_method: PaymentMethod) -> Dict:
        """
        Args:
            amount: The final (post-discount) amount to charge.
            payment_method: Already validated payment method.

        Returns:
            A dict describing the captured transaction.

        Raises:
            PaymentDeclined: when the simulated gateway rejects the charge.
        """
        # the only suspension point of a checkout
        await asyncio.sleep(self.delay_seconds)

        if self.rng.random() >= self.success_rate:
            log.warning("Simulated decline: amount=%s method=%s", amount, payment_method.type.value)
            raise PaymentDeclined("Simulated payment decline")

        return {
            "transaction_id": generate_transaction_id(),
            "status": "captured",
            "amount": amount,
            "method": payment_method.type.value,
        }

    def health_check(self) -> bool:
        return 0.0 < self.success_rate <= 1.0 and self.delay_seconds >= 0
