from __future__ import annotations

import asyncio
import logging

from eliteshop.store.cart import CheckoutSummary

logger = logging.getLogger(__name__)


class SimulatedCheckoutGateway:
    """Stands in for a payment provider: waits, then accepts every order."""

    def __init__(self, delay: float = 1.0) -> None:
        self.delay = delay

    async def charge(self, summary: CheckoutSummary) -> None:
        logger.info("Handing off checkout: %d items, total %s", summary.total_items, summary.total)
        if self.delay > 0:
            await asyncio.sleep(self.delay)
