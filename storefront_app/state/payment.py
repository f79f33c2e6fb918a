"""Fixed-delay payment simulation standing in for a real gateway confirmation."""

import asyncio
from typing import Optional

from ..errors import PaymentCancelledError


class CancellationToken:
    """
    Cooperative cancellation signal for a running payment simulation.

    Nothing in the storefront flow cancels a payment; the token exists so
    callers embedding the engine can.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()


class PaymentSimulator:
    """Waits a fixed delay, then reports the payment as confirmed."""

    def __init__(self, delay_seconds: float = 1.5):
        self.delay_seconds = delay_seconds

    async def run(self, token: Optional[CancellationToken] = None) -> None:
        """
        Wait out the simulated confirmation.

        Raises:
            PaymentCancelledError: if the token fires before the delay elapses
        """
        if token is None:
            await asyncio.sleep(self.delay_seconds)
            return

        if token.cancelled:
            raise PaymentCancelledError("Payment cancelled before it started")

        try:
            await asyncio.wait_for(token.wait(), timeout=self.delay_seconds)
        except asyncio.TimeoutError:
            return

        raise PaymentCancelledError("Payment cancelled during confirmation")
