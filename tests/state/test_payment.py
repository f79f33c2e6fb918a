"""Tests for the payment simulation and its cancellation token."""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from storefront_app.errors import PaymentCancelledError, PaymentError
from storefront_app.state.payment import CancellationToken, PaymentSimulator


class TestPaymentSimulator:
    """Test PaymentSimulator delay and cancellation."""

    def test_default_delay(self):
        assert PaymentSimulator().delay_seconds == 1.5

    def test_waits_configured_delay(self):
        """Without a token the simulator sleeps for exactly the delay."""
        with patch("storefront_app.state.payment.asyncio.sleep", new=AsyncMock()) as sleep:
            asyncio.run(PaymentSimulator(delay_seconds=1.5).run())

        sleep.assert_awaited_once_with(1.5)

    def test_uncancelled_token_completes(self):
        """A token that never fires lets the payment confirm."""
        token = CancellationToken()
        asyncio.run(PaymentSimulator(delay_seconds=0.01).run(token))
        assert token.cancelled is False

    def test_pre_cancelled_token_raises(self):
        """A token cancelled before the run aborts immediately."""
        token = CancellationToken()
        token.cancel()

        with pytest.raises(PaymentCancelledError):
            asyncio.run(PaymentSimulator(delay_seconds=10).run(token))

    def test_cancel_during_wait_raises(self):
        """Cancelling mid-wait aborts without waiting out the delay."""
        simulator = PaymentSimulator(delay_seconds=10)

        async def run():
            token = CancellationToken()
            task = asyncio.ensure_future(simulator.run(token))
            await asyncio.sleep(0)
            token.cancel()
            await task

        with pytest.raises(PaymentCancelledError) as exc_info:
            asyncio.run(asyncio.wait_for(run(), timeout=2))

        assert isinstance(exc_info.value, PaymentError)
