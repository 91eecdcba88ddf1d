import asyncio
from decimal import Decimal

import pytest

from balance_tracker.services.balance_client import BalanceClient, FetchErrorKind
from balance_tracker.utils.errors import RpcTimeoutError

from conftest import FakeAdapter, LAMPORTS, WALLET_A


def _client(adapter, **kwargs) -> BalanceClient:
    client = BalanceClient(adapter, **kwargs)
    client.waits = []

    async def record_backoff(attempt):
        client.waits.append((attempt + 1) * client.backoff)

    client._backoff = record_backoff
    return client


@pytest.mark.asyncio
async def test_success_on_first_attempt():
    adapter = FakeAdapter(lamports={WALLET_A: 3 * LAMPORTS})
    client = _client(adapter)

    result = await client.fetch(WALLET_A)

    assert result.ok
    assert result.balance == Decimal("3")
    assert result.attempts == 1
    assert client.waits == []


@pytest.mark.asyncio
async def test_retries_with_linear_backoff_then_succeeds():
    adapter = FakeAdapter(lamports={WALLET_A: LAMPORTS}, failures={WALLET_A: 2})
    client = _client(adapter, backoff=1.0)

    result = await client.fetch(WALLET_A)

    assert result.ok
    assert result.balance == Decimal("1")
    assert result.attempts == 3
    assert client.waits == [1.0, 2.0]
    assert adapter.calls == [WALLET_A] * 3


@pytest.mark.asyncio
async def test_exhausted_retries_return_zero_without_final_wait(caplog):
    adapter = FakeAdapter(lamports={WALLET_A: LAMPORTS}, failures={WALLET_A: 5})
    client = _client(adapter, backoff=0.5)

    with caplog.at_level("ERROR"):
        balance = await client.get_balance(WALLET_A)

    assert balance == Decimal("0")
    assert len(adapter.calls) == 3
    assert client.waits == [0.5, 1.0]
    assert "Failed to fetch balance for 9QCfNuQu..." in caplog.text


@pytest.mark.asyncio
async def test_timeout_is_classified_and_cancels_the_call():
    adapter = FakeAdapter(lamports={WALLET_A: LAMPORTS}, delays={WALLET_A: 5})
    client = _client(adapter, timeout=0.01, max_attempts=2)

    result = await client.fetch(WALLET_A)
    await asyncio.sleep(0)

    assert not result.ok
    assert result.balance == 0
    assert result.error.kind == FetchErrorKind.TIMEOUT
    assert adapter.cancelled == [WALLET_A, WALLET_A]
    assert adapter.in_flight == 0


@pytest.mark.asyncio
async def test_malformed_address_is_not_retried():
    adapter = FakeAdapter()
    client = _client(adapter)

    result = await client.fetch("not-a-solana-address")

    assert result.error.kind == FetchErrorKind.INVALID_ADDRESS
    assert result.balance == 0
    assert adapter.calls == []


def test_rejects_zero_attempts():
    with pytest.raises(ValueError):
        BalanceClient(FakeAdapter(), max_attempts=0)


class RaisingAdapter(FakeAdapter):
    def __init__(self, error):
        super().__init__()
        self.error = error

    async def get_balance(self, address):
        self.calls.append(address)
        raise self.error


@pytest.mark.asyncio
async def test_http_timeout_is_classified_as_timeout():
    adapter = RaisingAdapter(RpcTimeoutError("Timeout calling Solana RPC: timed out"))
    client = _client(adapter)

    result = await client.fetch(WALLET_A)

    assert result.error.kind == FetchErrorKind.TIMEOUT
    assert result.attempts == 3


@pytest.mark.asyncio
async def test_unexpected_exception_is_retried_and_absorbed():
    adapter = RaisingAdapter(RuntimeError("adapter bug"))
    client = _client(adapter)

    result = await client.fetch(WALLET_A)

    assert result.balance == 0
    assert result.error.kind == FetchErrorKind.NETWORK
    assert "RuntimeError: adapter bug" in result.error.message
    assert len(adapter.calls) == 3
    assert client.waits == [1.0, 2.0]


@pytest.mark.asyncio
async def test_negative_lamports_are_rejected():
    client = _client(FakeAdapter(lamports={WALLET_A: -1}), max_attempts=1)

    result = await client.fetch(WALLET_A)

    assert result.balance == 0
    assert result.error.kind == FetchErrorKind.NETWORK
