import argparse
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from balance_tracker import cli
from balance_tracker.models.balance import BalanceSample, FetchResult
from balance_tracker.models.baseline import Baseline, Comparison
from balance_tracker.services.tracker_service import TrackerService

from conftest import WALLET_A, WALLET_B


def _args(reset=False, interval=None):
    return argparse.Namespace(reset=reset, interval=interval, log_level=None)


def test_render_without_baseline_shows_hint():
    result = FetchResult(
        total=Decimal("4"),
        balances=[
            BalanceSample(address=WALLET_A, balance=Decimal("1.5")),
            BalanceSample(address=WALLET_B, balance=Decimal("2.5")),
        ],
        wallet_count=2,
    )

    text = cli.render(result, now=datetime(2026, 1, 1, 12, 0, 0))

    assert "Last Updated: 2026-01-01 12:00:00" in text
    assert "Tracking 2 wallets" in text
    assert " 1. 9QCfNuQu...jjrVUrka" in text
    assert "1.5000" in text
    assert "TOTAL BALANCE: 4.0000 SOL" in text
    assert "--reset" in text


def test_render_with_baseline_shows_signed_difference():
    result = FetchResult(
        total=Decimal("3"),
        balances=[BalanceSample(address=WALLET_A, balance=Decimal("3"))],
        wallet_count=1,
        baseline=Baseline(total=Decimal("4"), timestamp=datetime(2026, 1, 1, tzinfo=timezone.utc), wallet_count=1),
        comparison=Comparison(difference=Decimal("-1"), percent=Decimal("-25")),
    )

    text = cli.render(result)

    assert "Baseline: 4.0000 SOL" in text
    assert "▼ Difference: -1.0000 SOL (-25.00%)" in text


@pytest.mark.asyncio
async def test_run_without_wallets_exits_with_error(settings, fake_adapter, capsys):
    tracker = TrackerService.from_settings(settings, adapter=fake_adapter)

    code = await cli.run(_args(), settings, tracker=tracker)

    assert code == 1
    assert "No wallet addresses found" in capsys.readouterr().out
    assert fake_adapter.closed is True


@pytest.mark.asyncio
async def test_run_reset_sets_baseline_and_exits(settings, fake_adapter, capsys):
    tracker = TrackerService.from_settings(settings, adapter=fake_adapter)
    tracker.load()
    tracker.add_wallet(WALLET_A)
    tracker.add_wallet(WALLET_B)

    code = await cli.run(_args(reset=True), settings, tracker=tracker)

    out = capsys.readouterr().out
    assert code == 0
    assert "TOTAL BALANCE: 4.0000 SOL" in out
    assert "Baseline has been reset to current total" in out
    assert tracker.store.baseline.total == Decimal("4.0")


def test_main_exits_cleanly_on_interrupt(monkeypatch, capsys):
    def interrupted(coro):
        coro.close()
        raise KeyboardInterrupt

    monkeypatch.setattr(cli, "setup_logging", lambda *a, **k: None)
    monkeypatch.setattr(cli.asyncio, "run", interrupted)

    assert cli.main([]) == 0
    assert "Exiting tracker" in capsys.readouterr().out


def test_parser_defaults():
    args = cli.build_parser().parse_args([])
    assert args.reset is False
    assert args.interval is None
    assert cli.build_parser().parse_args(["--reset", "--interval", "2"]).interval == 2.0
