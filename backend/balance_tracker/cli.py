"""
Terminal balance tracker.

Usage:
  balance-tracker            # fetch, display, refresh every 10 seconds until Ctrl+C
  balance-tracker --reset    # fetch once, make the total the new baseline, exit
"""
import argparse
import asyncio
import sys
from datetime import datetime
from typing import List, Optional
from balance_tracker.config import Settings, settings as default_settings
from balance_tracker.models.balance import FetchResult
from balance_tracker.services.tracker_service import TrackerService
from balance_tracker.utils.logger import setup_logging

WIDTH = 70


def short_wallet(address: str) -> str:
    return f"{address[:8]}...{address[-8:]}"


def render(result: FetchResult, now: Optional[datetime] = None) -> str:
    """Plain-text balance table with the baseline comparison."""
    now = now or datetime.now()
    lines: List[str] = [
        "",
        "SOLANA WALLET BALANCE TRACKER".center(WIDTH),
        "",
        f"Last Updated: {now:%Y-%m-%d %H:%M:%S}",
        f"Tracking {len(result.balances)} wallets",
        "",
        "-" * WIDTH,
        "Wallet Address".ljust(45) + "Balance (SOL)".rjust(15),
        "-" * WIDTH,
    ]
    for index, sample in enumerate(result.balances, start=1):
        lines.append(f"{index:>2}. {short_wallet(sample.address):<40}{sample.balance:>15.4f}")
    lines.append("-" * WIDTH)
    lines.append("")
    lines.append(f"TOTAL BALANCE: {result.total:.4f} SOL")

    baseline = result.baseline
    comparison = result.comparison
    if baseline is not None and comparison is not None:
        sign = "+" if comparison.difference >= 0 else ""
        symbol = "▲" if comparison.difference >= 0 else "▼"
        lines.append("")
        lines.append("COMPARISON TO BASELINE:")
        lines.append(
            f"   Baseline: {baseline.total:.4f} SOL "
            f"({baseline.timestamp.astimezone():%Y-%m-%d %H:%M:%S})"
        )
        lines.append(
            f"   {symbol} Difference: {sign}{comparison.difference:.4f} SOL "
            f"({sign}{comparison.percent:.2f}%)"
        )
    else:
        lines.append("")
        lines.append('Tip: run "balance-tracker --reset" to set the current balance as baseline')
    return "\n".join(lines)


def clear_screen():
    if sys.stdout.isatty():
        sys.stdout.write("\033[2J\033[H")


async def run(args: argparse.Namespace, settings: Settings, tracker: Optional[TrackerService] = None) -> int:
    """Run the tracker. Returns exit code (0 = success)."""
    service = tracker or TrackerService.from_settings(settings)
    try:
        await service.start(check_connection=False)
        if not service.wallets:
            print(f"No wallet addresses found in {settings.wallets_file}")
            print(f"Please add your wallet public keys to {settings.wallets_file}")
            return 1
        print(f"Loaded {len(service.wallets)} wallet addresses")

        if args.reset:
            envelope = await service.reset_baseline()
            if not envelope.success:
                print(f"Error saving baseline: {envelope.error}")
                return 1
            print(render(FetchResult.model_validate(envelope.data)))
            print("\nBaseline has been reset to current total")
            return 0

        interval = args.interval if args.interval is not None else settings.refresh_interval_seconds
        while True:
            envelope = await service.fetch_balances()
            clear_screen()
            print(render(FetchResult.model_validate(envelope.data)))
            print("\n" + "-" * WIDTH)
            print(f"Auto-refreshing every {interval:g} seconds... Press Ctrl+C to exit")
            print("-" * WIDTH)
            await asyncio.sleep(interval)
    finally:
        await service.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Track the total SOL balance of a set of wallets.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Set the current total as the new baseline, then exit.",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Refresh interval in seconds (default: from settings, 10).",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: from settings)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = default_settings
    setup_logging(args.log_level or settings.log_level, settings.log_json)
    try:
        return asyncio.run(run(args, settings))
    except KeyboardInterrupt:
        print("\n\nExiting tracker...")
        return 0


if __name__ == "__main__":
    sys.exit(main())
