"""Baseline snapshot and baseline-reset history."""
import logging
import time
from decimal import Decimal
from typing import List, Optional
from pydantic import ValidationError
from balance_tracker.models.baseline import Baseline, Comparison, HistoryEntry, utcnow
from balance_tracker.services.json_store import JsonFile
from balance_tracker.utils.errors import PersistenceError

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 50


def _percent_of(amount: Decimal, base: Decimal) -> Decimal:
    """amount as a percentage of base; 0 when base is 0."""
    if not base:
        return Decimal("0")
    return amount / base * 100


def _as_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class BaselineStore:
    """
    Owns the active baseline and the newest-first history of baseline resets.

    Both files are written before the in-memory state changes, so a failed
    write leaves the store exactly as it was.
    """

    def __init__(self, baseline_path, history_path, history_limit: int = DEFAULT_HISTORY_LIMIT):
        self._baseline_file = JsonFile(baseline_path)
        self._history_file = JsonFile(history_path)
        self.history_limit = history_limit
        self._baseline: Optional[Baseline] = None
        self._history: List[HistoryEntry] = []

    @property
    def baseline(self) -> Optional[Baseline]:
        return self._baseline

    @property
    def history(self) -> List[HistoryEntry]:
        return list(self._history)

    def load(self):
        """Read baseline and history from disk; missing files mean no state."""
        self.load_baseline()
        self.load_history()

    def load_baseline(self):
        try:
            data = self._baseline_file.read(default=None)
            self._baseline = Baseline.model_validate(data) if data is not None else None
        except (PersistenceError, ValidationError) as e:
            logger.error("Error loading baseline: %s", e)
            self._baseline = None
            return
        if self._baseline is not None:
            logger.info("Baseline loaded: %s", self._baseline.total)

    def load_history(self):
        try:
            data = self._history_file.read(default=[])
            if not isinstance(data, list):
                raise PersistenceError("History file must contain a list")
            entries = [HistoryEntry.model_validate(item) for item in data]
        except (PersistenceError, ValidationError) as e:
            logger.error("Error loading history: %s", e)
            self._history = []
            return
        self._history = entries[:self.history_limit]
        logger.info("Loaded %d history entries", len(self._history))

    def _next_id(self) -> int:
        entry_id = int(time.time() * 1000)
        if self._history and self._history[0].id >= entry_id:
            entry_id = self._history[0].id + 1
        return entry_id

    def _dump_history(self, entries: List[HistoryEntry]) -> list:
        return [entry.model_dump(mode="json", by_alias=True) for entry in entries]

    def reset(self, total, wallet_count: int) -> Baseline:
        """
        Make total the new baseline.

        When a previous baseline exists with a different total, the
        transition is archived at the head of the history, which is then
        cut to history_limit entries.

        Raises:
            PersistenceError: If either file cannot be written
        """
        total = _as_decimal(total)
        previous = self._baseline
        new_history = None

        if previous is not None and previous.total != total:
            profit = total - previous.total
            entry = HistoryEntry(
                id=self._next_id(),
                timestamp=utcnow(),
                start_balance=previous.total,
                end_balance=total,
                profit=profit,
                profit_percent=_percent_of(profit, previous.total),
                wallet_count=wallet_count
            )
            new_history = [entry] + self._history
            new_history = new_history[:self.history_limit]

        baseline = Baseline(total=total, timestamp=utcnow(), wallet_count=wallet_count)

        if new_history is not None:
            self._history_file.write(self._dump_history(new_history))
        try:
            self._baseline_file.write(baseline.model_dump(mode="json", by_alias=True))
        except PersistenceError:
            if new_history is not None:
                try:
                    self._history_file.write(self._dump_history(self._history))
                except PersistenceError as e:
                    logger.error("Could not restore history after failed baseline write: %s", e)
            raise

        if new_history is not None:
            self._history = new_history
            logger.info("History saved (%d entries)", len(new_history))
        self._baseline = baseline
        logger.info("Baseline saved: %s", total)
        return baseline

    def compare(self, current_total) -> Optional[Comparison]:
        """Difference between current_total and the baseline, None without a baseline."""
        if self._baseline is None:
            return None
        difference = _as_decimal(current_total) - self._baseline.total
        return Comparison(
            difference=difference,
            percent=_percent_of(difference, self._baseline.total)
        )

    def clear_history(self):
        self._history_file.write([])
        self._history = []
        logger.info("History cleared")
