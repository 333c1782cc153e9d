# contextree/core/logging/filters.py
from __future__ import annotations
import logging
import time
from collections import deque, defaultdict
from collections.abc import Callable

__all__ = ["RecurringSuppressFilter"]

# Upper bound for normalized message keys
MAX_KEY_LEN = 512



class RecurringSuppressFilter(logging.Filter):
    """
    Suppresses identical log messages after `maxPerWindow` occurrences within
    a sliding `windowSeconds`. Once the window slides and the message is let
    through again, a summary with the number of dropped records is emitted.

    A misbehaving observer that raises on every `post` in a tight loop is the
    usual source of such floods.

    Key = (logger name, levelno, normalized message)
    """
    def __init__(
            self,
            *,
            windowSeconds: int = 60,
            maxPerWindow: int = 5,
            summaryLevel: int = logging.INFO,
            clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__()
        self.windowSeconds = max(1, int(windowSeconds))
        self.maxPerWindow = max(1, int(maxPerWindow))
        self.summaryLevel = int(summaryLevel)
        self._clock = clock

        self._buckets: dict[tuple[str, int, str], deque[float]] = defaultdict(deque)
        self._suppressedCounts: dict[tuple[str, int, str], int] = defaultdict(int)

    def _keyOf(self, record: logging.LogRecord) -> tuple[str, int, str]:
        try:
            msg = record.getMessage()
        except Exception:
            msg = str(record.msg)
        norm = " ".join(str(msg).split())
        if len(norm) > MAX_KEY_LEN:
            norm = norm[:MAX_KEY_LEN] + "..."
        return (record.name, record.levelno, norm)

    def _emitSummary(self, key: tuple[str, int, str]) -> None:
        suppressedCount = self._suppressedCounts.pop(key, 0)
        if suppressedCount <= 0:
            return
        loggerName, _levelno, normMessage = key
        # Same logger keeps the summary next to what it summarizes
        logging.getLogger(loggerName).log(
            self.summaryLevel,
            "Suppressed %d repeated logs: %s",
            suppressedCount,
            normMessage,
            extra={"_noRecurringSuppress": True},
        )

    def suppressedCount(self, record: logging.LogRecord) -> int:
        return self._suppressedCounts.get(self._keyOf(record), 0)

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "_noRecurringSuppress", False):
            return True

        now = self._clock()
        key = self._keyOf(record)
        dq = self._buckets[key]
        limit = now - self.windowSeconds
        while dq and dq[0] < limit:
            dq.popleft()

        dq.append(now)
        if len(dq) <= self.maxPerWindow:
            self._emitSummary(key)
            return True

        self._suppressedCounts[key] += 1
        return False
