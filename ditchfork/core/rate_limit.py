"""Per-address login throttling with exponential backoff."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from threading import Lock
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass
class LoginAttempt:
    failures: int = 0
    last_failure: float = 0.0


class LoginLimiter:
    """Track failed logins per client address.

    Once an address reaches ``threshold`` failures it must wait
    ``2 ** min(failures - threshold, max_exponent)`` seconds after its last
    failure before the next attempt is considered. State is process-local and
    guarded by a single lock; it is lost on restart.
    """

    def __init__(
        self,
        threshold: int = 3,
        max_exponent: int = 9,
        ttl_seconds: float = 30 * 60,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.threshold = threshold
        self.max_exponent = max_exponent
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._attempts: dict[str, LoginAttempt] = {}
        self._lock = Lock()

    def cooldown(self, address: str) -> float:
        """Return the seconds ``address`` must still wait, or 0.0."""
        with self._lock:
            attempt = self._attempts.get(address)
            if attempt is None or attempt.failures < self.threshold:
                return 0.0
            shift = min(attempt.failures - self.threshold, self.max_exponent)
            wait = float(1 << shift)
            elapsed = self._clock() - attempt.last_failure
            return max(0.0, wait - elapsed)

    def record_failure(self, address: str) -> int:
        with self._lock:
            attempt = self._attempts.get(address)
            if attempt is None:
                attempt = self._attempts[address] = LoginAttempt()
            attempt.failures += 1
            attempt.last_failure = self._clock()
            return attempt.failures

    def reset(self, address: str) -> None:
        with self._lock:
            self._attempts.pop(address, None)

    def failures(self, address: str) -> int:
        with self._lock:
            attempt = self._attempts.get(address)
            return attempt.failures if attempt else 0

    def sweep(self) -> int:
        """Drop entries idle for longer than ``ttl_seconds``."""
        with self._lock:
            now = self._clock()
            stale = [
                address
                for address, attempt in self._attempts.items()
                if now - attempt.last_failure > self.ttl_seconds
            ]
            for address in stale:
                del self._attempts[address]
        if stale:
            logger.info("Removed %d stale login attempt record(s)", len(stale))
        return len(stale)

    def __len__(self) -> int:
        with self._lock:
            return len(self._attempts)
