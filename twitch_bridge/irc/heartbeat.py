"""Client-side keepalive scheduling."""

from __future__ import annotations

from ..constants import KEEPALIVE_INTERVAL_SECONDS


class KeepaliveTimer:
    """Accumulates host tick time and signals when a PING is due.

    Time units are whatever the host passes to ``advance`` (seconds for the
    bundled command-line host).
    """

    def __init__(self, interval: float = KEEPALIVE_INTERVAL_SECONDS):
        if interval <= 0:
            raise ValueError("keepalive interval must be positive")
        self.interval = interval
        self.elapsed_total = 0.0

    def advance(self, elapsed: float) -> bool:
        self.elapsed_total += elapsed
        if self.elapsed_total > self.interval:
            self.elapsed_total = 0.0
            return True
        return False

    def reset(self) -> None:
        self.elapsed_total = 0.0
