"""Exponential reconnect backoff."""

from __future__ import annotations

from gemini_live.state.settings import BackoffSettings


class BackoffState:
    """Attempt counter for one connection.

    The delay before attempt ``n`` (1-based) is ``base * growth ** (n - 1)``,
    capped. ``next_delay()`` returns ``None`` once ``max_attempts`` retries
    have been handed out; ``reset()`` is called on every successful open.
    """

    def __init__(self, settings: BackoffSettings) -> None:
        self._settings = settings
        self._attempts = 0

    @property
    def attempts(self) -> int:
        return self._attempts

    @property
    def exhausted(self) -> bool:
        return self._attempts >= self._settings.max_attempts

    def delay_for(self, attempt: int) -> float:
        s = self._settings
        raw = s.base_delay_s * (s.growth ** max(0, attempt - 1))
        return min(raw, s.cap_s)

    def next_delay(self) -> float | None:
        if self.exhausted:
            return None
        self._attempts += 1
        return self.delay_for(self._attempts)

    def reset(self) -> None:
        self._attempts = 0


__all__ = ["BackoffState"]
