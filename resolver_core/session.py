"""Driver-side helper enforcing the one-step-at-a-time contract.

The engine has no locking; whoever paces the ceremony must not call advance()
while a chained reveal ("show pending -> wait -> show result") is in flight.
RevealSession keeps that busy flag and drops step requests that arrive while
it is set. It owns no timers: the caller sleeps/schedules using the delays
computed here.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from .config import DriverConfig
from .reveal import RevealEngine
from .types import StepResult

logger = logging.getLogger(__name__)


class RevealSession:
    def __init__(self, engine: RevealEngine, config: DriverConfig | None = None) -> None:
        self.engine = engine
        self.config = config or DriverConfig()
        self._busy = False
        self._closed = False
        self.last_result: Optional[StepResult] = None

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def closed(self) -> bool:
        return self._closed

    def request_step(self) -> StepResult | None:
        """One advance() for a keypress/click/timer tick; None when the request is dropped."""
        if self._closed:
            logger.debug("Step request dropped: session closed")
            return None
        if self._busy:
            logger.debug("Step request dropped: reveal chain in progress")
            return None
        return self._step()

    @contextmanager
    def chain(self) -> Iterator[Callable[[], StepResult]]:
        """Hold the busy flag for a sequence of advance() calls.

        Yields a step callable; the flag is cleared when the block exits,
        whether it finished or raised.
        """
        if self._closed:
            raise RuntimeError("session is closed")
        if self._busy:
            raise RuntimeError("a reveal chain is already in progress")
        self._busy = True
        try:
            yield self._step
        finally:
            self._busy = False

    def close(self) -> None:
        """Dispose the session; pending driver timers must stop acting on it."""
        self._closed = True
        self._busy = False

    def delay(self, base_seconds: float) -> float:
        return base_seconds / self.config.speedFactor

    def reveal_delay(self) -> float:
        return self.delay(self.config.revealIntervalSec)

    def shine_delay(self) -> float:
        return self.delay(self.config.shineIntervalSec)

    def should_shine(self, result: StepResult) -> bool:
        return self.config.shiningBeforeReveal and result.highlight is not None

    def _step(self) -> StepResult:
        result = self.engine.advance()
        self.last_result = result
        return result
