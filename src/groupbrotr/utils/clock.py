"""Wall-clock abstraction for event timestamps and subscription ids.

Event builders read time through a [Clock][groupbrotr.utils.clock.Clock]
injected at construction instead of calling ``time.time()`` directly, so
tests can pin ``created_at``, invite expiries, and default subscription ids.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Protocol


class Clock(Protocol):
    """Source of the current Unix time."""

    def now(self) -> int:
        """Current time in whole seconds."""
        ...

    def now_ms(self) -> int:
        """Current time in whole milliseconds."""
        ...


class SystemClock:
    """[Clock][groupbrotr.utils.clock.Clock] backed by ``time.time()``."""

    def now(self) -> int:
        return int(time.time())

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000


@dataclass(slots=True)
class FixedClock:
    """Clock frozen at a given instant, advanced only by
    [advance()][groupbrotr.utils.clock.FixedClock.advance].

    Examples:
        ```python
        clock = FixedClock(1_700_000_000)
        clock.now()       # 1700000000
        clock.now_ms()    # 1700000000000
        clock.advance(5)
        clock.now()       # 1700000005
        ```
    """

    seconds: int
    millis: int = 0

    def now(self) -> int:
        return self.seconds

    def now_ms(self) -> int:
        return self.seconds * 1000 + self.millis

    def advance(self, seconds: int = 0, millis: int = 0) -> None:
        total = self.millis + millis
        self.seconds += seconds + total // 1000
        self.millis = total % 1000
