import enum
import logging
from typing import Callable

logger = logging.getLogger("splitscan")

ProgressListener = Callable[[int], None]


class Stage(enum.IntEnum):
    """Pipeline milestones; the value is the percentage shown to the user."""

    REQUEST_BUILT = 25
    IMAGE_ENCODED = 50
    RESPONSE_RECEIVED = 70
    RESPONSE_PARSED = 90
    COMPLETE = 100


class ProgressReporter:
    """Coarse progress side channel for one scan run.

    The value only moves forward until ``reset()``. Listeners are called
    synchronously and their failures are logged, never raised into the run.
    """

    def __init__(self, listeners: list[ProgressListener] | None = None):
        self._value = 0
        self._listeners: list[ProgressListener] = list(listeners or [])

    @property
    def value(self) -> int:
        return self._value

    def subscribe(self, listener: ProgressListener) -> None:
        self._listeners.append(listener)

    def report(self, stage: Stage) -> None:
        percent = max(0, min(100, int(stage)))
        if percent < self._value:
            return
        self._value = percent
        self._notify()

    def reset(self) -> None:
        self._value = 0
        self._notify()

    def _notify(self) -> None:
        for listener in self._listeners:
            try:
                listener(self._value)
            except Exception:
                logger.warning("Progress listener failed", exc_info=True)
