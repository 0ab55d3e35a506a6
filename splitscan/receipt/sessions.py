import itertools
import logging
from dataclasses import dataclass, field

from splitscan.receipt.progress import ProgressReporter

logger = logging.getLogger("splitscan")

_run_ids = itertools.count(1)


@dataclass
class ScanRun:
    session_key: str
    run_id: int = field(default_factory=lambda: next(_run_ids))
    progress: ProgressReporter = field(default_factory=ProgressReporter)


class ScanSessions:
    """At most one current scan per session.

    Starting a new scan abandons the previous one: its request keeps running
    but its result is dropped by the caller once ``is_current`` turns False.
    """

    def __init__(self):
        self._current: dict[str, ScanRun] = {}

    def begin(self, session_key: str) -> ScanRun:
        run = ScanRun(session_key=session_key)
        previous = self._current.get(session_key)
        if previous is not None:
            logger.info(
                "Scan superseded",
                extra={"extra_data": {"ctk": session_key, "run_id": previous.run_id}},
            )
        self._current[session_key] = run
        return run

    def is_current(self, run: ScanRun) -> bool:
        return self._current.get(run.session_key) is run

    def finish(self, run: ScanRun) -> None:
        if self.is_current(run):
            del self._current[run.session_key]

    def progress(self, session_key: str) -> int:
        run = self._current.get(session_key)
        return run.progress.value if run is not None else 0


scan_sessions = ScanSessions()
