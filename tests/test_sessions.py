from splitscan.receipt.progress import Stage
from splitscan.receipt.sessions import ScanSessions


def test_new_scan_supersedes_previous():
    sessions = ScanSessions()
    first = sessions.begin("ctk-1")
    first.progress.report(Stage.RESPONSE_RECEIVED)

    second = sessions.begin("ctk-1")

    assert not sessions.is_current(first)
    assert sessions.is_current(second)
    assert sessions.progress("ctk-1") == 0


def test_superseded_run_cannot_clear_new_run():
    sessions = ScanSessions()
    first = sessions.begin("ctk-1")
    second = sessions.begin("ctk-1")
    second.progress.report(Stage.REQUEST_BUILT)

    sessions.finish(first)

    assert sessions.is_current(second)
    assert sessions.progress("ctk-1") == 25


def test_sessions_are_independent():
    sessions = ScanSessions()
    a = sessions.begin("a")
    sessions.begin("b")
    a.progress.report(Stage.IMAGE_ENCODED)
    assert sessions.progress("a") == 50
    assert sessions.progress("b") == 0
    sessions.finish(a)
    assert sessions.progress("a") == 0
