from splitscan.receipt.progress import ProgressReporter, Stage


def test_progress_is_monotonic():
    seen = []
    progress = ProgressReporter([seen.append])
    progress.report(Stage.RESPONSE_RECEIVED)
    progress.report(Stage.REQUEST_BUILT)
    progress.report(Stage.COMPLETE)
    assert progress.value == 100
    assert seen == [70, 100]


def test_reset_returns_to_zero():
    seen = []
    progress = ProgressReporter()
    progress.subscribe(seen.append)
    progress.report(Stage.IMAGE_ENCODED)
    progress.reset()
    assert progress.value == 0
    assert seen == [50, 0]


def test_failing_listener_does_not_break_reporting():
    seen = []

    def broken(_value):
        raise RuntimeError("ui went away")

    progress = ProgressReporter([broken, seen.append])
    progress.report(Stage.REQUEST_BUILT)
    assert progress.value == 25
    assert seen == [25]
