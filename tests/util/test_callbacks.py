from numpy.testing import assert_, assert_equal

from markovsim.util.callbacks import supports_progress_interface, handle_progress_bar, ProgressCallback, \
    StepProgressCallback


class ProgressMock:
    def __init__(self, total=None):
        self.total = total
        self.n = 0
        self.description = None
        self.closed = False

    def update(self, inc=1):
        self.n += inc

    def close(self):
        self.closed = True

    def set_description(self, value):
        self.description = value


def test_supports_interface():
    assert_(supports_progress_interface(ProgressMock()))
    assert_(supports_progress_interface(handle_progress_bar(None)()))
    assert_(not supports_progress_interface(object()))
    assert_(not supports_progress_interface(None))


def test_progress_callback():
    with ProgressCallback(ProgressMock, "desc", total=5) as callback:
        callback()
        callback(2)
        bar = callback.progress_bar
        assert_equal(bar.n, 3)
        assert_equal(bar.total, 5)
        assert_equal(bar.description, "desc")
    assert_(bar.closed)


def test_step_progress_callback():
    callback = StepProgressCallback(ProgressMock, "Simulating", total=10)
    callback(step=4)
    assert_equal(callback.progress_bar.description, "Simulating - [t=4]")
    callback()
    assert_equal(callback.progress_bar.n, 2)


def test_null_progress_bar():
    bar_cls = handle_progress_bar(None)
    bar = bar_cls(total=3)
    bar.update()
    bar.update(2)
    assert_equal(bar.n, 3)
    assert_equal(bar.total, 3)
    assert_(handle_progress_bar(ProgressMock) is ProgressMock)
