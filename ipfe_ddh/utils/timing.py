import contextlib
import time


class _Timer(contextlib.AbstractContextManager):
    def __init__(self):
        self.elapsed = None

    def __enter__(self):
        self.t0 = time.perf_counter()
        return self

    def __exit__(self, *exc):
        self.elapsed = time.perf_counter() - self.t0
        return False


def timed():
    return _Timer()
