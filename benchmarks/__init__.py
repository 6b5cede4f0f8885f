"""Benchmarking for perfidioms.

The sections in perfidioms each compare a slow idiom to a fast one. The tests
in `tests/` check that every variant computes the same answer; the benchmarks
here check that the fast variants stay fast, so that a dependency upgrade or
a careless edit which quietly turns a vectorized path back into a loop
shows up as a regression.

These are run via py.test like the rest of our test suite:

    pytest -s benchmarks

Please write "unit benchmarks" that time one fast variant each. Do not add
separate benchmarks which only vary by the number of rows or keys; pick
the size that matters and only test that. The base class here provides
helpers for exactly that, defaulting to the sensible sizes in
perfidioms.Parameters, which individual benchmarks may override.
"""

import unittest
from contextlib import contextmanager

import pytest

from perfidioms import Parameters, ThresholdExceeded, bench


class UnitBenchmark(unittest.TestCase):

    maxDiff = None

    def setUp(self):
        super().setUp()
        self.params = Parameters()

    def tearDown(self):
        self.params = None
        super().tearDown()

    @contextmanager
    def bench(self, name, threshold_ms=None):
        """Wrap the given context in a benchmark.

        If `threshold_ms` is not None, it must be the number of
        milliseconds that the context is expected to take (as an upper bound).
        If the context takes more time than this to complete, the test xfails.

        This should be a one-way ratchet: never increased, but occasionally
        decreased as effort is devoted to user happiness.
        """
        try:
            with bench(name, threshold_ms) as timing:
                yield timing
        except ThresholdExceeded as exc:
            print("\n%10.6f" % timing.seconds, name, self.params.paramstr())
            pytest.xfail(str(exc))
        print("\n%10.6f" % timing.seconds, name, self.params.paramstr())
