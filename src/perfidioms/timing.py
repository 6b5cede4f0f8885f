"""Measurement scaffolding shared by every section.

Each section does the same thing: run variant A, run variant B (and maybe C),
compare wall-clock time, and assert that the outputs are the same. A faster
way to compute the wrong answer is not an idiom worth teaching, so `compare`
checks results before it reports any timings.

Timings are the minimum over several repeats, as `timeit` recommends: higher
values are nearly always caused by other processes interfering with yours,
not by variability in your own code.
"""

import gc
import logging
import math
import numbers
import time
import timeit
from contextlib import contextmanager

import numpy
import pandas
import pandas.testing

from .errors import ResultMismatch, ThresholdExceeded

logger = logging.getLogger(__name__)


def best_of(func, repeat=3, number=1):
    """Return the fastest seconds-per-call of `func` over `repeat` trials."""
    if repeat < 1 or number < 1:
        raise ValueError("repeat and number must both be positive.")
    return min(timeit.repeat(func, repeat=repeat, number=number)) / number


class Timing:
    """The elapsed time of one variant, and the result it computed."""

    def __init__(self, name, seconds=None, result=None):
        self.name = name
        self.seconds = seconds
        self.result = result

    def __repr__(self):
        return "Timing(%r, %r)" % (self.name, self.seconds)


@contextmanager
def bench(name, threshold_ms=None):
    """Time the given context, yielding a Timing filled in on exit.

    If `threshold_ms` is not None, it must be the number of milliseconds
    that the context is expected to take (as an upper bound). If the context
    takes longer, ThresholdExceeded is raised.
    """
    gc.collect()
    timing = Timing(name)

    start = time.perf_counter()
    try:
        yield timing
    finally:
        timing.seconds = time.perf_counter() - start

    logger.debug("%s took %.6fs", name, timing.seconds)
    if threshold_ms is not None and (timing.seconds * 1000) > threshold_ms:
        raise ThresholdExceeded(
            "Benchmark %r time %.3fms > threshold %.3fms"
            % (name, timing.seconds * 1000, threshold_ms)
        )


class Comparison:
    """The timings of several variants of one task, in the order they ran."""

    def __init__(self, title, timings, params=None, commentary=""):
        if not timings:
            raise ValueError("A Comparison needs at least one timing.")
        self.title = title
        self.timings = list(timings)
        self.params = dict(params or {})
        self.commentary = commentary

    def __getitem__(self, name):
        for timing in self.timings:
            if timing.name == name:
                return timing
        raise KeyError(name)

    @property
    def names(self):
        return [t.name for t in self.timings]

    @property
    def fastest(self):
        return min(self.timings, key=lambda t: t.seconds)

    @property
    def slowest(self):
        return max(self.timings, key=lambda t: t.seconds)

    def relative(self, name):
        """Return the time of the named variant as a multiple of the fastest."""
        fastest = self.fastest.seconds
        if fastest == 0:
            return 1.0 if self[name].seconds == 0 else math.inf
        return self[name].seconds / fastest

    def table(self):
        """Return a fixed-width text table of the timings."""
        width = max([len("variant")] + [len(n) for n in self.names])
        lines = [
            self.title,
            "%-*s  %12s  %9s" % (width, "variant", "seconds", "relative"),
            "%s  %s  %s" % ("-" * width, "-" * 12, "-" * 9),
        ]
        for timing in self.timings:
            lines.append(
                "%-*s  %12.6f  %8.1fx"
                % (width, timing.name, timing.seconds, self.relative(timing.name))
            )
        if self.params:
            lines.append(
                "  ".join(["%s=%s" % (k, v) for k, v in sorted(self.params.items())])
            )
        return "\n".join(lines)

    def records(self):
        """Return one dict per timing, with the parameters merged in."""
        return [
            dict(
                self.params,
                comparison=self.title,
                variant=t.name,
                seconds=t.seconds,
                relative=self.relative(t.name),
            )
            for t in self.timings
        ]

    def to_frame(self):
        return pandas.DataFrame(self.records())


def assert_same(expected, actual, name=""):
    """Raise ResultMismatch unless `expected` and `actual` are the same result.

    Arrays and floats are compared within floating-point tolerance (NaN
    equals NaN); pandas objects with pandas.testing; containers recursively.
    """
    label = " (variant %r)" % (name,) if name else ""

    if isinstance(expected, (pandas.DataFrame, pandas.Series, pandas.Index)):
        if isinstance(expected, pandas.DataFrame):
            asserter = pandas.testing.assert_frame_equal
        elif isinstance(expected, pandas.Series):
            asserter = pandas.testing.assert_series_equal
        else:
            asserter = pandas.testing.assert_index_equal
        try:
            asserter(expected, actual)
        except AssertionError as exc:
            raise ResultMismatch("Results differ%s: %s" % (label, exc))
    elif isinstance(expected, numpy.ndarray) or isinstance(actual, numpy.ndarray):
        expected = numpy.asarray(expected)
        actual = numpy.asarray(actual)
        if expected.shape != actual.shape:
            raise ResultMismatch(
                "Result shapes differ%s: %s != %s" % (label, expected.shape, actual.shape)
            )
        if expected.dtype.kind in "biufc" and actual.dtype.kind in "biufc":
            same = numpy.allclose(expected, actual, equal_nan=True)
        else:
            same = bool(numpy.all(expected == actual))
        if not same:
            raise ResultMismatch("Result arrays differ%s." % (label,))
    elif isinstance(expected, dict):
        if not isinstance(actual, dict) or set(expected) != set(actual):
            raise ResultMismatch("Result keys differ%s." % (label,))
        for key in expected:
            assert_same(expected[key], actual[key], name)
    elif isinstance(expected, (list, tuple)):
        if not isinstance(actual, (list, tuple)) or len(expected) != len(actual):
            raise ResultMismatch("Result lengths differ%s." % (label,))
        for e, a in zip(expected, actual):
            assert_same(e, a, name)
    elif isinstance(expected, float) or isinstance(actual, float):
        if not (
            isinstance(expected, numbers.Real) and isinstance(actual, numbers.Real)
        ):
            raise ResultMismatch(
                "Result types differ%s: %r != %r" % (label, expected, actual)
            )
        if not (
            math.isclose(expected, actual, rel_tol=1e-9, abs_tol=1e-12)
            or (math.isnan(expected) and math.isnan(actual))
        ):
            raise ResultMismatch("Results differ%s: %r != %r" % (label, expected, actual))
    elif expected != actual:
        raise ResultMismatch("Results differ%s: %r != %r" % (label, expected, actual))


def compare(
    title, variants, params=None, repeat=3, number=1, check=assert_same, commentary=""
):
    """Time each of the given variants and return a Comparison.

    The `variants` arg must be an ordered mapping of name to a callable
    taking no arguments. Each is called once, untimed, to get its result
    (this also warms up anything which compiles or caches on first call),
    and then timed with `best_of`. Unless `check` is None, every result
    is checked against that of the first variant.
    """
    if not variants:
        raise ValueError("compare() needs at least one variant.")

    timings = []
    for name, func in variants.items():
        gc.collect()
        result = func()
        if check is not None and timings:
            check(timings[0].result, result, name)
        seconds = best_of(func, repeat=repeat, number=number)
        logger.debug("%s: %s took %.6fs", title, name, seconds)
        timings.append(Timing(name, seconds, result))

    return Comparison(title, timings, params, commentary)
