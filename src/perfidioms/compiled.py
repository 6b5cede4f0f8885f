"""Byte-code compilation.

When a computation really is a loop--each output depends on the state
left by the previous iteration, or the vectorized formulation would need
several temporary arrays--we can still avoid paying the interpreter per
element by compiling the loop. Numba's `njit` takes the *same* Python
function and translates its byte code to machine code the first time it is
called with a given set of argument types.

That first call is expensive: it runs the whole compiler. We time it
separately (`compile_seconds` in the table's parameters) and exclude it from
the repeats, which is only fair if the routine is called many times per
process. For a routine called once, the compile cost dominates and the
interpreted version wins.

A moving average is the example here. The vectorized formulation differences
a cumulative sum, which is fast but accumulates floating-point error over
long inputs; the compiled loop keeps a running window sum and is just as
fast.
"""

import logging
import time

import numba
import numpy

from .params import Parameters
from .timing import compare

logger = logging.getLogger(__name__)

TITLE = "Byte-code compilation"


def moving_average(x, window):
    """Return the mean of each full `window`-length run of `x`."""
    n = len(x) - window + 1
    if n < 1:
        return numpy.empty(0, dtype=numpy.float64)
    out = numpy.empty(n, dtype=numpy.float64)
    total = 0.0
    for i in range(window):
        total += x[i]
    out[0] = total / window
    for i in range(1, n):
        total += x[i + window - 1] - x[i - 1]
        out[i] = total / window
    return out


moving_average_compiled = numba.njit(cache=False)(moving_average)


def moving_average_vectorized(x, window):
    n = len(x) - window + 1
    if n < 1:
        return numpy.empty(0, dtype=numpy.float64)
    sums = numpy.cumsum(numpy.concatenate(([0.0], x)))
    return (sums[window:] - sums[:-window]) / window


def sample(params):
    rng = numpy.random.default_rng(params.seed)
    return rng.random(params.rows)


def compile_seconds(x, window):
    """Return the seconds spent compiling on the first call for these types.

    If a signature for these argument types has already been compiled,
    this measures an ordinary call instead.
    """
    start = time.perf_counter()
    moving_average_compiled(x, window)
    elapsed = time.perf_counter() - start
    logger.debug("moving_average first call took %.6fs", elapsed)
    return elapsed


def run(params=None):
    """Return the Comparisons for this section."""
    if params is None:
        params = Parameters()
    x = sample(params)
    window = params.window

    first_call = compile_seconds(x, window)
    comparison = compare(
        "moving average",
        {
            "interpreted": lambda: moving_average(x, window),
            "compiled": lambda: moving_average_compiled(x, window),
            "vectorized": lambda: moving_average_vectorized(x, window),
        },
        params,
        repeat=params.repeat,
        number=params.number,
    )
    comparison.params["compile_seconds"] = round(first_call, 6)
    return [comparison]
