"""Vectorized operations vs. loops.

Python is a great language for orchestrating work, but it has a performance
weakness: every iteration of a `for` loop executes several byte-code
instructions, boxes a new float object, and looks up the operators on it.
Most time-critical operations on data points should be done on arrays in C,
like NumPy does. We never want to call a Python function per data point!

There are two loop mistakes here, and they compound. Growing a list one
`append` at a time re-sizes the list as it goes; preallocating the output
avoids that, but still pays the per-element interpreter overhead. Writing
the whole computation as one array expression pays that overhead once per
*array* instead of once per *element*, and is typically two orders of
magnitude faster.
"""

import numpy

from .params import Parameters
from .timing import compare

TITLE = "Vectorized operations vs. loops"


def sample(params):
    return numpy.arange(params.rows, dtype=float)


# -------------------------------- squares -------------------------------- #


def squares_grow(x):
    out = []
    for v in x:
        out.append(v * v + 1)
    return numpy.array(out, dtype=float)


def squares_preallocate(x):
    out = numpy.empty(len(x), dtype=float)
    for i in range(len(x)):
        out[i] = x[i] * x[i] + 1
    return out


def squares_vectorized(x):
    return x ** 2 + 1


# ------------------------------ running total ------------------------------ #


def cumsum_loop(x):
    out = numpy.empty(len(x), dtype=float)
    total = 0.0
    for i in range(len(x)):
        total += x[i]
        out[i] = total
    return out


def cumsum_vectorized(x):
    return numpy.cumsum(x, dtype=float)


def run(params=None):
    """Return the Comparisons for this section."""
    if params is None:
        params = Parameters()
    x = sample(params)

    squares = compare(
        "x ** 2 + 1",
        {
            "grow": lambda: squares_grow(x),
            "preallocate": lambda: squares_preallocate(x),
            "vectorized": lambda: squares_vectorized(x),
        },
        params,
        repeat=params.repeat,
        number=params.number,
    )
    running = compare(
        "running total",
        {
            "loop": lambda: cumsum_loop(x),
            "vectorized": lambda: cumsum_vectorized(x),
        },
        params,
        repeat=params.repeat,
        number=params.number,
    )
    return [squares, running]
