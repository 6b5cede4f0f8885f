import numpy

from perfidioms import Parameters


def arr_eq(a, b):
    """Return True if the two array-likes are close, even with NaN values."""
    return numpy.allclose(a, b, equal_nan=True)


def small_params(**fields):
    """Return Parameters small enough to run every variant in milliseconds."""
    params = Parameters(
        rows=200,
        repeat=1,
        number=1,
        tasks=8,
        workers=2,
        task_seconds=0.0,
        window=5,
        lookups=50,
        keys=20,
        cells=30,
        columns=4,
    )
    params.update(fields)
    return params
