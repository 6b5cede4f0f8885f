"""Multi-core parallel map.

When each task is independent, the simplest parallelism is a worker pool:
start one worker per core, hand each an input, collect the outputs in order,
and tear the pool down. `multiprocessing.Pool` does all of that for us; we
only choose the pool size and how work is handed out.

A process pool sidesteps the GIL, but it has to start processes and pickle
every input and output across a pipe. A thread pool starts almost instantly
and shares memory, but only overlaps work which releases the GIL: I/O,
sleeping, and most NumPy routines. The trivial task here sleeps, so both pools
help; swap in a pure-Python arithmetic loop and the thread pool stops helping.

We pass `chunksize=1` to `imap`, which hands out one input at a time as
workers become free. That balances load when task durations vary, at the cost
of one round trip per task. The pool start-up is inside the timed region: a
parallel map that is only worth it once the pool is warm is not worth it for
a one-off job.
"""

import functools
import logging
import multiprocessing
import multiprocessing.pool
import time
from contextlib import closing

from .params import Parameters
from .timing import compare

logger = logging.getLogger(__name__)

TITLE = "Multi-core parallel map"


def task(x, seconds=0.0):
    """Sleep for `seconds`, then return the square of `x`."""
    if seconds:
        time.sleep(seconds)
    return x * x


def serial_map(func, inputs):
    return list(map(func, inputs))


def pool_map(func, inputs, poolsize, pool_class=multiprocessing.Pool):
    """Map `func` over `inputs` with a new pool, returning results in order."""
    with closing(pool_class(poolsize)) as pool:
        results = list(pool.imap(func, inputs, chunksize=1))
    pool.join()
    return results


def run(params=None):
    """Return the Comparisons for this section."""
    if params is None:
        params = Parameters()
    inputs = list(range(params.tasks))
    func = functools.partial(task, seconds=params.task_seconds)
    logger.debug("mapping %d tasks over %d workers", len(inputs), params.workers)

    comparison = compare(
        "map %d tasks" % len(inputs),
        {
            "serial": lambda: serial_map(func, inputs),
            "processes": lambda: pool_map(func, inputs, params.workers),
            "threads": lambda: pool_map(
                func, inputs, params.workers, multiprocessing.pool.ThreadPool
            ),
        },
        params,
        repeat=params.repeat,
        number=params.number,
    )
    return [comparison]
