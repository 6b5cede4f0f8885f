"""Matrix vs. heterogeneous table mutation.

A NumPy matrix is one block of memory with one dtype; `arr[i, j] = v`
computes an offset and writes eight bytes. A DataFrame is a collection of
columns which may each have a different dtype, with row and column labels
on top. Even when every column is a float, each single-cell assignment
has to resolve the labels or positions, find the column's block, check
the dtype, and invalidate cached state.

None of that matters for whole-column work. It matters a great deal for
code which fills in a table one cell at a time: do that in a matrix, then
wrap the finished matrix in a DataFrame once.
"""

import numpy
import pandas

from .params import Parameters
from .timing import compare

TITLE = "Matrix vs. heterogeneous table mutation"


def sample(params):
    """Return (matrix, row positions, column positions, new values)."""
    rng = numpy.random.default_rng(params.seed)
    rows, columns, cells = params.rows, params.columns, params.cells
    matrix = numpy.zeros((rows, columns))
    ri = rng.integers(0, rows, cells)
    ci = rng.integers(0, columns, cells)
    values = rng.random(cells)
    return matrix, ri, ci, values


def column_names(columns):
    return ["c%d" % i for i in range(columns)]


def mutate_matrix(matrix, ri, ci, values):
    arr = matrix.copy()
    for i, j, v in zip(ri.tolist(), ci.tolist(), values.tolist()):
        arr[i, j] = v
    return arr


def mutate_frame_iat(matrix, ri, ci, values):
    names = column_names(matrix.shape[1])
    frame = pandas.DataFrame(matrix, columns=names, copy=True)
    for i, j, v in zip(ri.tolist(), ci.tolist(), values.tolist()):
        frame.iat[i, j] = v
    return frame.to_numpy()


def mutate_frame_loc(matrix, ri, ci, values):
    names = column_names(matrix.shape[1])
    frame = pandas.DataFrame(matrix, columns=names, copy=True)
    for i, j, v in zip(ri.tolist(), ci.tolist(), values.tolist()):
        frame.loc[i, names[j]] = v
    return frame.to_numpy()


def run(params=None):
    """Return the Comparisons for this section."""
    if params is None:
        params = Parameters()
    matrix, ri, ci, values = sample(params)

    comparison = compare(
        "assign %d cells one at a time" % len(values),
        {
            "matrix": lambda: mutate_matrix(matrix, ri, ci, values),
            "frame_iat": lambda: mutate_frame_iat(matrix, ri, ci, values),
            "frame_loc": lambda: mutate_frame_loc(matrix, ri, ci, values),
        },
        params,
        repeat=params.repeat,
        number=params.number,
    )
    return [comparison]
