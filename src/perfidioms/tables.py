"""A columnar table library.

A pandas DataFrame stores each column as its own typed array, so whole-column
work runs at NumPy speed. Two habits decide whether you get that speed.

Finding rows by key: comparing a column against each key scans every row,
once per key. Setting the key column as the index builds a hash table once,
after which `.loc` finds any number of keys in one call.

Updating a column: since pandas 3, copy-on-write is always on. Methods such as
`DataFrame.assign` return a new frame which shares every untouched column with
the old one, and only the column being replaced is written, so they are no
longer the expensive habit they were under pandas 1 and 2. What still costs a
full pass over the table is the explicit `frame.copy()` taken "to be safe"
before editing one column: a deep copy duplicates every column, even those you
do not touch. Assigning through `.loc` with a boolean mask writes into the
frame you already have. Take the copy when you need the original afterward,
not out of habit.
"""

import numpy
import pandas

from .params import Parameters
from .timing import compare

TITLE = "Columnar table library"

GROUPS = ["a", "b", "c", "d", "e"]


def sample(params):
    """Return a frame of `rows` rows with unique ids, a group, and a value."""
    rng = numpy.random.default_rng(params.seed)
    rows = params.rows
    return pandas.DataFrame(
        {
            "id": rng.permutation(rows),
            "group": pandas.Categorical(rng.choice(GROUPS, rows), categories=GROUPS),
            "value": rng.random(rows),
        }
    )


def sample_ids(params, frame):
    rng = numpy.random.default_rng(params.seed + 1)
    return rng.choice(frame["id"].to_numpy(), min(params.lookups, len(frame)))


# -------------------------------- lookups -------------------------------- #


def lookup_scan(frame, ids):
    ids_col = frame["id"].to_numpy()
    values = frame["value"].to_numpy()
    return numpy.array([values[ids_col == i][0] for i in ids])


def lookup_indexed(indexed, ids):
    return indexed.loc[ids, "value"].to_numpy()


# -------------------------------- updates -------------------------------- #


def update_copy(frame, group="a"):
    updated = frame.copy(deep=True)
    updated.loc[updated["group"] == group, "value"] *= 2
    return updated


def update_in_place(frame, group="a"):
    frame.loc[frame["group"] == group, "value"] *= 2
    return frame


def run(params=None):
    """Return the Comparisons for this section."""
    if params is None:
        params = Parameters()
    frame = sample(params)
    ids = sample_ids(params, frame)
    indexed = frame.set_index("id")

    lookups = compare(
        "find %d rows by id" % len(ids),
        {
            "scan": lambda: lookup_scan(frame, ids),
            "indexed": lambda: lookup_indexed(indexed, ids),
        },
        params,
        repeat=params.repeat,
        number=params.number,
    )

    # In-place runs keep doubling the same working frame; only the first,
    # untimed result is checked against the copy.
    working = frame.copy()
    updates = compare(
        "double one group's values",
        {
            "copy": lambda: update_copy(frame),
            "in_place": lambda: update_in_place(working),
        },
        params,
        repeat=params.repeat,
        number=params.number,
    )
    return [lookups, updates]
