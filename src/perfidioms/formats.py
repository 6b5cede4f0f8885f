"""File-format choice for data interchange.

Delimited text (CSV) is the lingua franca: one record per line, a header
row of column names, readable by anything. But it stores only text. Every
reload has to parse each field and re-infer each column's type, and some
types do not survive at all: categories come back as plain strings, dates
come back as strings unless you ask for them by name, and a column of
integers with one blank becomes floats.

A binary serialized-object format (here, pickle) writes the in-memory
structure itself: typed column arrays, categories, timestamps, and any
number of other Python objects in the same file. It is usually smaller
on disk and much faster to reload, because no type inference happens.
The trade-off is that it is Python-specific and must only be loaded from
sources you trust, since unpickling can execute arbitrary code.

Use text for interchange with other tools and people; use a binary format
for saving intermediate results you will reload yourself.
"""

import logging
import os
import pickle
import shutil
import tempfile

import numpy
import pandas

from .params import Parameters
from .timing import assert_same, compare

logger = logging.getLogger(__name__)

TITLE = "File-format choice for data interchange"

OBJECTS_MAGIC = "PERFIDIOMS-OBJECTS"
OBJECTS_VERSION = 1


def sample(params):
    """Return a DataFrame with one column of each common dtype."""
    rng = numpy.random.default_rng(params.seed)
    rows = params.rows
    return pandas.DataFrame(
        {
            "count": rng.integers(0, 1000, rows),
            "score": rng.random(rows),
            "name": ["name-%d" % i for i in rng.integers(0, 100, rows)],
            "grade": pandas.Categorical(
                rng.choice(["low", "mid", "high"], rows),
                categories=["low", "mid", "high"],
                ordered=True,
            ),
            "when": pandas.Timestamp("2020-01-01")
            + pandas.to_timedelta(rng.integers(0, 86400 * 365, rows), unit="s"),
            "flag": rng.random(rows) < 0.5,
        }
    )


# ----------------------------- delimited text ----------------------------- #


def save_csv(path, frame):
    """Write the frame as delimited text with a header row and no index."""
    frame.to_csv(path, index=False)


def load_csv(path):
    """Read delimited text, inferring every column's type from its text."""
    return pandas.read_csv(path)


# ---------------------------- serialized objects ---------------------------- #


def save_objects(path, **objects):
    """Write any number of named objects to a single binary file."""
    if not objects:
        raise ValueError("save_objects() needs at least one object to save.")
    with open(path, "wb") as f:
        pickle.dump(
            {"magic": OBJECTS_MAGIC, "version": OBJECTS_VERSION, "objects": objects},
            f,
            protocol=pickle.HIGHEST_PROTOCOL,
        )


def load_objects(path):
    """Read a file written by save_objects and return its dict of objects.

    Only load files you wrote yourself: unpickling can execute arbitrary code.
    """
    with open(path, "rb") as f:
        payload = pickle.load(f)

    if not isinstance(payload, dict) or payload.get("magic") != OBJECTS_MAGIC:
        raise RuntimeError("Unexpected header")
    if payload.get("version") != OBJECTS_VERSION:
        raise RuntimeError("Unexpected objects format %s" % payload.get("version"))
    return payload["objects"]


def dtype_report(original, loaded):
    """Return {column: (original dtype, loaded dtype, preserved)} for each column.

    Columns missing from `loaded` are reported with a loaded dtype of None.
    """
    report = {}
    for column in original.columns:
        before = str(original[column].dtype)
        after = str(loaded[column].dtype) if column in loaded.columns else None
        report[column] = (before, after, before == after)
    return report


def lost_dtypes(report):
    return [column for column, (_, _, preserved) in report.items() if not preserved]


def run(params=None, directory=None):
    """Return the Comparisons for this section.

    Files are written to `directory` if given, else to a temporary directory
    which is removed afterward.
    """
    if params is None:
        params = Parameters()
    frame = sample(params)
    extra = numpy.arange(params.rows, dtype=float)

    cleanup = directory is None
    if cleanup:
        directory = tempfile.mkdtemp(prefix="perfidioms-")
    logger.debug("writing sample files to %s", directory)
    csv_path = os.path.join(directory, "sample.csv")
    pickle_path = os.path.join(directory, "sample.pickle")

    try:
        writes = compare(
            "write %d rows" % len(frame),
            {
                "csv": lambda: save_csv(csv_path, frame),
                "pickle": lambda: save_objects(pickle_path, frame=frame, extra=extra),
            },
            params,
            repeat=params.repeat,
            number=params.number,
        )
        writes.params["csv_bytes"] = os.path.getsize(csv_path)
        writes.params["pickle_bytes"] = os.path.getsize(pickle_path)

        # The formats return different dtypes; check each against the original.
        reads = compare(
            "read %d rows" % len(frame),
            {
                "csv": lambda: load_csv(csv_path),
                "pickle": lambda: load_objects(pickle_path),
            },
            params,
            repeat=params.repeat,
            number=params.number,
            check=None,
        )
        loaded = reads["pickle"].result
        assert_same(frame, loaded["frame"], "pickle")
        assert_same(extra, loaded["extra"], "pickle")

        csv_frame = reads["csv"].result
        assert_same(frame["count"].to_numpy(), csv_frame["count"].to_numpy(), "csv")
        assert_same(frame["score"].to_numpy(), csv_frame["score"].to_numpy(), "csv")
        reads.params["csv_lost_dtypes"] = ",".join(
            lost_dtypes(dtype_report(frame, csv_frame))
        )
    finally:
        if cleanup:
            shutil.rmtree(directory, ignore_errors=True)

    return [writes, reads]
