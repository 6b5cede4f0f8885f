"""Lookup-table strategies.

Translating codes to labels is one of the most common small jobs in data
cleaning, and one of the easiest to get quadratically wrong.

`list.index` searches from the front every time: a thousand-entry table
costs up to a thousand comparisons per lookup. A dict hashes the code and
goes straight to the entry, at the price of one interpreted call per lookup.
A pandas Series indexed by code, or a sorted NumPy key array probed with
`searchsorted`, translate the whole batch of codes in a single call, which
is what you want whenever the codes arrive as a column rather than one
at a time.
"""

import numpy
import pandas

from .params import Parameters
from .timing import compare

TITLE = "Lookup-table strategies"


def sample(params):
    """Return (codes, labels, queries): a shuffled code table and codes to find."""
    rng = numpy.random.default_rng(params.seed)
    codes = rng.permutation(params.keys * 10)[: params.keys]
    labels = numpy.array(["label-%d" % c for c in codes], dtype=object)
    queries = rng.choice(codes, params.lookups)
    return codes, labels, queries


def lookup_scan(codes, labels, queries):
    codes = codes.tolist()
    return [labels[codes.index(q)] for q in queries.tolist()]


def lookup_dict(codes, labels, queries):
    table = dict(zip(codes.tolist(), labels.tolist()))
    return [table[q] for q in queries.tolist()]


def lookup_series(codes, labels, queries):
    table = pandas.Series(labels, index=codes)
    return table.loc[queries].tolist()


def lookup_searchsorted(codes, labels, queries):
    order = numpy.argsort(codes)
    sorted_codes = codes[order]
    positions = numpy.searchsorted(sorted_codes, queries)
    if len(positions) and (
        positions.max() >= len(sorted_codes)
        or (sorted_codes[positions] != queries).any()
    ):
        raise KeyError("Some queried codes are not in the lookup table.")
    return labels[order][positions].tolist()


def run(params=None):
    """Return the Comparisons for this section."""
    if params is None:
        params = Parameters()
    codes, labels, queries = sample(params)

    comparison = compare(
        "translate %d codes" % len(queries),
        {
            "scan": lambda: lookup_scan(codes, labels, queries),
            "dict": lambda: lookup_dict(codes, labels, queries),
            "series": lambda: lookup_series(codes, labels, queries),
            "searchsorted": lambda: lookup_searchsorted(codes, labels, queries),
        },
        params,
        repeat=params.repeat,
        number=params.number,
    )
    return [comparison]
