"""Bar charts of section timings, via seaborn.

Requires the `charts` extra (seaborn and matplotlib).
"""

import logging
import os

import matplotlib
import pandas

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import seaborn as sns  # noqa: E402

logger = logging.getLogger(__name__)


def chart_filename(title):
    return "plot-%s.png" % title.replace(" ", "-").replace(":", "_").replace("/", "_")


def gen_chart(
    title,
    records,
    x="variant",
    y="seconds",
    col="comparison",
    hue=None,
    yscale="log",
    directory=".",
):
    """Save a bar chart of the given records and return its path.

    Each record is a dict, as returned by Comparison.records(). One chart
    column is drawn per distinct value of the `col` field.
    """
    df = pandas.DataFrame(records)
    if df.empty:
        raise ValueError("Cannot chart %r: no records." % (title,))

    logger.info("Generating '%s' chart", title)
    sns.set_theme(style="ticks")
    plot = sns.catplot(
        x=x,
        y=y,
        col=col,
        hue=hue,
        kind="bar",
        height=4,
        aspect=1.0,
        sharex=False,
        sharey=False,
        data=df,
    )
    for ax in plot.axes.flat:
        if yscale:
            ax.set_yscale(yscale)
        ax.set_xlabel(x)
    plot.figure.subplots_adjust(top=0.80, bottom=0.15, wspace=0.3)
    plot.figure.suptitle(title)

    path = os.path.join(directory, chart_filename(title))
    plot.savefig(path)
    plt.close(plot.figure)
    return path


def gen_section_charts(comparisons_by_section, directory="."):
    """Save one chart per section; return the paths written."""
    os.makedirs(directory, exist_ok=True)
    paths = []
    for title, comparisons in comparisons_by_section.items():
        records = [r for c in comparisons for r in c.records()]
        paths.append(gen_chart(title, records, directory=directory))
    return paths
