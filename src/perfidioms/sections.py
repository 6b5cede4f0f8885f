"""The registry of sections, and a runner which prints them as a tutorial."""

import logging
import sys
import textwrap

from . import compiled, formats, lookup, mutation, parallel, tables, vectors
from .errors import UnknownSection
from .params import Parameters

logger = logging.getLogger(__name__)

SECTIONS = {
    "vectors": vectors,
    "compiled": compiled,
    "parallel": parallel,
    "tables": tables,
    "lookup": lookup,
    "mutation": mutation,
    "formats": formats,
}


def get_section(name):
    try:
        return SECTIONS[name]
    except KeyError:
        raise UnknownSection(
            "Unknown section %r; expected one of: %s" % (name, ", ".join(SECTIONS))
        )


def commentary(section):
    """Return the paragraphs of a section's docstring after its title line."""
    doc = textwrap.dedent(section.__doc__ or "").strip()
    paragraphs = [p.strip() for p in doc.split("\n\n")]
    return paragraphs[1:]


def summary(section):
    """Return the first paragraph of a section's commentary, or its title."""
    paragraphs = commentary(section)
    return " ".join(paragraphs[0].split()) if paragraphs else section.TITLE


def run_sections(names=None, params=None, out=None, verbose_commentary=True):
    """Run the named sections (all, by default) and print them in order.

    Every name is resolved before any section runs, so a typo fails fast.
    Each section gets its own copy of `params`, so that its tables report
    only the parameters it used. Returns {section name: [Comparison, ...]}.
    """
    if out is None:
        out = sys.stdout
    if names is None:
        names = list(SECTIONS)
    modules = [(name, get_section(name)) for name in names]
    if params is None:
        params = Parameters()

    results = {}
    for name, section in modules:
        section_params = Parameters(params).validate()
        logger.info("running section %s", name)
        comparisons = section.run(section_params)

        print("", file=out)
        print(section.TITLE, file=out)
        print("=" * len(section.TITLE), file=out)
        paragraphs = commentary(section) if verbose_commentary else []
        for paragraph in paragraphs:
            print("", file=out)
            print(textwrap.fill(" ".join(paragraph.split()), width=79), file=out)
        for comparison in comparisons:
            print("", file=out)
            print(comparison.table(), file=out)

        results[name] = comparisons
    return results
