"""Command line entry point: run sections and print their timing tables."""

import argparse
import logging
import sys
import textwrap

from .errors import ResultMismatch, UnknownSection
from .params import Parameters
from .sections import SECTIONS, run_sections, summary


def build_parser():
    parser = argparse.ArgumentParser(
        prog="perfidioms",
        description="Time alternative ways of doing small data-analysis tasks.",
    )
    parser.add_argument(
        "sections",
        nargs="*",
        metavar="SECTION",
        help="sections to run, in order (default: all)",
    )
    parser.add_argument("--rows", type=int, help="rows of sample data")
    parser.add_argument("--repeat", type=int, help="timing repeats per variant")
    parser.add_argument("--workers", type=int, help="worker pool size")
    parser.add_argument("--tasks", type=int, help="tasks for the parallel map")
    parser.add_argument("--seed", type=int, help="random seed for sample data")
    parser.add_argument(
        "--chart", metavar="DIR", help="also save a chart per section in DIR"
    )
    parser.add_argument(
        "--brief", action="store_true", help="print tables without commentary"
    )
    parser.add_argument(
        "--list", action="store_true", help="list the sections and exit"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log debug messages"
    )
    return parser


def main(argv=None, out=None):
    if out is None:
        out = sys.stdout
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    logging.getLogger("perfidioms").setLevel(level)

    if args.list:
        for name, section in SECTIONS.items():
            print("%-10s %s" % (name, section.TITLE), file=out)
            indent = " " * 11
            print(
                textwrap.fill(
                    summary(section),
                    79,
                    initial_indent=indent,
                    subsequent_indent=indent,
                ),
                file=out,
            )
        return 0

    try:
        params = Parameters.from_environ()
        for key in ("rows", "repeat", "workers", "tasks", "seed"):
            value = getattr(args, key)
            if value is not None:
                params[key] = value
        params.validate()
    except ValueError as exc:
        print("perfidioms: error: %s" % (exc,), file=sys.stderr)
        return 2

    if args.chart:
        try:
            from . import charts
        except ImportError as exc:
            print(
                "perfidioms: error: --chart needs the charts extra "
                "(pip install perfidioms[charts]): %s" % (exc,),
                file=sys.stderr,
            )
            return 2

    try:
        results = run_sections(
            args.sections or None,
            params,
            out=out,
            verbose_commentary=not args.brief,
        )
    except UnknownSection as exc:
        print("perfidioms: error: %s" % (exc,), file=sys.stderr)
        return 2
    except ResultMismatch as exc:
        print("perfidioms: variants disagree: %s" % (exc,), file=sys.stderr)
        return 1

    if args.chart:
        for path in charts.gen_section_charts(results, args.chart):
            print("Saved %s" % path, file=out)

    return 0

