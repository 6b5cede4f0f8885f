"""Performance idioms for data analysis in Python, as runnable benchmarks."""

from .errors import PerfIdiomsError, ResultMismatch, ThresholdExceeded, UnknownSection
from .params import Parameters
from .timing import Comparison, Timing, assert_same, bench, best_of, compare

__version__ = "1.0.0a1"
