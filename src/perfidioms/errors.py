class PerfIdiomsError(Exception):
    """Base class for errors raised by perfidioms."""


class ResultMismatch(PerfIdiomsError, AssertionError):
    """Two variants of the same task computed different results."""


class ThresholdExceeded(PerfIdiomsError):
    """A benchmarked block took longer than its threshold."""


class UnknownSection(PerfIdiomsError, KeyError):
    """No section is registered under the requested name."""

    def __str__(self):
        return str(self.args[0]) if self.args else ""
