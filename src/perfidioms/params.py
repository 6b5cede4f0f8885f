import os
from contextlib import contextmanager


def _cpu_count():
    return os.cpu_count() or 1


class Parameters(dict):
    """A helper for passing around parameters in section runs.

    Sections need to set parameters, such as the number of rows or worker
    processes, and also emit those in the reported tables, so that multiple
    runs with different parameters can be distinguished. Rather than pass
    the same handful of arguments through every section and helper function,
    we set them here.

    There is some extra magic here concerning default parameters. We want to
    report all parameters that are actually in use by a section, but not
    those that are not. The lookup section has no use for `workers`, and the
    parallel section has no use for `rows`; neither should print them.
    We therefore record params only when accessed explicitly, either by the
    section itself, or by a helper which constructs sample data.
    """

    _defaults = {
        "rows": 100000,
        "repeat": 3,
        "number": 1,
        "tasks": 100,
        "workers": _cpu_count,
        "task_seconds": 0.01,
        "window": 10,
        "lookups": 10000,
        "keys": 1000,
        "cells": 1000,
        "columns": 10,
        "seed": 42,
    }

    _positive = (
        "rows",
        "repeat",
        "number",
        "tasks",
        "workers",
        "window",
        "lookups",
        "keys",
        "cells",
        "columns",
    )

    ENV_PREFIX = "PERFIDIOMS_"

    def __getattr__(self, key):
        if key in self:
            return self[key]
        elif key in self._defaults:
            default = self._defaults[key]
            self[key] = default() if callable(default) else default
            return self[key]

        raise AttributeError("'Parameters' object has no attribute '%s'" % (key,))

    def __setattr__(self, key, value):
        self[key] = value

    @contextmanager
    def __call__(self, **fields):
        old_params = dict(self)
        self.update(fields)
        try:
            yield self
        finally:
            self.clear()
            self.update(old_params)

    def validate(self):
        """Raise ValueError if any recorded size parameter is not positive."""
        for key in self._positive:
            if key in self:
                value = self[key]
                if not isinstance(value, int) or isinstance(value, bool):
                    raise ValueError(
                        "Parameter %r must be an integer, not %r." % (key, value)
                    )
                if value < 1:
                    raise ValueError(
                        "Parameter %r must be positive, not %r." % (key, value)
                    )
        if "task_seconds" in self and self["task_seconds"] < 0:
            raise ValueError(
                "Parameter 'task_seconds' must not be negative, not %r."
                % (self["task_seconds"],)
            )
        return self

    @classmethod
    def from_environ(cls, environ=None):
        """Return Parameters set from any PERFIDIOMS_<NAME> environment variables.

        Values are coerced to the type of the corresponding default; keys
        with no default are ignored.
        """
        if environ is None:
            environ = os.environ

        params = cls()
        for key, default in cls._defaults.items():
            raw = environ.get(cls.ENV_PREFIX + key.upper())
            if raw is None:
                continue
            kind = int if callable(default) else type(default)
            try:
                params[key] = kind(raw)
            except ValueError:
                raise ValueError(
                    "%s%s=%r is not a valid %s."
                    % (cls.ENV_PREFIX, key.upper(), raw, kind.__name__)
                )
        return params.validate()

    def paramstr(self):
        """Return the recorded parameters as tab-separated key=value pairs."""
        return "\t".join(["%s=%s" % (k, v) for k, v in sorted(self.items())])
