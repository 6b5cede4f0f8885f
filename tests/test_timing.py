import time

import numpy
import pandas
import pytest

from perfidioms import (
    Comparison,
    ResultMismatch,
    ThresholdExceeded,
    Timing,
    assert_same,
    bench,
    best_of,
    compare,
)


class TestBestOf:
    def test_returns_seconds_per_call(self):
        calls = []
        seconds = best_of(lambda: calls.append(1), repeat=3, number=4)
        assert len(calls) == 12
        assert 0 <= seconds < 1

    def test_rejects_nonpositive_counts(self):
        with pytest.raises(ValueError):
            best_of(lambda: None, repeat=0)
        with pytest.raises(ValueError):
            best_of(lambda: None, number=0)


class TestBench:
    def test_fills_in_timing(self):
        with bench("sleep") as timing:
            assert timing.seconds is None
            time.sleep(0.01)
        assert timing.name == "sleep"
        assert timing.seconds >= 0.005

    def test_threshold(self):
        with bench("fast", threshold_ms=10000):
            pass

        with pytest.raises(ThresholdExceeded, match="'slow' time"):
            with bench("slow", threshold_ms=0.0001):
                time.sleep(0.01)

    def test_seconds_filled_when_body_raises(self):
        with pytest.raises(RuntimeError):
            with bench("broken") as timing:
                raise RuntimeError()
        assert timing.seconds is not None
        assert timing.seconds >= 0


class TestComparison:
    def _comparison(self):
        return Comparison(
            "task",
            [Timing("slow", 0.4), Timing("fast", 0.1), Timing("middle", 0.2)],
            {"rows": 10},
        )

    def test_fastest_and_relative(self):
        c = self._comparison()
        assert c.names == ["slow", "fast", "middle"]
        assert c.fastest.name == "fast"
        assert c.slowest.name == "slow"
        assert c.relative("fast") == 1.0
        assert c.relative("slow") == pytest.approx(4.0)
        with pytest.raises(KeyError):
            c["missing"]

    def test_zero_times(self):
        c = Comparison("task", [Timing("a", 0.0), Timing("b", 0.0)])
        assert c.relative("a") == 1.0

    def test_table(self):
        lines = self._comparison().table().splitlines()
        assert lines[0] == "task"
        assert lines[1].split() == ["variant", "seconds", "relative"]
        assert lines[3].split() == ["slow", "0.400000", "4.0x"]
        assert lines[4].split() == ["fast", "0.100000", "1.0x"]
        assert lines[-1] == "rows=10"

    def test_records(self):
        records = self._comparison().records()
        assert records[1] == {
            "rows": 10,
            "comparison": "task",
            "variant": "fast",
            "seconds": 0.1,
            "relative": 1.0,
        }
        frame = self._comparison().to_frame()
        assert frame["variant"].tolist() == ["slow", "fast", "middle"]

    def test_empty(self):
        with pytest.raises(ValueError):
            Comparison("task", [])


class TestAssertSame:
    def test_arrays(self):
        assert_same(numpy.array([1.0, numpy.nan]), numpy.array([1.0, numpy.nan]))
        assert_same(numpy.array([1, 2]), [1.0, 2.0])
        with pytest.raises(ResultMismatch, match="arrays differ \\(variant 'b'\\)"):
            assert_same(numpy.array([1.0, 2.0]), numpy.array([1.0, 2.5]), "b")
        with pytest.raises(ResultMismatch, match="shapes differ"):
            assert_same(numpy.array([1.0, 2.0]), numpy.array([1.0]))

    def test_string_arrays(self):
        assert_same(numpy.array(["a", "b"]), numpy.array(["a", "b"]))
        with pytest.raises(ResultMismatch):
            assert_same(numpy.array(["a", "b"]), numpy.array(["a", "c"]))

    def test_pandas(self):
        frame = pandas.DataFrame({"a": [1, 2], "b": ["x", "y"]})
        assert_same(frame, frame.copy())
        assert_same(frame["a"], frame["a"].copy())
        assert_same(frame.index, frame.index.copy())
        with pytest.raises(ResultMismatch):
            assert_same(frame, frame.assign(a=[1, 3]))

    def test_containers(self):
        assert_same({"a": [1, 2.0]}, {"a": [1, 2.0]})
        assert_same(("x", 1), ["x", 1])
        with pytest.raises(ResultMismatch, match="keys differ"):
            assert_same({"a": 1}, {"b": 1})
        with pytest.raises(ResultMismatch, match="lengths differ"):
            assert_same([1, 2], [1])
        with pytest.raises(ResultMismatch):
            assert_same(["a"], ["b"])

    def test_floats(self):
        assert_same(0.1 + 0.2, 0.3)
        assert_same(float("nan"), float("nan"))
        with pytest.raises(ResultMismatch):
            assert_same(1.0, 1.1)

    def test_mismatch_is_an_assertion_error(self):
        with pytest.raises(AssertionError):
            assert_same(1, 2)

    def test_float_against_other_type(self):
        with pytest.raises(ResultMismatch, match="types differ \\(variant 's'\\)"):
            assert_same("a", 1.0, "s")
        with pytest.raises(ResultMismatch, match="types differ"):
            assert_same(1.0, None)
        assert_same(1, 1.0)


class TestCompare:
    def test_times_each_variant_in_order(self):
        c = compare(
            "sum",
            {"loop": lambda: sum([1, 2, 3]), "builtin": lambda: 6},
            {"rows": 3},
            repeat=2,
        )
        assert c.title == "sum"
        assert c.names == ["loop", "builtin"]
        assert c["loop"].result == 6
        assert all(t.seconds >= 0 for t in c.timings)
        assert c.params == {"rows": 3}

    def test_mismatch(self):
        with pytest.raises(ResultMismatch, match="variant 'wrong'"):
            compare("sum", {"right": lambda: 6, "wrong": lambda: 7}, repeat=1)

    def test_check_none(self):
        c = compare("sum", {"right": lambda: 6, "wrong": lambda: 7}, check=None)
        assert [t.result for t in c.timings] == [6, 7]

    def test_no_variants(self):
        with pytest.raises(ValueError):
            compare("nothing", {})

    def test_variant_returning_wrong_type(self):
        with pytest.raises(ResultMismatch, match="variant 'none'"):
            compare("mean", {"float": lambda: 0.5, "none": lambda: None}, repeat=1)
