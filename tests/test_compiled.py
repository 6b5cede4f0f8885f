import numpy

from perfidioms import compiled

from . import arr_eq, small_params


class TestMovingAverage:
    def test_known_values(self):
        x = numpy.array([1.0, 2.0, 3.0, 4.0, 5.0])
        expected = [2.0, 3.0, 4.0]
        assert compiled.moving_average(x, 3).tolist() == expected
        assert arr_eq(compiled.moving_average_compiled(x, 3), expected)
        assert arr_eq(compiled.moving_average_vectorized(x, 3), expected)

    def test_window_of_one_is_identity(self):
        x = numpy.array([0.5, 1.5, -2.0])
        assert compiled.moving_average(x, 1).tolist() == x.tolist()
        assert arr_eq(compiled.moving_average_compiled(x, 1), x)
        assert arr_eq(compiled.moving_average_vectorized(x, 1), x)

    def test_window_longer_than_input(self):
        x = numpy.array([1.0, 2.0])
        assert compiled.moving_average(x, 3).shape == (0,)
        assert compiled.moving_average_compiled(x, 3).shape == (0,)
        assert compiled.moving_average_vectorized(x, 3).shape == (0,)

    def test_window_equal_to_input(self):
        x = numpy.array([1.0, 2.0, 6.0])
        assert compiled.moving_average(x, 3).tolist() == [3.0]
        assert arr_eq(compiled.moving_average_vectorized(x, 3), [3.0])


class TestRun:
    def test_run(self):
        params = small_params(rows=100, window=7)
        (comparison,) = compiled.run(params)

        assert comparison.names == ["interpreted", "compiled", "vectorized"]
        assert comparison["compiled"].result.shape == (94,)
        assert comparison.params["compile_seconds"] >= 0
        assert comparison.params["window"] == 7
