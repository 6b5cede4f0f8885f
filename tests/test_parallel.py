import functools
import multiprocessing.pool

from perfidioms import parallel

from . import small_params


class TestTask:
    def test_task(self):
        assert parallel.task(3) == 9
        assert parallel.task(-2, seconds=0.001) == 4


class TestPoolMap:
    def test_serial(self):
        assert parallel.serial_map(parallel.task, range(4)) == [0, 1, 4, 9]

    def test_threads_keep_input_order(self):
        func = functools.partial(parallel.task, seconds=0.0)
        result = parallel.pool_map(
            func, list(range(20)), 3, multiprocessing.pool.ThreadPool
        )
        assert result == [x * x for x in range(20)]

    def test_processes_keep_input_order(self):
        func = functools.partial(parallel.task, seconds=0.0)
        result = parallel.pool_map(func, list(range(10)), 2)
        assert result == [x * x for x in range(10)]


class TestRun:
    def test_run(self):
        params = small_params(tasks=6, workers=2, task_seconds=0.0)
        (comparison,) = parallel.run(params)

        assert comparison.title == "map 6 tasks"
        assert comparison.names == ["serial", "processes", "threads"]
        assert comparison["threads"].result == [0, 1, 4, 9, 16, 25]
        assert comparison.params["workers"] == 2
