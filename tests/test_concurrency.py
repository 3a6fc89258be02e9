import threading
import time

import pytest

from copyhead.core.concurrency import Executor, ExecutorConfig, resolve_executor_config
from copyhead.core.config import PipelineConfig


def _square(x):
    return x * x


def test_map_unordered_collects_every_result():
    executor = Executor(ExecutorConfig(max_workers=2, window=2, kind="thread"))
    results = []
    executor.map_unordered(range(10), _square, results.append)
    assert sorted(results) == [x * x for x in range(10)]


def test_map_unordered_reports_worker_errors_and_continues():
    executor = Executor(ExecutorConfig(max_workers=2, window=2, kind="thread"))
    results = []
    errors = []

    def fn(x):
        if x == 3:
            raise ValueError("boom")
        return x

    executor.map_unordered([1, 2, 3, 4], fn, results.append, on_error=errors.append)

    assert sorted(results) == [1, 2, 4]
    assert [str(e) for e in errors] == ["boom"]


def test_map_unordered_fail_fast_reraises():
    executor = Executor(ExecutorConfig(max_workers=1, window=1, kind="thread"))

    def fn(x):
        raise RuntimeError(f"bad {x}")

    with pytest.raises(RuntimeError, match="bad 1"):
        executor.map_unordered([1, 2], fn, lambda r: None, fail_fast=True)


def test_map_unordered_respects_window_backpressure():
    cfg = ExecutorConfig(max_workers=2, window=2, kind="thread")
    executor = Executor(cfg)

    submitted: list[int] = []
    release = threading.Event()
    results: list[int] = []

    def slow_worker(x):
        release.wait()
        return x

    original_make = executor._make_executor

    class RecordingExecutor:
        def __init__(self, real):
            self.pool = real

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            self.pool.__exit__(exc_type, exc, tb)  # type: ignore[attr-defined]

        def submit(self, fn_, item):
            submitted.append(item)
            return self.pool.submit(fn_, item)

    executor._make_executor = lambda: RecordingExecutor(original_make())  # type: ignore[assignment]

    t = threading.Thread(
        target=lambda: executor.map_unordered([1, 2, 3, 4], slow_worker, results.append)
    )
    t.start()
    time.sleep(0.1)
    assert len(submitted) == 2  # window=2 should block further submissions
    release.set()
    t.join(timeout=5)
    assert len(submitted) == 4
    assert set(results) == {1, 2, 3, 4}


def test_map_unordered_process_pool():
    executor = Executor(ExecutorConfig(max_workers=2, window=4, kind="process"))
    results = []
    try:
        executor.map_unordered([-1, -2, -3], abs, results.append)
    except PermissionError as exc:
        pytest.skip(f"Process pool unavailable in environment: {exc}")
    assert sorted(results) == [1, 2, 3]


def test_executor_requires_a_worker():
    executor = Executor(ExecutorConfig(max_workers=0, window=1, kind="thread"))
    with pytest.raises(ValueError):
        executor.map_unordered([1], _square, lambda r: None)


def test_resolve_executor_config_defaults(monkeypatch):
    monkeypatch.setattr("copyhead.core.concurrency.os.cpu_count", lambda: 3)
    cfg = resolve_executor_config(PipelineConfig())
    assert cfg == ExecutorConfig(max_workers=3, window=12, kind="thread")


def test_resolve_executor_config_explicit_values():
    cfg = resolve_executor_config(PipelineConfig(max_workers=4, submit_window=2, executor_kind=" Process "))
    assert cfg == ExecutorConfig(max_workers=4, window=4, kind="process")


def test_resolve_executor_config_unknown_kind_falls_back(caplog):
    with caplog.at_level("WARNING", logger="copyhead"):
        cfg = resolve_executor_config(PipelineConfig(max_workers=1, executor_kind="fiber"))
    assert cfg.kind == "thread"
    assert "Unknown executor kind" in caplog.text
