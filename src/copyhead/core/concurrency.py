# concurrency.py
# SPDX-License-Identifier: MIT
"""Bounded worker pools for per-file header updates.

Wraps thread and process pool executors with a bounded submission window.
Each task touches exactly one file, so results can be consumed in
completion order without any locking.
"""
from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from concurrent.futures import (
    FIRST_COMPLETED,
    Future,
    ProcessPoolExecutor,
    ThreadPoolExecutor,
    wait,
)
from dataclasses import dataclass
from typing import Any, Literal, TypeVar

from .config import PipelineConfig
from .log import get_logger

log = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")

__all__ = [
    "Executor",
    "ExecutorConfig",
    "resolve_executor_config",
]


@dataclass(frozen=True)
class ExecutorConfig:
    """Immutable executor settings used to construct worker pools.

    Attributes:
        max_workers (int): Maximum number of worker threads or
            processes.
        window (int): Maximum number of in-flight tasks allowed
            before backpressure is applied.
        kind (Literal["thread", "process"]): Executor implementation
            to use.
    """
    max_workers: int
    window: int
    kind: Literal["thread", "process"]


class Executor:
    """Run tasks in a thread or process pool with bounded submission.

    At most ``cfg.window`` tasks are in flight at once and results are
    delivered to callbacks in completion order, not submission order.
    With ``kind="process"`` the worker function and items must pickle.
    """

    def __init__(self, cfg: ExecutorConfig) -> None:
        self.cfg = cfg

    def _make_executor(self):
        if self.cfg.max_workers < 1:
            raise ValueError("Executor requires max_workers >= 1")
        if self.cfg.kind == "process":
            return ProcessPoolExecutor(max_workers=self.cfg.max_workers)
        return ThreadPoolExecutor(max_workers=self.cfg.max_workers)

    def map_unordered(
        self,
        items: Iterable[T],
        fn: Callable[[T], R],
        on_result: Callable[[R], None],
        *,
        fail_fast: bool = False,
        on_error: Callable[[BaseException], None] | None = None,
    ) -> None:
        """Submit items to workers and consume results as they complete.

        Args:
            items (Iterable[T]): Items to process.
            fn (Callable[[T], R]): Worker function invoked for each
                item.
            on_result (Callable[[R], None]): Callback invoked for each
                successful result.
            fail_fast (bool): Whether to re-raise the first worker error
                and abort further processing.
            on_error (Callable[[BaseException], None] | None): Optional
                callback invoked when a worker raises an exception.

        Raises:
            Exception: The first worker error when ``fail_fast`` is True.
        """
        window = max(self.cfg.window, self.cfg.max_workers)
        with self._make_executor() as pool:
            pending: list[Future[R]] = []

            def _drain(block: bool = False) -> None:
                nonlocal pending
                if not pending:
                    return
                done, still = wait(
                    pending,
                    timeout=None if block else 0.0,
                    return_when=FIRST_COMPLETED,
                )
                pending = list(still)
                for fut in done:
                    try:
                        result = fut.result()
                    except Exception as exc:  # noqa: BLE001
                        if on_error:
                            on_error(exc)
                        if fail_fast:
                            raise
                        continue
                    on_result(result)

            for item in items:
                pending.append(pool.submit(fn, item))
                if len(pending) >= window:
                    _drain(block=True)

            while pending:
                _drain(block=True)


def resolve_executor_config(pc: PipelineConfig) -> ExecutorConfig:
    """Build executor settings from the pipeline section of the config.

    Unset worker counts fall back to the CPU count and unknown executor
    kinds to ``"thread"``.
    """
    max_workers = max(1, pc.max_workers or (os.cpu_count() or 1))
    window = pc.submit_window or (max_workers * 4)
    kind: Any = (pc.executor_kind or "thread").strip().lower()
    if kind not in {"thread", "process"}:
        log.warning("Unknown executor kind %r; using threads", pc.executor_kind)
        kind = "thread"
    return ExecutorConfig(max_workers=max_workers, window=max(window, max_workers), kind=kind)
