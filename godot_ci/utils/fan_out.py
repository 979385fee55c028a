"""Run one task per item on a short-lived thread pool and join them all."""

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Generic, TypeVar

from godot_ci.core.errors import GodotCIError


logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

MAX_WORKERS = 8


@dataclass
class TaskOutcome(Generic[R]):
    """Result slot of one task: either a result or the error it raised."""

    result: R | None = None
    error: GodotCIError | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


def run_all(
    func: Callable[[T], R],
    items: Sequence[T],
    max_workers: int = MAX_WORKERS,
) -> list[TaskOutcome[R]]:
    """Run ``func`` for every item and wait for every task to finish.

    Each task writes only its own slot, so the returned list lines up with
    ``items``. A :class:`GodotCIError` raised by one task is stored in its
    slot and does not stop the others; any other exception propagates once
    all tasks are done.
    """
    outcomes: list[TaskOutcome[R]] = [TaskOutcome() for _ in items]
    if not items:
        return outcomes

    def task(index: int) -> None:
        try:
            outcomes[index].result = func(items[index])
        except GodotCIError as e:
            outcomes[index].error = e

    with ThreadPoolExecutor(max_workers=min(max_workers, len(items))) as executor:
        futures = [executor.submit(task, index) for index in range(len(items))]

    # Re-raise programming errors only after the barrier
    for future in futures:
        future.result()

    failed = sum(1 for outcome in outcomes if outcome.failed)
    logger.debug("Ran %d tasks, %d failed", len(items), failed)
    return outcomes
