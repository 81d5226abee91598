"""Virtual-time scheduler for timers and cooperative routines."""

from __future__ import annotations

from collections.abc import Callable, Generator
from dataclasses import dataclass
from heapq import heappop, heappush

TaskCallback = Callable[[], None]
# A routine yields delays in seconds; each yield is a suspension point.
Routine = Generator[float, None, None]


@dataclass(slots=True)
class _Task:
    task_id: int
    due_seconds: float
    callback: TaskCallback
    cancelled: bool = False


@dataclass(slots=True)
class _RoutineSlot:
    routine: Routine
    pending_task_id: int | None = None


class Scheduler:
    """Single-threaded scheduler advanced explicitly by its host."""

    def __init__(self) -> None:
        self._now_seconds = 0.0
        self._next_task_id = 1
        self._tasks: dict[int, _Task] = {}
        self._queue: list[tuple[float, int]] = []
        self._routines: dict[int, _RoutineSlot] = {}
        self._stepping_routine_id: int | None = None

    @property
    def now_seconds(self) -> float:
        return self._now_seconds

    @property
    def queued_task_count(self) -> int:
        """Return count of active queued tasks."""
        return sum(1 for task in self._tasks.values() if not task.cancelled)

    @property
    def running_routine_count(self) -> int:
        return len(self._routines)

    def call_later(self, delay_seconds: float, callback: TaskCallback) -> int:
        """Schedule a one-shot callback after delay."""
        if delay_seconds < 0.0:
            raise ValueError("delay_seconds must be >= 0")
        return self._schedule(due_seconds=self._now_seconds + delay_seconds, callback=callback)

    def spawn(self, routine: Routine) -> int:
        """Start a routine; it runs synchronously up to its first yield."""
        routine_id = self._allocate_id()
        self._routines[routine_id] = _RoutineSlot(routine=routine)
        self._resume(routine_id)
        return routine_id

    def is_pending(self, task_id: int) -> bool:
        """Return whether a task or routine has not finished yet."""
        if task_id in self._routines:
            return True
        task = self._tasks.get(task_id)
        return task is not None and not task.cancelled

    def cancel(self, task_id: int) -> None:
        """Cancel a scheduled task or routine if it exists."""
        slot = self._routines.pop(task_id, None)
        if slot is not None:
            if slot.pending_task_id is not None:
                self.cancel(slot.pending_task_id)
            if task_id != self._stepping_routine_id:
                slot.routine.close()
            return
        task = self._tasks.get(task_id)
        if task is not None:
            task.cancelled = True

    def advance(self, delta_seconds: float) -> int:
        """Advance scheduler clock and run due callbacks."""
        if delta_seconds < 0.0:
            raise ValueError("delta_seconds must be >= 0")
        return self.run_due(self._now_seconds + delta_seconds)

    def run_due(self, now_seconds: float) -> int:
        """Run callbacks due at or before `now_seconds`.

        The clock steps to each task's due time before its callback runs, so
        work scheduled from a callback is timed from when it fired.
        """
        if now_seconds < self._now_seconds:
            raise ValueError("now_seconds cannot move backwards")
        executed = 0
        while self._queue and self._queue[0][0] <= now_seconds:
            due_seconds, task_id = heappop(self._queue)
            task = self._tasks.get(task_id)
            if task is None or task.cancelled:
                self._tasks.pop(task_id, None)
                continue
            self._now_seconds = max(self._now_seconds, due_seconds)
            try:
                task.callback()
            finally:
                self._tasks.pop(task_id, None)
            executed += 1
        self._now_seconds = now_seconds
        return executed

    def _resume(self, routine_id: int) -> None:
        slot = self._routines.get(routine_id)
        if slot is None:
            return
        slot.pending_task_id = None
        outer_routine_id = self._stepping_routine_id
        self._stepping_routine_id = routine_id
        try:
            delay_seconds = next(slot.routine)
        except StopIteration:
            self._routines.pop(routine_id, None)
            return
        except Exception:
            self._routines.pop(routine_id, None)
            raise
        finally:
            self._stepping_routine_id = outer_routine_id
        if routine_id not in self._routines:
            # Cancelled from inside its own step.
            slot.routine.close()
            return
        if delay_seconds < 0.0:
            self._routines.pop(routine_id, None)
            slot.routine.close()
            raise ValueError("routine delay must be >= 0")
        slot.pending_task_id = self.call_later(delay_seconds, lambda: self._resume(routine_id))

    def _allocate_id(self) -> int:
        task_id = self._next_task_id
        self._next_task_id += 1
        return task_id

    def _schedule(self, *, due_seconds: float, callback: TaskCallback) -> int:
        task_id = self._allocate_id()
        task = _Task(task_id=task_id, due_seconds=due_seconds, callback=callback)
        self._tasks[task_id] = task
        heappush(self._queue, (due_seconds, task_id))
        return task_id
