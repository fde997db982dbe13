"""Report scheduling behind an injectable interface.

Report jobs (the weekly collections listing, for instance) are
registered on a ``Scheduler`` passed to whoever needs it, so tests and
multiple service instances each hold their own task registry.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable

from loan_chronology.exceptions import EntityNotFoundError, InvalidEntityStateError

logger = logging.getLogger(__name__)

Job = Callable[[datetime], Any]


@dataclass
class TaskStatus:
    """Runtime state of a scheduled task."""

    name: str
    interval: timedelta
    next_run: datetime
    last_run: datetime | None = None
    runs: int = 0
    failures: int = 0
    last_error: str | None = None


class Scheduler(ABC):
    """Registry of periodic report jobs."""

    @abstractmethod
    def schedule(
        self,
        name: str,
        interval: timedelta,
        job: Job,
        start_at: datetime | None = None,
    ) -> TaskStatus:
        """Register ``job`` to run every ``interval``."""

    @abstractmethod
    def unschedule(self, name: str) -> None:
        """Remove a task."""

    @abstractmethod
    def status(self, name: str | None = None) -> TaskStatus | list[TaskStatus]:
        """State of one task, or of all tasks when ``name`` is omitted."""

    def reschedule(
        self,
        name: str,
        interval: timedelta,
        job: Job,
        start_at: datetime | None = None,
    ) -> TaskStatus:
        """Replace a task's interval and job."""
        self.unschedule(name)
        return self.schedule(name, interval, job, start_at)


class InMemoryScheduler(Scheduler):
    """Scheduler driven explicitly by ``run_pending``.

    Parameters
    ----------
    clock : Callable[[], datetime] | None
        Source of the current time (default ``datetime.now``).
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or datetime.now
        self._tasks: dict[str, TaskStatus] = {}
        self._jobs: dict[str, Job] = {}

    def schedule(
        self,
        name: str,
        interval: timedelta,
        job: Job,
        start_at: datetime | None = None,
    ) -> TaskStatus:
        if name in self._tasks:
            raise InvalidEntityStateError(f"Task {name} already scheduled")
        if interval <= timedelta(0):
            raise InvalidEntityStateError(f"Task {name} needs a positive interval")

        task = TaskStatus(
            name=name,
            interval=interval,
            next_run=start_at or self._clock() + interval,
        )
        self._tasks[name] = task
        self._jobs[name] = job
        logger.info("Scheduled task %s every %s, next run %s", name, interval, task.next_run)
        return task

    def unschedule(self, name: str) -> None:
        if name not in self._tasks:
            raise EntityNotFoundError(f"Task {name} not found")
        del self._tasks[name]
        del self._jobs[name]
        logger.info("Unscheduled task %s", name)

    def status(self, name: str | None = None) -> TaskStatus | list[TaskStatus]:
        if name is None:
            return list(self._tasks.values())
        if name not in self._tasks:
            raise EntityNotFoundError(f"Task {name} not found")
        return self._tasks[name]

    def run_pending(self, now: datetime | None = None) -> list[str]:
        """Run every task that is due.

        A failing job is logged and recorded on its status; the other
        due jobs still run.

        Returns
        -------
        list[str]
            Names of the tasks that ran, failed ones included.
        """
        now = now or self._clock()
        ran = []

        for name, task in list(self._tasks.items()):
            if task.next_run > now:
                continue

            try:
                self._jobs[name](now)
            except Exception as exc:
                task.failures += 1
                task.last_error = str(exc)
                logger.exception("Task %s failed", name, extra={"task": name})
            else:
                task.last_error = None

            task.runs += 1
            task.last_run = now
            while task.next_run <= now:
                task.next_run += task.interval
            ran.append(name)

        return ran
