"""Dining philosophers where each diner runs on its own with a watchdog.

Forks are a counting semaphore shared by the whole table. Each diner has
a watchdog that ends that diner once it has eaten enough, or reports its
death. A reported death ends every diner at the table.
"""

from __future__ import annotations

import queue
import sys
import threading
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TextIO

from .clock import now_ms
from .parsing import ParseError, ParseFailure, Settings, parse_settings
from .table import Action

_POLL_S = 0.0001
_WAIT_S = 0.001

_MESSAGES = {
    ParseFailure.NEGATIVE: "Error: Negative number",
    ParseFailure.MAX_INT: "Error: Number exceeds INT_MAX",
    ParseFailure.NOT_DIGIT: "Error: Non-digit character",
}
ARG_COUNT = "Error: Invalid number of arguments"


class _Stopped(Exception):
    """Raised inside a diner's threads once that diner no longer runs."""


@dataclass(eq=False)
class Diner:
    """One philosopher's private state and how it ended."""

    id: int
    last_meal: int = field(default_factory=now_ms)
    meals_eaten: int = 0
    status: int | None = None
    _exited: threading.Event = field(default_factory=threading.Event, repr=False)

    @property
    def exited(self) -> bool:
        """Tell whether this diner has ended on its own."""
        return self._exited.is_set()


class SemaphoreTable:
    """A table of independent diners sharing a pool of forks."""

    def __init__(self, settings: Settings, out: TextIO | None = None) -> None:
        self.settings = settings
        self._out = out if out is not None else sys.stdout
        self.start_time = now_ms()
        self.forks = threading.Semaphore(settings.count)
        self._print = threading.Semaphore(1)
        self.diners = [Diner(index + 1) for index in range(settings.count)]
        self._killed = threading.Event()
        self._exit_lock = threading.Lock()
        self._exits: queue.Queue[Diner] = queue.Queue()
        self._threads: list[threading.Thread] = []

    def _alive(self, diner: Diner) -> bool:
        return not (self._killed.is_set() or diner.exited)

    def _check(self, diner: Diner) -> None:
        if not self._alive(diner):
            raise _Stopped

    def _acquire(self, semaphore: threading.Semaphore, diner: Diner) -> None:
        while not semaphore.acquire(timeout=_WAIT_S):
            self._check(diner)
        if not self._alive(diner):
            semaphore.release()
            raise _Stopped

    def _pause(self, diner: Diner, duration_ms: int) -> None:
        deadline = time.monotonic() + duration_ms / 1000
        while (remaining := deadline - time.monotonic()) > 0:
            self._check(diner)
            diner._exited.wait(min(remaining, _WAIT_S))
        self._check(diner)

    def _write(self, diner_id: int, action: Action) -> None:
        elapsed = now_ms() - self.start_time
        self._out.write(f"{elapsed} {diner_id} {action.value}\n")
        self._out.flush()

    def _exit(self, diner: Diner, status: int) -> None:
        with self._exit_lock:
            if not self._alive(diner):
                return
            diner.status = status
            diner._exited.set()
        self._exits.put(diner)

    def print_action(self, diner_id: int, action: Action) -> None:
        """Write one timestamped line while holding the print semaphore."""
        diner = self.diners[diner_id - 1]
        self._acquire(self._print, diner)
        try:
            self._write(diner_id, action)
        finally:
            self._print.release()

    def _watch(self, diner: Diner) -> None:
        limit = self.settings.meals or 0
        while self._alive(diner):
            if limit > 0 and diner.meals_eaten >= limit:
                self._exit(diner, 0)
                return
            if now_ms() - diner.last_meal > self.settings.die_ms:
                try:
                    self._acquire(self._print, diner)
                except _Stopped:
                    return
                # The print semaphore stays taken: nothing more is written.
                self._write(diner.id, Action.DIED)
                self._exit(diner, 1)
                return
            time.sleep(_POLL_S)

    def _philosopher(self, diner: Diner) -> None:
        diner.meals_eaten = 0
        diner.last_meal = now_ms()
        watchdog = threading.Thread(target=self._watch, args=(diner,), daemon=True)
        self._threads.append(watchdog)
        watchdog.start()
        try:
            while True:
                self.print_action(diner.id, Action.THINK)
                self._acquire(self.forks, diner)
                self.print_action(diner.id, Action.FORK)
                self._acquire(self.forks, diner)
                self.print_action(diner.id, Action.FORK)
                self.print_action(diner.id, Action.EAT)
                diner.last_meal = now_ms()
                self._pause(diner, self.settings.eat_ms)
                diner.meals_eaten += 1
                self.forks.release()
                self.forks.release()
                self.print_action(diner.id, Action.SLEEP)
                self._pause(diner, self.settings.sleep_ms)
        except _Stopped:
            return

    def _kill_all(self) -> None:
        with self._exit_lock:
            self._killed.set()

    def run(self) -> None:
        """Start every diner and wait until all end or one dies."""
        runners = [
            threading.Thread(target=self._philosopher, args=(diner,), daemon=True)
            for diner in self.diners
        ]
        for runner in runners:
            runner.start()
        for _ in self.diners:
            if self._exits.get().status == 1:
                self._kill_all()
                break
        for runner in runners:
            runner.join()
        for thread in list(self._threads):
            thread.join()


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the arguments and run the table; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) not in (4, 5):
        print(ARG_COUNT)
        return 1
    try:
        settings = parse_settings(args)
    except ParseError as exc:
        for failure in exc.failures:
            print(_MESSAGES[failure])
        return 1
    SemaphoreTable(settings).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())