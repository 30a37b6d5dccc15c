"""Shared state of the dining table: forks, philosophers and flags."""

from __future__ import annotations

import enum
import sys
import threading
import time
from dataclasses import dataclass, field
from typing import TextIO

from .clock import now_ms
from .parsing import Settings


class Action(enum.Enum):
    """What a philosopher announces."""

    FORK = "has taken a fork"
    EAT = "is eating"
    SLEEP = "is sleeping"
    THINK = "is thinking"
    DIED = "died"


@dataclass(eq=False)
class Philosopher:
    """One diner and the two forks within reach."""

    id: int
    right_fork: threading.Lock
    left_fork: threading.Lock
    start_ms: int = field(default_factory=now_ms)
    last_meal: int = field(default_factory=now_ms)
    meals: int = 0
    full: bool = False


class Table:
    """Forks, philosophers and the locks that guard their shared state."""

    def __init__(self, settings: Settings, out: TextIO | None = None) -> None:
        self.settings = settings
        self._out = out if out is not None else sys.stdout
        count = settings.count
        self.forks = [threading.Lock() for _ in range(count)]
        self.philosophers = [
            Philosopher(index + 1, *self._forks_for(index)) for index in range(count)
        ]
        self._ended = False
        self._end_lock = threading.Lock()
        self._print_lock = threading.Lock()
        self._meal_lock = threading.Lock()

    def _forks_for(self, index: int) -> tuple[threading.Lock, threading.Lock]:
        if len(self.forks) == 1:
            return self.forks[0], self.forks[0]
        if index == 0:
            return self.forks[-1], self.forks[0]
        return self.forks[index], self.forks[index - 1]

    def print_action(self, philosopher: Philosopher, action: Action) -> None:
        """Write one timestamped line unless the simulation has ended."""
        with self._print_lock:
            if not self.stopped():
                elapsed = now_ms() - philosopher.start_ms
                self._out.write(f"{elapsed} {philosopher.id} {action.value}\n")
                self._out.flush()

    def stop(self) -> None:
        """Mark the simulation as finished."""
        with self._end_lock:
            self._ended = True

    def stopped(self) -> bool:
        """Tell whether the simulation has finished."""
        with self._end_lock:
            return self._ended

    def sleep(self, duration_ms: int) -> None:
        """Wait for the given time, returning early once the simulation ends."""
        start = now_ms()
        while now_ms() - start < duration_ms:
            time.sleep(0.0001)
            if self.stopped():
                return

    def record_meal(self, philosopher: Philosopher) -> None:
        """Count a meal and reset the philosopher's hunger clock."""
        with self._meal_lock:
            philosopher.meals += 1
            philosopher.last_meal = now_ms()
            meals = self.settings.meals
            philosopher.full = meals is not None and philosopher.meals >= meals

    def all_full(self) -> bool:
        """Tell whether a meal limit is set and every philosopher reached it."""
        meals = self.settings.meals
        if meals is None:
            return False
        with self._meal_lock:
            return all(p.meals >= meals for p in self.philosophers)