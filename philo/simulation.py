"""Thread-based dining philosophers simulation and its command."""

from __future__ import annotations

import sys
import threading
import time
from collections.abc import Sequence

from .clock import now_ms
from .parsing import ParseError, ParseFailure, parse_settings
from .table import Action, Philosopher, Table

_MESSAGES = {
    ParseFailure.NEGATIVE: "eroor : NIGATIVE",
    ParseFailure.MAX_INT: "eroor : MAX_INT",
    ParseFailure.NOT_DIGIT: "eroor : NOT_DIGIT",
}


def monitor_step(table: Table) -> bool:
    """Check once for an ending condition; return False when the run is over."""
    if table.all_full():
        table.stop()
        return False
    for philosopher in table.philosophers:
        if now_ms() - philosopher.last_meal >= table.settings.die_ms:
            table.print_action(philosopher, Action.DIED)
            table.stop()
            return False
    return True


def _monitor(table: Table) -> None:
    while monitor_step(table):
        time.sleep(0.0001)


def _eat(table: Table, philosopher: Philosopher) -> bool:
    """Take both forks and eat; on success the forks are still held."""
    philosopher.right_fork.acquire()
    table.print_action(philosopher, Action.FORK)
    if table.settings.count == 1:
        philosopher.right_fork.release()
        table.sleep(table.settings.die_ms)
        return False
    philosopher.left_fork.acquire()
    table.print_action(philosopher, Action.FORK)
    table.print_action(philosopher, Action.EAT)
    table.record_meal(philosopher)
    table.sleep(table.settings.eat_ms)
    return True


def _routine(table: Table, philosopher: Philosopher) -> None:
    if philosopher.id % 2 == 0:
        table.sleep(table.settings.eat_ms // 2)
    while not table.stopped():
        table.print_action(philosopher, Action.THINK)
        if not _eat(table, philosopher):
            return
        philosopher.left_fork.release()
        philosopher.right_fork.release()
        table.print_action(philosopher, Action.SLEEP)
        table.sleep(table.settings.sleep_ms)


def run(table: Table) -> None:
    """Run the monitor and one thread per philosopher until all finish."""
    threads = [threading.Thread(target=_monitor, args=(table,), daemon=True)]
    threads += [
        threading.Thread(target=_routine, args=(table, p), daemon=True)
        for p in table.philosophers
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the arguments and run the simulation; return the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) not in (4, 5):
        print("eroor : invalid number of arguments")
        return 0
    try:
        settings = parse_settings(args)
    except ParseError as exc:
        for failure in exc.failures:
            print(_MESSAGES[failure])
        return 1
    table = Table(settings)
    try:
        run(table)
    except RuntimeError:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())