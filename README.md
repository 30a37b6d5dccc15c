# philo

A simulation of the dining philosophers problem. Philosophers sit around a
table and take turns thinking, eating and sleeping. A philosopher eats only
while holding two forks, and dies if more than the allowed time passes
without a new meal starting.

The package has two tables, each with its own command:

- `philo` (`philo.simulation`, built on `philo.table.Table`): a lock per
  fork, one thread per philosopher, and a monitor thread that watches for
  deaths and for every philosopher having eaten enough. Philosophers with
  even numbers wait half an eating time before they start.
- `philo-bonus` (`philo.bonus.SemaphoreTable`): all the forks kept in a
  single counting semaphore. Each diner runs with its own watchdog, which
  ends that diner once it has eaten enough or reports its death. A death
  ends every diner at the table.

The package uses only the standard library.

## Installation

```
pip install .
```

## Usage

```
philo NUMBER_OF_PHILOSOPHERS TIME_TO_DIE TIME_TO_EAT TIME_TO_SLEEP [MEALS]
philo-bonus NUMBER_OF_PHILOSOPHERS TIME_TO_DIE TIME_TO_EAT TIME_TO_SLEEP [MEALS]
```

Times are in milliseconds. Each argument must be a non-negative whole
number no larger than 2147483647. Leading whitespace and a single `+` are
accepted; reading stops at the first character after the digits that is
not a digit.

With `philo`, if `MEALS` is given the simulation stops once every
philosopher has eaten at least that many times. With `philo-bonus`, a
`MEALS` greater than zero makes each diner stop on its own once it has
eaten that many times, and the run ends when all have stopped; `0` means
no limit.

Example:

```
philo 5 800 200 200 7
```

Each event is printed as a line giving the milliseconds since the start,
the philosopher's number and what happened:

```
0 1 is thinking
0 1 has taken a fork
0 1 has taken a fork
0 1 is eating
200 1 is sleeping
...
```

The possible events are `has taken a fork`, `is eating`, `is sleeping`,
`is thinking` and `died`. After a death, nothing more is printed.

A bad argument makes the command print an error line for it and exit with
status 1. With the wrong number of arguments, `philo` prints
`eroor : invalid number of arguments` and exits with status 0, while
`philo-bonus` prints `Error: Invalid number of arguments` and exits with
status 1.

## Using it from Python

```python
import sys

from philo.parsing import parse_settings
from philo.table import Table
from philo.simulation import run

settings = parse_settings(["4", "410", "200", "200", "3"])
table = Table(settings, sys.stdout)
run(table)
```

The semaphore table runs the same way:

```python
from philo.bonus import SemaphoreTable

SemaphoreTable(settings, sys.stdout).run()
```

`parse_number` reads a single argument and `parse_settings` builds a
`Settings` from four or five. Both raise `ParseError` when an argument is
negative, is not a number, or is too large; its `failures` attribute holds
the `ParseFailure` reasons. `parse_settings` raises `ValueError` when it is
not given four or five arguments.

## Running the tests

```
pip install .[test]
pytest
```