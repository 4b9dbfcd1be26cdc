# philosophers

A simulation of the dining philosophers problem. Every philosopher runs in its
own thread, and the forks between neighbours are locks. A philosopher takes its
left fork and then its right fork to eat, then sleeps, then thinks.
Even-numbered philosophers wait one millisecond before they start. A monitor
thread watches all of them. The run ends when a philosopher has gone longer
than `time_to_die` milliseconds without eating. If a meal count was given, the
run also ends once every philosopher has eaten that many meals. Nothing is
printed after the run has ended.

With a single philosopher there is only one fork. That philosopher takes it,
waits `time_to_die` milliseconds and dies.

## Installation

```
pip install .
```

## Command line

```
philo number_of_philosophers time_to_die time_to_eat time_to_sleep [number_of_meals]
```

The same entry point can be started with `python -m philosophers.cli`.

All times are in milliseconds. Every argument must be a strictly positive
integer no larger than 2147483647. It may have a leading `+`. Otherwise it may
contain only the digits 0 to 9.

Example:

```
philo 5 800 200 200 7
```

Each event is printed on its own line in this form:

```
<milliseconds since start> <philosopher id> <action>
```

Philosopher ids start at 1. The action is one of `has taken a fork`,
`is eating`, `is sleeping`, `is thinking` or `died`.

On invalid arguments, or on the wrong number of arguments, the command prints
`Error: invalid arguments` and exits with status 1. If the threads cannot be
started, it prints `Error: simulation failed` and exits with status 1.
Otherwise it exits with status 0.

## Library use

```python
import sys

from philosophers.rules import parse_rules
from philosophers.simulation import Simulation

rules = parse_rules(["4", "410", "200", "200", "3"])
Simulation(rules, sys.stdout).run()
```

- `philosophers.rules.parse_rules(args)` takes the four or five arguments that
  follow the program name. It returns a frozen `Rules` dataclass with the fields
  `philosophers`, `time_to_die`, `time_to_eat`, `time_to_sleep` and `meals`.
  `meals` is `None` when no meal count was given. It raises `InvalidArguments`,
  a subclass of `ValueError`, for bad input.
- `philosophers.rules.parse_positive_int(text)` checks and parses a single
  value by the same rules.
- `philosophers.simulation.Simulation(rules, out)` writes its event lines to
  `out`, which defaults to standard output. `run()` starts the philosopher
  threads and the monitor and waits for all of them to finish. `stopped()` and
  `stop()` read and set the end of the run. `now_ms()` returns the wall-clock
  time in milliseconds.

## Tests

```
pip install ".[test]"
pytest
```