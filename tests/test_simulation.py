import io
import re
import time

import pytest

from philosophers.rules import Rules
from philosophers.simulation import Simulation, now_ms

LINE = re.compile(r"^(\d+) (\d+) (has taken a fork|is eating|is sleeping|is thinking|died)$")


def _lines(out):
    return out.getvalue().splitlines()


def _parsed(out):
    result = []
    for line in _lines(out):
        match = LINE.match(line)
        assert match, line
        result.append((int(match.group(1)), int(match.group(2)), match.group(3)))
    return result


def test_now_ms_advances():
    before = now_ms()
    time.sleep(0.02)
    after = now_ms()
    assert after - before >= 15


def test_forks_are_shared_around_the_table():
    sim = Simulation(Rules(4, 100, 10, 10), io.StringIO())
    ids = [p.id for p in sim.philosophers]
    assert ids == [1, 2, 3, 4]
    for left, right in zip(sim.philosophers, sim.philosophers[1:] + sim.philosophers[:1]):
        assert left.right_fork is right.left_fork
    assert sim.philosophers[0].left_fork is sim.forks[0]


def test_single_philosopher_has_one_fork():
    sim = Simulation(Rules(1, 100, 10, 10), io.StringIO())
    only = sim.philosophers[0]
    assert only.left_fork is only.right_fork


def test_log_format():
    out = io.StringIO()
    sim = Simulation(Rules(2, 100, 10, 10), out)
    sim.log(sim.philosophers[1], "is thinking")
    text = out.getvalue()
    assert text.endswith("\n")
    assert text.count("\n") == 1
    events = _parsed(out)
    assert len(events) == 1
    stamp, ident, action = events[0]
    assert ident == 2
    assert action == "is thinking"
    assert 0 <= stamp < 1000


def test_stop_silences_log():
    out = io.StringIO()
    sim = Simulation(Rules(2, 100, 10, 10), out)
    assert sim.stopped() is False
    sim.stop()
    assert sim.stopped() is True
    sim.log(sim.philosophers[0], "is eating")
    assert out.getvalue() == ""


def test_single_philosopher_dies():
    out = io.StringIO()
    sim = Simulation(Rules(1, 50, 10, 10), out)
    sim.run()
    events = _parsed(out)
    assert events[0][1:] == (1, "has taken a fork")
    assert events[-1][1:] == (1, "died")
    assert [e[2] for e in events].count("died") == 1
    assert events[-1][0] >= 50
    assert sim.stopped()


def test_starving_philosopher_dies_last_line():
    out = io.StringIO()
    rules = Rules(2, 30, 100, 100)
    sim = Simulation(rules, out)
    sim.run()
    events = _parsed(out)
    actions = [e[2] for e in events]
    assert actions.count("died") == 1
    assert actions[-1] == "died"
    assert events[-1][0] >= rules.time_to_die


def test_all_fed_ends_without_death():
    out = io.StringIO()
    rules = Rules(4, 800, 20, 20, meals=2)
    sim = Simulation(rules, out)
    sim.run()
    events = _parsed(out)
    assert "died" not in [e[2] for e in events]
    for p in sim.philosophers:
        eating = [e for e in events if e[1] == p.id and e[2] == "is eating"]
        assert len(eating) >= rules.meals
        assert p.meals_eaten >= rules.meals
    assert sim.stopped()


def test_timestamps_never_go_backwards():
    out = io.StringIO()
    sim = Simulation(Rules(3, 600, 20, 20, meals=2), out)
    sim.run()
    stamps = [e[0] for e in _parsed(out)]
    assert stamps == sorted(stamps)


@pytest.mark.parametrize("count", [2, 3, 5])
def test_each_meal_follows_two_forks(count):
    out = io.StringIO()
    sim = Simulation(Rules(count, 800, 10, 10, meals=1), out)
    sim.run()
    events = _parsed(out)
    for p in sim.philosophers:
        mine = [e[2] for e in events if e[1] == p.id]
        first_meal = mine.index("is eating")
        assert mine[:first_meal] == ["has taken a fork", "has taken a fork"]