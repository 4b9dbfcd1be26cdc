"""Threaded dining philosophers simulation."""

from __future__ import annotations

import sys
import threading
import time
from dataclasses import dataclass, field
from typing import TextIO

from .rules import Rules


def now_ms() -> int:
    """Return the wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000


def _sleep_ms(ms: float) -> None:
    time.sleep(ms / 1000)


@dataclass(eq=False)
class Philosopher:
    """One philosopher at the table with the two forks next to it."""

    id: int
    left_fork: threading.Lock
    right_fork: threading.Lock
    last_meal: int = 0
    meals_eaten: int = 0
    meal_lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class Simulation:
    """A table of philosophers watched by a monitor until one dies or all are fed."""

    def __init__(self, rules: Rules, out: TextIO | None = None) -> None:
        self.rules = rules
        self.out = out if out is not None else sys.stdout
        self.start_time = now_ms()
        self.forks = [threading.Lock() for _ in range(rules.philosophers)]
        count = rules.philosophers
        self.philosophers = [
            Philosopher(
                id=seat + 1,
                left_fork=self.forks[seat],
                right_fork=self.forks[(seat + 1) % count],
                last_meal=self.start_time,
            )
            for seat in range(count)
        ]
        self._print_lock = threading.Lock()
        self._stop = threading.Event()

    def stopped(self) -> bool:
        """Tell whether the simulation has ended."""
        return self._stop.is_set()

    def stop(self) -> None:
        """End the simulation."""
        self._stop.set()

    def _write(self, philosopher: Philosopher, action: str) -> None:
        elapsed = now_ms() - self.start_time
        self.out.write(f"{elapsed} {philosopher.id} {action}\n")
        self.out.flush()

    def log(self, philosopher: Philosopher, action: str) -> None:
        """Print a timestamped action, unless the simulation has ended."""
        with self._print_lock:
            if not self._stop.is_set():
                self._write(philosopher, action)

    def _announce_death(self, philosopher: Philosopher) -> None:
        with self._print_lock:
            if self._stop.is_set():
                return
            self._write(philosopher, "died")
            self._stop.set()

    def _eat(self, p: Philosopher) -> None:
        if self.stopped():
            return
        with p.left_fork:
            if self.stopped():
                return
            self.log(p, "has taken a fork")
            with p.right_fork:
                if self.stopped():
                    return
                self.log(p, "has taken a fork")
                self.log(p, "is eating")
                with p.meal_lock:
                    p.last_meal = now_ms()
                    p.meals_eaten += 1
                _sleep_ms(self.rules.time_to_eat)

    def _sleep_and_think(self, p: Philosopher) -> None:
        if self.stopped():
            return
        self.log(p, "is sleeping")
        _sleep_ms(self.rules.time_to_sleep)
        if self.stopped():
            return
        self.log(p, "is thinking")
        _sleep_ms(0.1)

    def live(self, philosopher: Philosopher) -> None:
        """Run one philosopher's eat, sleep and think cycle."""
        p = philosopher
        if self.rules.philosophers == 1:
            with p.left_fork:
                self.log(p, "has taken a fork")
                _sleep_ms(self.rules.time_to_die)
                self._announce_death(p)
            return
        if p.id % 2 == 0:
            _sleep_ms(1)
        meals = self.rules.meals
        while not self.stopped():
            self._eat(p)
            if self.stopped():
                break
            if meals is not None and p.meals_eaten >= meals:
                break
            self._sleep_and_think(p)

    def monitor(self) -> None:
        """Watch for starvation and for every philosopher being fed."""
        meals = self.rules.meals
        while not self.stopped():
            full = 0
            for p in self.philosophers:
                with p.meal_lock:
                    elapsed = now_ms() - p.last_meal
                    is_full = meals is not None and p.meals_eaten >= meals
                if is_full:
                    full += 1
                    continue
                if elapsed > self.rules.time_to_die:
                    self._announce_death(p)
                    return
            if meals is not None and full == len(self.philosophers):
                self.stop()
                return
            _sleep_ms(1)

    def run(self) -> None:
        """Start all philosophers and the monitor, and wait for them to finish."""
        self.start_time = now_ms()
        for p in self.philosophers:
            p.last_meal = self.start_time
        threads = [threading.Thread(target=self.live, args=(p,)) for p in self.philosophers]
        started: list[threading.Thread] = []
        try:
            for thread in threads:
                thread.start()
                started.append(thread)
            watcher = threading.Thread(target=self.monitor)
            watcher.start()
        except RuntimeError:
            self.stop()
            for thread in started:
                thread.join()
            raise
        watcher.join()
        for thread in threads:
            thread.join()