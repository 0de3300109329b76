"""Demonstration of grouping, partitioning, joining and a custom collector.

Runs four independent reductions over the fixed ``PEOPLE`` sequence and prints
each result to standard output::

    -----Group:
    US -> [Person(name=Alan, age=44, country=US), Person(name=Bruce, ...)]
    ...
    -----Partition:
    False -> [...]
    True -> [...]
    -----join:
    Alan, Bruce, Crane, Dolly, Ella
    -----Collector:
    Accumulator: Person(...)
    Combiner: [...]
    [...]

The custom collector step is evaluated in parallel chunks by default, so its
``Accumulator:`` and ``Combiner:`` lines may interleave differently between
runs. See :class:`collectors.core.config.Settings` for the knobs.
"""

import threading
import typing as tp

from pydantic import BaseModel

from collectors.core.config import Settings
from collectors.core.data import PEOPLE
from collectors.core.models import Person, PersonList, render_people
from collectors.functional.builtins import grouping_by, joining, mapping, partitioning_by
from collectors.functional.collector import Collector, collect
from collectors.logger.logger import logger

__all__ = ["DemoResult", "tracing_list_collector", "run_demo", "main"]

ADULT_AGE = 18


class DemoResult(BaseModel):
    """Results of the four demonstration steps."""

    groups: tp.Dict[str, PersonList]
    partition: tp.Dict[bool, tp.List[Person]]
    joined: str
    collected: PersonList


def tracing_list_collector(
    emit: tp.Callable[[str], None] = print,
) -> Collector[Person, tp.List[Person], tp.List[Person]]:
    """A list collector that reports every accumulate and combine call.

    Calls to ``emit`` are serialised, so lines from parallel workers never tear.
    """
    lock = threading.Lock()

    def report(line: str) -> None:
        with lock:
            emit(line)

    def accumulate(people: tp.List[Person], person: Person) -> None:
        report(f"Accumulator: {person}")
        people.append(person)

    def combine(left: tp.List[Person], right: tp.List[Person]) -> tp.List[Person]:
        report(f"Combiner: {render_people(left)}")
        left.extend(right)
        return left

    return Collector.of(list, accumulate, combine)


def run_demo(
    settings: tp.Optional[Settings] = None,
    emit: tp.Callable[[str], None] = print,
) -> DemoResult:
    """Run the four reductions over ``PEOPLE`` and print their results.

    Args:
        settings: Evaluation strategy for the custom collector step. Loaded
            from the environment when omitted.
        emit: Line sink for the output.

    Returns:
        The results of every step.
    """
    settings = settings or Settings.load()
    logger.info(f"Running collector demo over {len(PEOPLE)} records")

    emit("-----Group:")
    groups = collect(PEOPLE, grouping_by(lambda person: person.country))
    for country, people in groups.items():
        emit(f"{country} -> {render_people(people)}")

    emit("-----Partition:")
    partition = collect(PEOPLE, partitioning_by(lambda person: person.age > ADULT_AGE))
    for is_adult, people in partition.items():
        emit(f"{is_adult} -> {render_people(people)}")

    emit("-----join:")
    joined = collect(PEOPLE, mapping(lambda person: person.name, joining(", ")))
    emit(joined)

    emit("-----Collector:")
    collected = collect(
        PEOPLE,
        tracing_list_collector(emit),
        parallel=settings.PARALLEL,
        chunk_size=settings.CHUNK_SIZE,
        max_workers=settings.MAX_WORKERS,
    )
    emit(render_people(collected))

    return DemoResult(
        groups=groups, partition=partition, joined=joined, collected=collected
    )


def main() -> int:
    """Console entry point."""
    run_demo()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
