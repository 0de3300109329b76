"""Generic accumulate/merge protocol for reducing iterables.

A :class:`Collector` describes a mutable reduction as four functions:

    - **supplier**: creates a new, empty result container
    - **accumulator**: folds one element into a container (in place)
    - **combiner**: merges two partial containers and returns the merged one
    - **finisher**: turns the container into the final result (optional)

The same collector can be evaluated sequentially or by splitting the input
into chunks, accumulating every chunk into its own container on a worker
thread, and merging the partial containers pairwise until one remains. As long
as the combiner is associative, both strategies produce the same result.

Examples:
    >>> from collectors.functional.collector import Collector, collect
    >>> to_list = Collector.of(list, list.append, lambda a, b: a + b)
    >>> collect(range(5), to_list, parallel=True, chunk_size=2)
    [0, 1, 2, 3, 4]
"""

import math
import os
import threading
import typing as tp
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

from collectors.core.enums import Characteristics
from collectors.logger.logger import logger

__all__ = [
    "Collector",
    "collect",
    "split_chunks",
    "merge_pairwise",
]

T = tp.TypeVar("T")
A = tp.TypeVar("A")
R = tp.TypeVar("R")


@dataclass(frozen=True)
class Collector(tp.Generic[T, A, R]):
    """A mutable reduction operation over elements of type ``T``.

    Attributes:
        supplier: Factory returning a new empty container of type ``A``.
        accumulator: Adds one element to a container in place.
        combiner: Merges the right container into the left and returns the
            merged container. Must be associative.
        finisher: Optional final transform from ``A`` to ``R``.
        characteristics: Hints the ``collect`` driver may rely on.
    """

    supplier: tp.Callable[[], A]
    accumulator: tp.Callable[[A, T], None]
    combiner: tp.Callable[[A, A], A]
    finisher: tp.Optional[tp.Callable[[A], R]] = None
    characteristics: tp.FrozenSet[Characteristics] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        for name in ("supplier", "accumulator", "combiner"):
            if not callable(getattr(self, name)):
                raise TypeError(f"Collector {name} must be callable")
        if self.finisher is not None and not callable(self.finisher):
            raise TypeError("Collector finisher must be callable or None")

    @classmethod
    def of(
        cls,
        supplier: tp.Callable[[], A],
        accumulator: tp.Callable[[A, T], None],
        combiner: tp.Callable[[A, A], A],
        finisher: tp.Optional[tp.Callable[[A], R]] = None,
        *characteristics: Characteristics,
    ) -> "Collector[T, A, R]":
        """Build a collector from its component functions.

        A collector built without a finisher always carries
        ``IDENTITY_FINISH``.
        """
        flags = set(characteristics)
        if finisher is None:
            flags.add(Characteristics.IDENTITY_FINISH)
        return cls(
            supplier=supplier,
            accumulator=accumulator,
            combiner=combiner,
            finisher=finisher,
            characteristics=frozenset(flags),
        )

    @property
    def is_identity_finish(self) -> bool:
        return (
            self.finisher is None
            or Characteristics.IDENTITY_FINISH in self.characteristics
        )

    @property
    def is_unordered(self) -> bool:
        return Characteristics.UNORDERED in self.characteristics

    @property
    def is_concurrent(self) -> bool:
        return Characteristics.CONCURRENT in self.characteristics

    def accumulate_all(self, elements: tp.Iterable[T]) -> A:
        """Accumulate every element into a fresh container."""
        container = self.supplier()
        for element in elements:
            self.accumulator(container, element)
        return container

    def finish(self, container: A) -> R:
        """Apply the finisher to a fully merged container."""
        if self.is_identity_finish:
            return tp.cast(R, container)
        return self.finisher(container)  # type: ignore[misc]


def split_chunks(elements: tp.Sequence[T], chunk_size: int) -> tp.List[tp.Sequence[T]]:
    """Split a sequence into contiguous chunks of at most ``chunk_size``.

    Args:
        elements: Materialised input.
        chunk_size: Maximum number of elements per chunk.

    Returns:
        The chunks in input order. Empty input gives no chunks.

    Raises:
        ValueError: If ``chunk_size`` is less than 1.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
    return [elements[i : i + chunk_size] for i in range(0, len(elements), chunk_size)]


def merge_pairwise(containers: tp.List[A], combiner: tp.Callable[[A, A], A]) -> A:
    """Merge partial containers pairwise, level by level, until one remains.

    Neighbours are merged left to right, so an ordered list of containers
    produces an ordered result.

    Raises:
        ValueError: If ``containers`` is empty.
    """
    if not containers:
        raise ValueError("merge_pairwise requires at least one container")

    level = list(containers)
    while len(level) > 1:
        merged = [
            combiner(level[i], level[i + 1]) for i in range(0, len(level) - 1, 2)
        ]
        if len(level) % 2:
            merged.append(level[-1])
        level = merged
    return level[0]


def collect(
    elements: tp.Iterable[T],
    collector: Collector[T, A, R],
    parallel: bool = False,
    chunk_size: tp.Optional[int] = None,
    max_workers: tp.Optional[int] = None,
) -> R:
    """Reduce ``elements`` with ``collector``.

    Args:
        elements: Any iterable. It is materialised when ``parallel`` is set.
        collector: The reduction to apply.
        parallel: Split the input into chunks and accumulate them on worker
            threads before merging.
        chunk_size: Elements per chunk. Defaults to an even split across
            ``max_workers``.
        max_workers: Worker thread count. Defaults to the executor default.

    Returns:
        The finished result of the collector.

    Raises:
        ValueError: If ``chunk_size`` or ``max_workers`` is less than 1.
    """
    if max_workers is not None and max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers}")
    if chunk_size is not None and chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")

    if not parallel:
        return collector.finish(collector.accumulate_all(elements))

    items = list(elements)
    if not items:
        return collector.finish(collector.supplier())

    workers = max_workers or _default_workers()
    with ThreadPoolExecutor(max_workers=workers) as executor:
        size = chunk_size or max(1, math.ceil(len(items) / workers))
        chunks = split_chunks(items, size)
        logger.debug(
            f"Collecting {len(items)} elements in {len(chunks)} chunks "
            f"of up to {size} on {workers} workers"
        )

        if collector.is_concurrent and collector.is_unordered:
            return collector.finish(_collect_shared(executor, chunks, collector))

        future_to_index = {
            executor.submit(collector.accumulate_all, chunk): index
            for index, chunk in enumerate(chunks)
        }
        partials: tp.Dict[int, A] = {}
        completion_order: tp.List[int] = []
        for future in as_completed(future_to_index):
            index = future_to_index[future]
            try:
                partials[index] = future.result()
            except Exception as exc:
                logger.error(f"Accumulation failed for chunk {index}: {exc}")
                raise
            completion_order.append(index)

    order = completion_order if collector.is_unordered else sorted(partials)
    return collector.finish(
        merge_pairwise([partials[i] for i in order], collector.combiner)
    )


def _default_workers() -> int:
    # Same default as ThreadPoolExecutor
    return min(32, (os.cpu_count() or 1) + 4)


def _collect_shared(
    executor: ThreadPoolExecutor,
    chunks: tp.List[tp.Sequence[T]],
    collector: Collector[T, A, R],
) -> A:
    """Accumulate every chunk into one shared container under a lock."""
    container = collector.supplier()
    lock = threading.Lock()

    def accumulate_chunk(chunk: tp.Sequence[T]) -> None:
        for element in chunk:
            with lock:
                collector.accumulator(container, element)

    futures = [executor.submit(accumulate_chunk, chunk) for chunk in chunks]
    for future in as_completed(futures):
        try:
            future.result()
        except Exception as exc:
            logger.error(f"Concurrent accumulation failed: {exc}")
            raise
    return container
