"""Standard collectors built on the accumulate/merge protocol.

Every collector here has an associative combiner, so each one can be passed to
:func:`collectors.functional.collector.collect` with ``parallel=True`` and
produce the same result as sequential evaluation. Collectors compose: the
grouping, partitioning, mapping and filtering collectors take a *downstream*
collector that reduces the elements routed to them.

Examples:
    >>> from collectors.core.data import PEOPLE
    >>> from collectors.functional.collector import collect
    >>> collect(PEOPLE, grouping_by(lambda p: p.country, counting()))
    {'US': 2, 'UK': 1, 'CN': 1, 'FR': 1}
    >>> collect((p.name for p in PEOPLE), joining(", "))
    'Alan, Bruce, Crane, Dolly, Ella'
"""

import typing as tp

from collectors.core.enums import Characteristics
from collectors.functional.collector import Collector

__all__ = [
    "to_list",
    "to_set",
    "to_dict",
    "joining",
    "grouping_by",
    "partitioning_by",
    "mapping",
    "filtering",
    "counting",
    "summing",
    "averaging",
    "reducing",
    "collecting_and_then",
]

T = tp.TypeVar("T")
U = tp.TypeVar("U")
K = tp.TypeVar("K")
V = tp.TypeVar("V")


def _extend(left: tp.List[T], right: tp.List[T]) -> tp.List[T]:
    left.extend(right)
    return left


def _update(left: tp.Set[T], right: tp.Set[T]) -> tp.Set[T]:
    left |= right
    return left


def to_list() -> Collector[T, tp.List[T], tp.List[T]]:
    """Collect elements into a list, preserving encounter order."""
    return Collector.of(list, list.append, _extend)


def to_set() -> Collector[T, tp.Set[T], tp.Set[T]]:
    """Collect elements into a set."""
    return Collector.of(set, set.add, _update, None, Characteristics.UNORDERED)


def to_dict(
    key: tp.Callable[[T], K],
    value: tp.Callable[[T], V],
    merge: tp.Optional[tp.Callable[[V, V], V]] = None,
) -> Collector[T, tp.Dict[K, V], tp.Dict[K, V]]:
    """Collect elements into a dict.

    Args:
        key: Derives the key of an element.
        value: Derives the value of an element.
        merge: Resolves two values that share a key. Without it a duplicate
            key raises ``ValueError``.
    """

    def put(container: tp.Dict[K, V], k: K, v: V) -> None:
        if k in container:
            if merge is None:
                raise ValueError(
                    f"Duplicate key {k!r} (attempted merging values "
                    f"{container[k]!r} and {v!r})"
                )
            container[k] = merge(container[k], v)
        else:
            container[k] = v

    def accumulate(container: tp.Dict[K, V], element: T) -> None:
        put(container, key(element), value(element))

    def combine(left: tp.Dict[K, V], right: tp.Dict[K, V]) -> tp.Dict[K, V]:
        for k, v in right.items():
            put(left, k, v)
        return left

    return Collector.of(dict, accumulate, combine)


def joining(
    separator: str = "", prefix: str = "", suffix: str = ""
) -> Collector[str, tp.List[str], str]:
    """Concatenate string elements in encounter order.

    The separator only goes between elements, never before the first or after
    the last.
    """
    return Collector.of(
        list,
        list.append,
        _extend,
        lambda parts: prefix + separator.join(parts) + suffix,
    )


def grouping_by(
    classifier: tp.Callable[[T], K],
    downstream: tp.Optional[Collector[T, tp.Any, V]] = None,
    map_factory: tp.Callable[[], tp.Dict[K, tp.Any]] = dict,
) -> Collector[T, tp.Dict[K, tp.Any], tp.Dict[K, V]]:
    """Group elements by a derived key.

    Args:
        classifier: Derives the group key of an element.
        downstream: Reduces the elements of each group. Defaults to
            :func:`to_list`.
        map_factory: Creates the mapping that holds the groups.

    Returns:
        A collector producing ``{key: downstream result}``. Keys appear in the
        order their first element was encountered.
    """
    downstream = downstream or to_list()

    def accumulate(container: tp.Dict[K, tp.Any], element: T) -> None:
        group_key = classifier(element)
        if group_key not in container:
            container[group_key] = downstream.supplier()
        downstream.accumulator(container[group_key], element)

    def combine(
        left: tp.Dict[K, tp.Any], right: tp.Dict[K, tp.Any]
    ) -> tp.Dict[K, tp.Any]:
        for group_key, partial in right.items():
            if group_key in left:
                left[group_key] = downstream.combiner(left[group_key], partial)
            else:
                left[group_key] = partial
        return left

    if downstream.is_identity_finish:
        return Collector.of(map_factory, accumulate, combine)

    def finish(container: tp.Dict[K, tp.Any]) -> tp.Dict[K, V]:
        for group_key in container:
            container[group_key] = downstream.finish(container[group_key])
        return container

    return Collector.of(map_factory, accumulate, combine, finish)


def partitioning_by(
    predicate: tp.Callable[[T], bool],
    downstream: tp.Optional[Collector[T, tp.Any, V]] = None,
) -> Collector[T, tp.Dict[bool, tp.Any], tp.Dict[bool, V]]:
    """Split elements into the ones matching ``predicate`` and the rest.

    The result always holds exactly two keys, ``False`` then ``True``, even
    when one side is empty.
    """
    downstream = downstream or to_list()

    def supply() -> tp.Dict[bool, tp.Any]:
        return {False: downstream.supplier(), True: downstream.supplier()}

    def accumulate(container: tp.Dict[bool, tp.Any], element: T) -> None:
        downstream.accumulator(container[bool(predicate(element))], element)

    def combine(
        left: tp.Dict[bool, tp.Any], right: tp.Dict[bool, tp.Any]
    ) -> tp.Dict[bool, tp.Any]:
        return {
            False: downstream.combiner(left[False], right[False]),
            True: downstream.combiner(left[True], right[True]),
        }

    if downstream.is_identity_finish:
        return Collector.of(supply, accumulate, combine)

    return Collector.of(
        supply,
        accumulate,
        combine,
        lambda c: {False: downstream.finish(c[False]), True: downstream.finish(c[True])},
    )


def _adapt(
    downstream: Collector[U, tp.Any, V],
    accumulate: tp.Callable[[tp.Any, T], None],
) -> Collector[T, tp.Any, V]:
    # Keeps the downstream container, combiner, finisher and flags.
    return Collector(
        supplier=downstream.supplier,
        accumulator=accumulate,
        combiner=downstream.combiner,
        finisher=downstream.finisher,
        characteristics=downstream.characteristics,
    )


def mapping(
    mapper: tp.Callable[[T], U], downstream: Collector[U, tp.Any, V]
) -> Collector[T, tp.Any, V]:
    """Apply ``mapper`` to each element before handing it to ``downstream``."""

    def accumulate(container: tp.Any, element: T) -> None:
        downstream.accumulator(container, mapper(element))

    return _adapt(downstream, accumulate)


def filtering(
    predicate: tp.Callable[[T], bool], downstream: Collector[T, tp.Any, V]
) -> Collector[T, tp.Any, V]:
    """Hand only elements matching ``predicate`` to ``downstream``."""

    def accumulate(container: tp.Any, element: T) -> None:
        if predicate(element):
            downstream.accumulator(container, element)

    return _adapt(downstream, accumulate)


def reducing(
    identity: U,
    op: tp.Callable[[U, U], U],
    mapper: tp.Optional[tp.Callable[[T], U]] = None,
) -> Collector[T, tp.List[U], U]:
    """Fold elements with an associative binary operator.

    ``identity`` must be neutral for ``op``, because every chunk starts from it.
    """
    transform = mapper or (lambda element: element)

    # Single-slot list as the mutable box
    def accumulate(box: tp.List[U], element: T) -> None:
        box[0] = op(box[0], transform(element))

    def combine(left: tp.List[U], right: tp.List[U]) -> tp.List[U]:
        left[0] = op(left[0], right[0])
        return left

    return Collector.of(lambda: [identity], accumulate, combine, lambda box: box[0])


def counting() -> Collector[T, tp.List[int], int]:
    """Count elements."""
    return reducing(0, lambda a, b: a + b, lambda _: 1)


def summing(mapper: tp.Callable[[T], tp.Union[int, float]]) -> Collector:
    """Sum a numeric value derived from each element."""
    return reducing(0, lambda a, b: a + b, mapper)


def averaging(mapper: tp.Callable[[T], tp.Union[int, float]]) -> Collector:
    """Arithmetic mean of a numeric value derived from each element.

    Returns 0.0 for empty input.
    """

    def accumulate(acc: tp.List[float], element: T) -> None:
        acc[0] += mapper(element)
        acc[1] += 1

    def combine(left: tp.List[float], right: tp.List[float]) -> tp.List[float]:
        left[0] += right[0]
        left[1] += right[1]
        return left

    return Collector.of(
        lambda: [0.0, 0],
        accumulate,
        combine,
        lambda acc: acc[0] / acc[1] if acc[1] else 0.0,
    )


def collecting_and_then(
    downstream: Collector[T, tp.Any, V], finisher: tp.Callable[[V], U]
) -> Collector[T, tp.Any, U]:
    """Apply an extra finishing transform to the result of ``downstream``."""
    flags = downstream.characteristics - {Characteristics.IDENTITY_FINISH}
    return Collector(
        supplier=downstream.supplier,
        accumulator=downstream.accumulator,
        combiner=downstream.combiner,
        finisher=lambda container: finisher(downstream.finish(container)),
        characteristics=frozenset(flags),
    )
