"""Collectors that produce pandas DataFrames from pydantic records."""

import typing as tp

import pandas as pd
from pydantic import BaseModel

from collectors.functional.builtins import grouping_by, counting, to_list
from collectors.functional.collector import Collector

__all__ = ["to_frame", "grouping_frame"]

M = tp.TypeVar("M", bound=BaseModel)


def to_frame(
    model: tp.Optional[tp.Type[BaseModel]] = None,
) -> Collector[M, tp.List[M], pd.DataFrame]:
    """Collect records into a DataFrame with one row per record.

    Args:
        model: Record type. When given, its fields become the columns, so
            empty input still yields a frame with the expected columns.

    Returns:
        A collector producing a DataFrame, rows in encounter order.
    """
    columns = list(model.model_fields) if model is not None else None

    def finish(records: tp.List[M]) -> pd.DataFrame:
        return pd.DataFrame(
            [record.model_dump() for record in records], columns=columns
        )

    base = to_list()
    return Collector.of(base.supplier, base.accumulator, base.combiner, finish)


def grouping_frame(
    key: tp.Callable[[M], tp.Hashable], name: str = "key"
) -> Collector[M, tp.Dict[tp.Any, tp.Any], pd.DataFrame]:
    """Count records per derived key as a DataFrame.

    Args:
        key: Derives the group key of a record.
        name: Name of the index of the resulting frame.

    Returns:
        A collector producing a DataFrame indexed by key with a single
        ``count`` column, keys in first-encounter order.
    """
    groups = grouping_by(key, counting())

    def finish(container: tp.Dict[tp.Any, tp.Any]) -> pd.DataFrame:
        counts = groups.finish(container)
        frame = pd.DataFrame({"count": pd.Series(counts, dtype="int64")})
        frame.index.name = name
        return frame

    return Collector.of(groups.supplier, groups.accumulator, groups.combiner, finish)
