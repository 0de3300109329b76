import pandas as pd

from collectors.core.data import PEOPLE
from collectors.core.models import Person
from collectors.functional import collect, grouping_frame, to_frame


def test_to_frame():
    df = collect(PEOPLE, to_frame(), parallel=True, chunk_size=2)

    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == ["name", "age", "country"]
    assert len(df) == 5
    assert df["name"].tolist() == ["Alan", "Bruce", "Crane", "Dolly", "Ella"]
    assert df["age"].sum() == 126


def test_to_frame_empty():
    df = collect([], to_frame())
    assert df.empty


def test_to_frame_empty_keeps_model_columns():
    df = collect([], to_frame(Person))
    assert df.empty
    assert list(df.columns) == ["name", "age", "country"]


def test_to_frame_with_model():
    df = collect(PEOPLE, to_frame(Person), parallel=True, chunk_size=2)
    assert list(df.columns) == ["name", "age", "country"]
    assert df["country"].tolist() == ["US", "US", "UK", "CN", "FR"]


def test_grouping_frame():
    df = collect(PEOPLE, grouping_frame(lambda p: p.country, name="country"))

    assert df.index.name == "country"
    assert df["count"].to_dict() == {"US": 2, "UK": 1, "CN": 1, "FR": 1}
    assert df["count"].sum() == len(PEOPLE)
