import pandas as pd
import pytest

from charclean.cleaning import (
    Cleaner,
    MissingFilter,
    TypeCoercer,
    add_derived_columns,
    derive_film_count,
    derive_height_class,
    derive_is_pilot,
    missing_summary,
    select_columns,
)
from charclean.config import KEEP_COLS, CleanerConfig
from charclean.datasets import load_starwars


def test_missing_summary_counts_and_ignores_empty_lists(toy):
    out = missing_summary(toy)
    assert out.loc["height", "missing_count"] == 1
    assert out.loc["mass", "missing_count"] == 1
    assert out.loc["films", "missing_count"] == 0
    assert out.loc["height", "missing_pct"] == 25.0
    assert out["missing_count"].is_monotonic_decreasing


def test_missing_filter_keeps_row_identity(toy):
    flt = MissingFilter(["height", "mass"])
    kept = flt.apply(toy)
    dropped = flt.isolate(toy)

    assert kept.index.tolist() == [10, 13]
    assert dropped.index.tolist() == [11, 12]
    # same labels point at the same characters as before
    assert (kept["name"] == toy.loc[kept.index, "name"]).all()
    # apply + isolate partition the input
    assert sorted(kept.index.tolist() + dropped.index.tolist()) == toy.index.tolist()


def test_missing_filter_unknown_column(toy):
    with pytest.raises(ValueError):
        MissingFilter(["weight"]).apply(toy)


def test_derive_is_pilot_and_film_count(toy):
    out = derive_film_count(derive_is_pilot(toy))
    assert out["is_pilot"].tolist() == [True, False, False, True]
    assert out["film_count"].tolist() == [2, 1, 0, 3]
    assert "is_pilot" not in toy.columns


def test_derive_is_pilot_treats_missing_cells_as_empty():
    df = pd.DataFrame({"vehicles": [None, ["v"]], "starships": [float("nan"), []]})
    assert derive_is_pilot(df)["is_pilot"].tolist() == [False, True]


def test_derive_height_class_bins():
    df = pd.DataFrame({"height": [66, 100, 101, 180, 181, None]})
    out = derive_height_class(df)
    assert out["height_class"].astype(str).tolist()[:5] == ["short", "short", "medium", "medium", "tall"]
    assert pd.isna(out["height_class"].iloc[5])
    assert isinstance(out["height_class"].dtype, pd.CategoricalDtype)


def test_select_columns_order_and_unknown(toy):
    out = select_columns(toy, ["mass", "name"])
    assert list(out.columns) == ["mass", "name"]
    with pytest.raises(ValueError):
        select_columns(toy, ["name", "homeworld"])


def test_type_coercer_text_to_numbers_and_categories():
    df = pd.DataFrame({
        "height": ["172", "96", "unknown"],
        "mass": ["77", "bad", "1358.5"],
        "gender": ["masculine", "feminine", "masculine"],
    })
    out = TypeCoercer(integer_cols=["height"], numeric_cols=["mass", "birth_year"],
                      categorical_cols=["gender"]).coerce(df)

    assert str(out["height"].dtype) == "Int64"
    assert out["height"].iloc[0] == 172
    assert pd.isna(out["height"].iloc[2])
    assert pd.isna(out["mass"].iloc[1])
    assert out["mass"].iloc[2] == 1358.5
    assert isinstance(out["gender"].dtype, pd.CategoricalDtype)
    assert "birth_year" not in out.columns


def test_cleaner_on_bundled_dataset():
    raw = load_starwars()
    clean = Cleaner(CleanerConfig()).clean(raw)

    assert len(clean) == 59
    assert list(clean.columns) == KEEP_COLS
    assert str(clean["height"].dtype) == "Int64"
    assert clean["is_pilot"].sum() == 21
    assert set(clean.index) <= set(raw.index)
    assert (clean["name"] == raw.loc[clean.index, "name"]).all()


def test_cleaner_drops_duplicate_names(toy):
    dup = pd.concat([toy, toy.iloc[[0]]], ignore_index=True)
    cfg = CleanerConfig(keep_cols=["name", "height", "is_pilot"], integer_cols=["height"],
                        numeric_cols=[], categorical_cols=[])
    out = Cleaner(cfg).clean(dup)
    assert out["name"].tolist() == ["A", "D"]


def test_add_derived_columns_adds_all_three(toy):
    out = add_derived_columns(toy)
    assert {"is_pilot", "film_count", "height_class"} <= set(out.columns)
