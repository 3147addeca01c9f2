import pandas as pd
import pytest

from charclean.datasets import COLUMNS, DataLoader, load_starwars


def test_bundled_dataset_shape_and_list_columns():
    df = load_starwars()
    assert df.shape == (87, 14)
    assert list(df.columns) == COLUMNS
    for col in ["films", "vehicles", "starships"]:
        assert df[col].map(lambda v: isinstance(v, list)).all()

    luke = df[df["name"] == "Luke Skywalker"].iloc[0]
    assert len(luke["films"]) == 5
    assert luke["vehicles"] == ["Snowspeeder", "Imperial Speeder Bike"]

    c3po = df[df["name"] == "C-3PO"].iloc[0]
    assert c3po["vehicles"] == [] and c3po["starships"] == []


def test_bundled_dataset_missing_values():
    df = load_starwars()
    assert int(df["height"].isna().sum()) == 6
    assert int(df["mass"].isna().sum()) == 28
    # "none" is a value, not a missing marker
    assert (df["hair_color"] == "none").any()


def test_load_rejects_table_without_list_columns(tmp_path):
    path = tmp_path / "bad.csv"
    pd.DataFrame({"name": ["x"], "height": [1]}).to_csv(path, index=False)
    with pytest.raises(ValueError):
        DataLoader().load(path)


def test_save_encodes_lists_and_load_reads_them_back(tmp_path, toy):
    path = DataLoader().save(toy, tmp_path / "out" / "toy.csv")
    assert path.exists()
    assert "f1|f2|f3" in path.read_text(encoding="utf-8")

    back = DataLoader().load(path)
    assert back["films"].tolist() == toy["films"].tolist()
    assert back["vehicles"].tolist() == toy["vehicles"].tolist()
