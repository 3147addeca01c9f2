from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from pathlib import Path

import pandas as pd


COLUMNS = [
    "name", "height", "mass", "hair_color", "skin_color", "eye_color",
    "birth_year", "sex", "gender", "homeworld", "species",
    "films", "vehicles", "starships",
]
# CSV上は "A|B|C" で保存しているリスト列
LIST_COLUMNS = ["films", "vehicles", "starships"]
LIST_SEP = "|"


def bundled_path() -> Path:
    return Path(str(resources.files("charclean") / "data" / "starwars.csv"))


def _split_list(cell) -> list[str]:
    if not isinstance(cell, str) or not cell.strip():
        return []
    return [t.strip() for t in cell.split(LIST_SEP) if t.strip()]


def _join_list(cell) -> str:
    if isinstance(cell, (list, tuple)):
        return LIST_SEP.join(str(t) for t in cell)
    return "" if pd.isna(cell) else str(cell)


@dataclass
class DataLoader:
    list_columns: tuple[str, ...] = tuple(LIST_COLUMNS)

    def load(self, path: Path | None = None) -> pd.DataFrame:
        src = Path(path) if path is not None else bundled_path()
        df = pd.read_csv(src)
        missing = [c for c in ("name", *self.list_columns) if c not in df.columns]
        if missing:
            raise ValueError(f"Required columns: {missing} (in {src})")
        for col in self.list_columns:
            df[col] = df[col].map(_split_list)
        return df

    def save(self, df: pd.DataFrame, path: Path) -> Path:
        out = df.copy()
        for col in self.list_columns:
            if col in out.columns:
                out[col] = out[col].map(_join_list)
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        out.to_csv(path, index=False)
        return path


def load_starwars() -> pd.DataFrame:
    """同梱のキャラクター表（87行×14列）を読み込む。"""
    return DataLoader().load()
