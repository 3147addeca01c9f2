from __future__ import annotations

from dataclasses import dataclass

import pandas as pd
from pandas.api.types import is_bool_dtype, is_numeric_dtype, is_object_dtype


def _numeric_columns(df: pd.DataFrame) -> list[str]:
    return [c for c in df.columns if is_numeric_dtype(df[c]) and not is_bool_dtype(df[c])]


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    rows = []
    for col in _numeric_columns(df):
        s = df[col].dropna().astype(float)
        rows.append({
            "column": col,
            "count": int(len(s)),
            "mean": s.mean() if len(s) else float("nan"),
            "median": s.median() if len(s) else float("nan"),
            "std": s.std() if len(s) > 1 else float("nan"),
            "min": s.min() if len(s) else float("nan"),
            "max": s.max() if len(s) else float("nan"),
        })
    return pd.DataFrame(rows, columns=["column", "count", "mean", "median", "std", "min", "max"])


def describe_column(s: pd.Series) -> pd.Series:
    """
    どの列でも describe() する。
    文字列・カテゴリ列だと count/unique/top/freq になり、数値の要約としては意味を持たない。
    リスト列は文字列にしてから数える。
    """
    if is_object_dtype(s) and s.map(lambda v: isinstance(v, (list, tuple))).any():
        s = s.map(str)
    return s.describe()


def aggregate(df: pd.DataFrame, by: str = "gender", col: str = "height", mode: str = "mean") -> pd.DataFrame:
    if not {by, col}.issubset(df.columns):
        raise ValueError(f"Required columns: '{by}', '{col}'")
    if mode not in {"mean", "median"}:
        raise ValueError("mode must be 'mean' or 'median'")
    values = df[[by]].copy()
    values[col] = pd.to_numeric(df[col], errors="coerce").astype(float)
    grouped = (
        values.groupby(by, dropna=False, observed=True)
          .agg(count=(col, "count"), agg_value=(col, mode))
          .reset_index()
          .sort_values(["count", "agg_value"], ascending=[False, False])
    )
    return grouped


def top_categories(df: pd.DataFrame, col: str, n: int = 3) -> str:
    top = df[col].value_counts(dropna=False).head(n)
    return ", ".join(f"{idx}:{cnt}" for idx, cnt in top.items())


@dataclass
class Standardizer:
    col: str = "mass"
    make_new_col: bool = True  # Trueなら mass_z を追加

    def transform(self, df: pd.DataFrame) -> pd.DataFrame:
        out = df.copy()
        if self.col not in out.columns:
            return out
        s = pd.to_numeric(out[self.col], errors="coerce").astype(float)
        mu, sigma = float(s.mean()), float(s.std() or 0.0)
        if sigma == 0.0 or pd.isna(sigma):
            return out
        z = (s - mu) / sigma
        if self.make_new_col:
            out[self.col + "_z"] = z
        else:
            out[self.col] = z
        return out


def outliers(df: pd.DataFrame, col: str = "mass", z: float = 3.0) -> pd.DataFrame:
    scored = Standardizer(col=col, make_new_col=True).transform(df)
    zcol = col + "_z"
    if zcol not in scored.columns:
        return df.iloc[0:0].copy()
    return scored[scored[zcol].abs() > z]
