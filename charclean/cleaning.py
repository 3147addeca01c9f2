from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from .config import CleanerConfig


HEIGHT_BINS = [0, 100, 180, np.inf]
HEIGHT_LABELS = ["short", "medium", "tall"]


def _require(df: pd.DataFrame, cols) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Required columns: {missing}")


def _n_items(cell) -> int:
    # リスト列のセル数（欠損や文字列は0扱い）
    return len(cell) if isinstance(cell, (list, tuple)) else 0


# ---------- 1) 欠損の確認 ----------
def missing_summary(df: pd.DataFrame) -> pd.DataFrame:
    missing = df.isna().sum()
    pct = (missing / max(1, len(df))) * 100
    return (
        pd.DataFrame({"missing_count": missing, "missing_pct": pct.round(1)})
          .sort_values("missing_count", ascending=False, kind="stable")
    )


# ---------- 2) 欠損行の除外 ----------
@dataclass
class MissingFilter:
    required_cols: list[str] = field(default_factory=lambda: ["height", "mass"])

    def _mask(self, df: pd.DataFrame) -> pd.Series:
        _require(df, self.required_cols)
        return df[self.required_cols].notna().all(axis=1)

    def apply(self, df: pd.DataFrame) -> pd.DataFrame:
        # indexは振り直さない（元の行と対応させたまま）
        return df[self._mask(df)].copy()

    def isolate(self, df: pd.DataFrame) -> pd.DataFrame:
        return df[~self._mask(df)].copy()


# ---------- 3) 派生列 ----------
def derive_is_pilot(df: pd.DataFrame) -> pd.DataFrame:
    _require(df, ["vehicles", "starships"])
    out = df.copy()
    out["is_pilot"] = (out["vehicles"].map(_n_items) > 0) | (out["starships"].map(_n_items) > 0)
    return out


def derive_film_count(df: pd.DataFrame) -> pd.DataFrame:
    _require(df, ["films"])
    out = df.copy()
    out["film_count"] = out["films"].map(_n_items).astype(int)
    return out


def derive_height_class(df: pd.DataFrame) -> pd.DataFrame:
    _require(df, ["height"])
    out = df.copy()
    h = pd.to_numeric(out["height"], errors="coerce")
    out["height_class"] = pd.cut(h, bins=HEIGHT_BINS, labels=HEIGHT_LABELS)
    return out


def add_derived_columns(df: pd.DataFrame) -> pd.DataFrame:
    out = derive_is_pilot(df)
    out = derive_film_count(out)
    return derive_height_class(out)


# ---------- 4) 列の選択 ----------
def select_columns(df: pd.DataFrame, cols: list[str]) -> pd.DataFrame:
    _require(df, cols)
    return df[list(cols)].copy()


# ---------- 5) 型変換 ----------
@dataclass
class TypeCoercer:
    integer_cols: list[str] = field(default_factory=list)
    numeric_cols: list[str] = field(default_factory=list)
    categorical_cols: list[str] = field(default_factory=list)

    def coerce(self, df: pd.DataFrame) -> pd.DataFrame:
        out = df.copy()
        for col in self.numeric_cols:
            if col in out.columns:
                out[col] = pd.to_numeric(out[col], errors="coerce")
        for col in self.integer_cols:
            if col in out.columns:
                # NaN を持てる Int64 にする
                out[col] = pd.to_numeric(out[col], errors="coerce").round().astype("Int64")
        for col in self.categorical_cols:
            if col in out.columns:
                out[col] = out[col].astype("category")
        return out


@dataclass
class Cleaner:
    config: CleanerConfig = field(default_factory=CleanerConfig)

    def clean(self, df: pd.DataFrame) -> pd.DataFrame:
        cfg = self.config
        out = df.copy()
        if cfg.drop_na_cols:
            out = MissingFilter(list(cfg.drop_na_cols)).apply(out)
        if cfg.dedupe_on:
            out = out.drop_duplicates(subset=[cfg.dedupe_on], keep="first")
        out = add_derived_columns(out)
        if cfg.keep_cols:
            out = select_columns(out, cfg.keep_cols)
        coercer = TypeCoercer(
            integer_cols=cfg.integer_cols,
            numeric_cols=cfg.numeric_cols,
            categorical_cols=cfg.categorical_cols,
        )
        return coercer.coerce(out)
