from __future__ import annotations

from dataclasses import dataclass, field


# 教材で使う列の既定値（設定の入れ物）
KEEP_COLS = [
    "name", "height", "mass", "birth_year", "sex", "gender",
    "species", "homeworld", "is_pilot", "film_count", "height_class",
]


@dataclass
class CleanerConfig:
    drop_na_cols: list[str] | None = field(default_factory=lambda: ["height", "mass"])
    dedupe_on: str | None = "name"
    keep_cols: list[str] | None = field(default_factory=lambda: list(KEEP_COLS))
    integer_cols: list[str] = field(default_factory=lambda: ["height", "film_count"])
    numeric_cols: list[str] = field(default_factory=lambda: ["mass", "birth_year"])
    categorical_cols: list[str] = field(
        default_factory=lambda: ["sex", "gender", "species", "homeworld"]
    )


@dataclass
class LessonConfig:
    cleaner: CleanerConfig = field(default_factory=CleanerConfig)
    group_by: str = "gender"
    agg_col: str = "height"
    agg_mode: str = "mean"
    outlier_col: str = "mass"
    outlier_z: float = 3.0
