# charclean/lesson.py
# ============================================================
# データクリーニング教材の本体（上から順に1回だけ実行する）
#  - 読み込み → 確認 → 欠損行の除外 → 派生列 → 列選択 → 型変換 → 要約 → 図
#  - 各ステップは「説明文・コード例・出力・図」を Step にまとめて返す
#  - 表は1つだけで、ステップごとに df を置き換えていく
# ============================================================

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from .cleaning import (
    Cleaner,
    MissingFilter,
    TypeCoercer,
    add_derived_columns,
    missing_summary,
    select_columns,
)
from .config import LessonConfig
from .datasets import DataLoader
from .plotting import Plotter, plot_lesson
from .summary import aggregate, describe_column, outliers, summarize, top_categories


@dataclass
class Step:
    key: str
    title: str
    narrative: str
    code: str = ""
    output: str = ""
    figures: dict[str, Path] = field(default_factory=dict)


@dataclass
class LessonResult:
    steps: list[Step] = field(default_factory=list)
    raw: pd.DataFrame | None = None
    cleaned: pd.DataFrame | None = None
    isolated: pd.DataFrame | None = None
    summary: pd.DataFrame | None = None
    aggregated: pd.DataFrame | None = None
    outliers: pd.DataFrame | None = None
    figures: dict[str, Path] = field(default_factory=dict)

    def step(self, key: str) -> Step:
        for s in self.steps:
            if s.key == key:
                return s
        raise KeyError(key)


N_STEPS = 11

EXERCISES = """\
1. `MissingFilter(["height"])` に変えると何行残るか。`mass` も条件に入れた場合と比べてみよう。
2. `birth_year` が欠けているキャラクターだけを取り出し、`species` ごとに数えてみよう。
3. `is_pilot` が True のキャラクターの平均身長は、そうでないキャラクターより高いか？ `aggregate(df, by="is_pilot")` で確かめよう。
4. `hair_color` の "none" と欠損（NaN）は同じ意味か？ 自分の判断で片方にそろえてみよう。
5. （結合）惑星ごとの気候・人口を持つ別の表を自分で作り、`homeworld` をキーに `pd.merge` でつないでみよう。解答例はありません。
"""


def _log(verbose: bool, i: int, msg: str) -> None:
    if verbose:
        print(f"[{i}/{N_STEPS}] {msg}")


def _dtypes(df: pd.DataFrame) -> str:
    return df.dtypes.astype(str).to_string()


def run_lesson(
    df: pd.DataFrame | None = None,
    config: LessonConfig | None = None,
    fig_dir: Path | None = None,
    verbose: bool = False,
    plotter: Plotter | None = None,
) -> LessonResult:
    cfg = config or LessonConfig()
    required = list(cfg.cleaner.drop_na_cols or [])
    res = LessonResult()

    # 1) 読み込み
    _log(verbose, 1, "Load")
    if df is None:
        df = DataLoader().load()
    res.raw = df.copy()
    res.steps.append(Step(
        key="load",
        title="データを読み込む",
        narrative=(
            "教材に同梱しているキャラクター表を読み込みます。1行が1人のキャラクターで、"
            "身長・体重・誕生年・性別のほか、出演作品や操縦した乗り物・宇宙船が"
            "リスト（複数の値を持つ列）として入っています。"
        ),
        code="from charclean.datasets import load_starwars\ndf = load_starwars()\ndf.shape",
        output=f"shape: {df.shape}",
    ))

    # 2) 中身の確認
    _log(verbose, 2, "Inspect")
    preview_cols = [c for c in ["name", "height", "mass", "birth_year", "gender", "species"] if c in df.columns]
    res.steps.append(Step(
        key="inspect",
        title="中身を確認する",
        narrative=(
            "まずは形・列名・型・先頭の数行を見ます。数値のはずの列が float になっているのは、"
            "欠損（NaN）が混ざっているためです。"
        ),
        code="df.dtypes\ndf.head()",
        output=_dtypes(df) + "\n\n" + df[preview_cols].head().to_string(),
    ))

    # 3) 欠損の数
    _log(verbose, 3, "Missing values")
    miss = missing_summary(df)
    res.steps.append(Step(
        key="missing",
        title="欠損値を数える",
        narrative=(
            "列ごとに欠損の数と割合を数えます。リスト列の空リストは「一度も出ていない／操縦していない」"
            "という意味なので欠損としては数えません。"
        ),
        code="from charclean.cleaning import missing_summary\nmissing_summary(df)",
        output=miss.to_string(),
    ))

    # 4) 欠損行の除外（indexはそのまま）
    _log(verbose, 4, f"Filter rows missing {required}")
    flt = MissingFilter(required)
    res.isolated = flt.isolate(df)
    n_raw = len(df)
    df = flt.apply(df)
    res.steps.append(Step(
        key="filter",
        title="欠損のある行を取り除く",
        narrative=(
            f"{', '.join(required)} のどれかが欠けている行を分析から外します。"
            "外した行は捨てずに別の表として取っておき、誰が外れたかを確認します。"
            "行の index は振り直さないので、元の表と同じ行を指したままです。"
        ),
        code=(
            "from charclean.cleaning import MissingFilter\n"
            f"flt = MissingFilter({required!r})\n"
            "dropped = flt.isolate(df)\n"
            "df = flt.apply(df)"
        ),
        output=(
            f"rows: raw={n_raw} -> filtered={len(df)} (dropped={len(res.isolated)})\n"
            "dropped (first 10): " + ", ".join(res.isolated["name"].astype(str).head(10))
        ),
    ))

    # 5) 派生列
    _log(verbose, 5, "Derive is_pilot / film_count / height_class")
    df = add_derived_columns(df)
    res.steps.append(Step(
        key="derive",
        title="派生列を作る",
        narrative=(
            "既存の列から新しい列を作ります。乗り物か宇宙船を1つでも操縦していれば "
            "`is_pilot` を True、出演作品の数を `film_count`、身長を3段階に分けた "
            "`height_class` を追加します。"
        ),
        code=(
            "from charclean.cleaning import add_derived_columns\n"
            "df = add_derived_columns(df)\n"
            "df[['name', 'is_pilot', 'film_count', 'height_class']].head()"
        ),
        output=(
            df[["name", "is_pilot", "film_count", "height_class"]].head().to_string()
            + f"\n\npilots: {int(df['is_pilot'].sum())} / {len(df)}"
        ),
    ))

    # 6) 列の選択
    keep = [c for c in (cfg.cleaner.keep_cols or list(df.columns)) if c in df.columns]
    _log(verbose, 6, f"Select {len(keep)} columns")
    df = select_columns(df, keep)
    res.steps.append(Step(
        key="select",
        title="必要な列だけを残す",
        narrative="分析に使う列だけを残します。リスト列は派生列に置き換えたので落とします。",
        code=f"from charclean.cleaning import select_columns\ndf = select_columns(df, {keep!r})",
        output="columns: " + ", ".join(df.columns),
    ))

    # 7) 型変換
    _log(verbose, 7, "Coerce types")
    before = _dtypes(df)
    coercer = TypeCoercer(
        integer_cols=cfg.cleaner.integer_cols,
        numeric_cols=cfg.cleaner.numeric_cols,
        categorical_cols=cfg.cleaner.categorical_cols,
    )
    df = coercer.coerce(df)
    demo = pd.to_numeric(pd.Series(["172", "96", "unknown"]), errors="coerce")
    res.steps.append(Step(
        key="coerce",
        title="型をそろえる",
        narrative=(
            "身長は整数、体重と誕生年は小数、性別や種族はカテゴリとして扱います。"
            "数値にできない文字は errors='coerce' で NaN になります。"
        ),
        code=(
            "from charclean.cleaning import TypeCoercer\n"
            f"df = TypeCoercer(integer_cols={cfg.cleaner.integer_cols!r},\n"
            f"                 numeric_cols={cfg.cleaner.numeric_cols!r},\n"
            f"                 categorical_cols={cfg.cleaner.categorical_cols!r}).coerce(df)\n"
            "pd.to_numeric(pd.Series(['172', '96', 'unknown']), errors='coerce')"
        ),
        output=(
            "--- before ---\n" + before + "\n--- after ---\n" + _dtypes(df)
            + "\n--- to_numeric ---\n" + demo.to_string()
        ),
    ))

    # 8) 要約統計
    _log(verbose, 8, f"Summarize (agg={cfg.agg_mode} of {cfg.agg_col} by {cfg.group_by})")
    res.summary = summarize(df)
    res.aggregated = aggregate(df, by=cfg.group_by, col=cfg.agg_col, mode=cfg.agg_mode)
    res.outliers = outliers(df, col=cfg.outlier_col, z=cfg.outlier_z)
    text_col = "species" if "species" in df.columns else "name"
    out_lines = [
        res.summary.to_string(index=False),
        f"\n--- {cfg.agg_mode} {cfg.agg_col} by {cfg.group_by} ---",
        res.aggregated.to_string(index=False),
        f"\n--- describe({text_col}) ---",
        describe_column(df[text_col]).to_string(),
        f"\n--- |z| > {cfg.outlier_z} on {cfg.outlier_col} ---",
        res.outliers[[c for c in ["name", cfg.outlier_col] if c in res.outliers.columns]].to_string(),
    ]
    if cfg.group_by in df.columns:
        out_lines.append(f"\ntop {cfg.group_by}: {top_categories(df, cfg.group_by)}")
    res.steps.append(Step(
        key="summarize",
        title="要約統計を見る",
        narrative=(
            "数値列の件数・平均・中央値・標準偏差・最小・最大を出し、グループ別の集計もします。"
            "文字の列を describe() すると count/unique/top/freq が出るだけで、数値の要約には"
            "なりません。体重の z スコアで外れ値を探すと、1人だけ極端に重いキャラクターが見つかります。"
            "平均はこの1人に強く引っ張られるので、中央値とも比べてみましょう。"
        ),
        code=(
            "from charclean.summary import summarize, aggregate, describe_column, outliers\n"
            "summarize(df)\n"
            f"aggregate(df, by={cfg.group_by!r}, col={cfg.agg_col!r}, mode={cfg.agg_mode!r})\n"
            f"describe_column(df[{text_col!r}])\n"
            f"outliers(df, col={cfg.outlier_col!r}, z={cfg.outlier_z})"
        ),
        output="\n".join(out_lines),
    ))

    # 9) 図
    _log(verbose, 9, f"Plot -> {fig_dir}")
    if fig_dir is not None:
        res.figures = plot_lesson(df, fig_dir, plotter=plotter)
    res.steps.append(Step(
        key="plot",
        title="図で確かめる",
        narrative=(
            "身長のヒストグラム、身長と体重の散布図（性別で色分け）、パイロットかどうかの件数、"
            "体重の箱ひげ図を描きます。散布図と箱ひげ図では外れ値がはっきり見えます。"
        ),
        code="from charclean.plotting import plot_lesson\nplot_lesson(df, 'artifacts/figures')",
        output="\n".join(f"{k}: {v}" for k, v in res.figures.items()) or "(figures skipped)",
        figures=dict(res.figures),
    ))

    # 10) 一括処理（ここまでの手順を Cleaner 1回で）
    _log(verbose, 10, "Pipeline")
    once = Cleaner(cfg.cleaner).clean(res.raw)
    same = once.index.equals(df.index) and list(once.columns) == list(df.columns)
    res.steps.append(Step(
        key="pipeline",
        title="手順をまとめる",
        narrative=(
            "ここまでの「除外 → 派生列 → 列選択 → 型変換」は Cleaner にまとめてあり、"
            "1回の呼び出しで同じ表が得られます（名前の重複行もここで落とします）。"
        ),
        code="from charclean.cleaning import Cleaner\nclean = Cleaner().clean(raw)",
        output=f"shape: {once.shape}  same_rows_and_columns={same}",
    ))

    # 11) 演習
    _log(verbose, 11, "Exercises")
    res.steps.append(Step(
        key="exercises",
        title="演習",
        narrative=EXERCISES,
    ))

    res.cleaned = df
    return res
