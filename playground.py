#%% セル1：パラメータ
from pathlib import Path
FIG_DIR = Path("artifacts/figures")
REQUIRED = ["height", "mass"]

#%% セル2：読み込みと確認
from charclean.datasets import load_starwars
from charclean.cleaning import missing_summary

df = load_starwars()
print(df.shape)
print(df.dtypes)
missing_summary(df)

#%% セル3：欠損のある行を外す（外した行も見ておく）
from charclean.cleaning import MissingFilter

flt = MissingFilter(REQUIRED)
dropped = flt.isolate(df)
df = flt.apply(df)
print("dropped:", list(dropped["name"]))

#%% セル4：派生列 → 列選択 → 型変換
from charclean.cleaning import add_derived_columns, select_columns, TypeCoercer
from charclean.config import KEEP_COLS

df = add_derived_columns(df)
df = select_columns(df, KEEP_COLS)
df = TypeCoercer(integer_cols=["height", "film_count"],
                 numeric_cols=["mass", "birth_year"],
                 categorical_cols=["sex", "gender", "species", "homeworld"]).coerce(df)
df.dtypes

#%% セル5：要約と図
from charclean.summary import summarize, aggregate, outliers
from charclean.plotting import plot_lesson

print(summarize(df))
print(aggregate(df, by="gender", col="height", mode="median"))
print(outliers(df, col="mass")[["name", "mass", "mass_z"]])
plot_lesson(df, FIG_DIR)

# %%
