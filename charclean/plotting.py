from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd


@dataclass
class Plotter:
    show: bool = False

    def _save(self, path: Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(path)
        if self.show:
            plt.show()
        plt.close()
        return path

    def histogram(self, df: pd.DataFrame, col: str, path: Path, bins: int = 10) -> Path | None:
        if col not in df.columns:
            return None
        plt.figure()
        pd.to_numeric(df[col], errors="coerce").astype(float).dropna().hist(bins=bins)
        plt.title(f"{col} (n={int(df[col].notna().sum())})")
        plt.xlabel(col)
        plt.ylabel("count")
        return self._save(path)

    def scatter(self, df: pd.DataFrame, x: str, y: str, path: Path, hue: str | None = None) -> Path | None:
        if not {x, y}.issubset(df.columns):
            return None
        plt.figure()
        xs = pd.to_numeric(df[x], errors="coerce").astype(float)
        ys = pd.to_numeric(df[y], errors="coerce").astype(float)
        if hue is not None and hue in df.columns:
            # 凡例つきでグループごとに点を打つ
            for key, part in df.groupby(hue, dropna=False, observed=True):
                plt.scatter(xs.loc[part.index], ys.loc[part.index], label=str(key), alpha=0.7)
            plt.legend(title=hue)
        else:
            plt.scatter(xs, ys, alpha=0.7)
        plt.xlabel(x)
        plt.ylabel(y)
        return self._save(path)

    def bar_counts(self, df: pd.DataFrame, col: str, path: Path) -> Path | None:
        if col not in df.columns:
            return None
        plt.figure()
        df[col].astype(str).value_counts().plot(kind="bar")
        plt.ylabel("count")
        plt.tight_layout()
        return self._save(path)

    def box(self, df: pd.DataFrame, col: str, path: Path) -> Path | None:
        if col not in df.columns:
            return None
        plt.figure()
        pd.to_numeric(df[col], errors="coerce").astype(float).dropna().plot(kind="box")
        return self._save(path)


def plot_lesson(df: pd.DataFrame, fig_dir: Path, plotter: Plotter | None = None) -> dict[str, Path]:
    plotter = plotter or Plotter()
    fig_dir = Path(fig_dir)
    drawn = {
        "height_hist": plotter.histogram(df, "height", fig_dir / "height_hist.png"),
        "height_vs_mass": plotter.scatter(df, "height", "mass", fig_dir / "height_vs_mass.png", hue="gender"),
        "pilots": plotter.bar_counts(df, "is_pilot", fig_dir / "pilots.png"),
        "mass_box": plotter.box(df, "mass", fig_dir / "mass_box.png"),
    }
    return {name: path for name, path in drawn.items() if path is not None}
