from __future__ import annotations

import argparse
from pathlib import Path

from .deps import REQUIRED_PACKAGES, ensure_packages


def parse_cols(s: str | None) -> list[str]:
    if not s:
        return []
    return [t.strip() for t in s.split(",") if t.strip()]


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="データクリーニング教材を実行してレポートを作る")
    ap.add_argument("--in", dest="in_path", type=Path, default=None, help="別のCSVを使う（省略時は同梱データ）")
    ap.add_argument("--out", dest="out_path", type=Path, default=None, help="整えた表のCSV保存先（省略可）")
    ap.add_argument("--report", type=Path, default=Path("artifacts/lesson.md"), help="レポート(Markdown)の保存先")
    ap.add_argument("--fig-dir", dest="fig_dir", type=Path, default=Path("artifacts/figures"), help="図の保存先フォルダ")
    ap.add_argument("--no-figures", dest="figures", action="store_false", help="図を描かない")
    ap.add_argument("--required", type=str, default="height,mass", help="欠損があれば行ごと外す列（カンマ区切り）")
    ap.add_argument("--by", type=str, default="gender", help="集計のグループ列")
    ap.add_argument("--col", type=str, default="height", help="集計する数値列")
    ap.add_argument("--agg", choices=["mean", "median"], default="mean")
    ap.add_argument("--verbose", action="store_true", help="途中経過を表示")
    ap.add_argument("--show", action="store_true", help="図を画面に表示")
    ap.add_argument("--install-missing", dest="install_missing", action="store_true",
                    help="足りないパッケージを pip で入れる")
    ap.add_argument("--no-install-missing", dest="install_missing", action="store_false")
    ap.set_defaults(install_missing=True, figures=True)
    return ap


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    # 先に依存パッケージをそろえてから教材を読み込む
    ensure_packages(REQUIRED_PACKAGES, install_missing=args.install_missing)

    from .config import CleanerConfig, LessonConfig
    from .datasets import DataLoader
    from .lesson import run_lesson
    from .plotting import Plotter
    from .report import digest, write_report

    cfg = LessonConfig(
        cleaner=CleanerConfig(drop_na_cols=parse_cols(args.required)),
        group_by=args.by,
        agg_col=args.col,
        agg_mode=args.agg,
    )
    loader = DataLoader()
    df = loader.load(args.in_path)

    result = run_lesson(
        df,
        config=cfg,
        fig_dir=args.fig_dir if args.figures else None,
        verbose=args.verbose,
        plotter=Plotter(show=args.show),
    )

    report_path = write_report(result, args.report)
    if args.out_path is not None:
        loader.save(result.cleaned, args.out_path)

    print(digest(result, report_path=report_path, out_path=args.out_path))
    print(f"Done: wrote {report_path}")


if __name__ == "__main__":
    main()
