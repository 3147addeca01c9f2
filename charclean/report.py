from __future__ import annotations

import os
from datetime import datetime as dt
from pathlib import Path

from .lesson import LessonResult
from .summary import top_categories

TITLE = "データクリーニング入門：キャラクター表を整える"


def _image_ref(path: Path, base: Path | None) -> str:
    if base is None:
        return Path(path).as_posix()
    try:
        return Path(os.path.relpath(Path(path).resolve(), Path(base).resolve())).as_posix()
    except ValueError:
        # Windowsでドライブが違うと相対パスにできない
        return Path(path).as_posix()


def render_markdown(result: LessonResult, base_dir: Path | None = None) -> str:
    lines = [f"# {TITLE}", ""]
    for i, step in enumerate(result.steps, start=1):
        lines += [f"## {i}. {step.title}", "", step.narrative.strip(), ""]
        if step.code:
            lines += ["```python", step.code.rstrip(), "```", ""]
        if step.output:
            lines += ["```text", step.output.rstrip(), "```", ""]
        for name, path in step.figures.items():
            lines += [f"![{name}]({_image_ref(path, base_dir)})", ""]
    return "\n".join(lines).rstrip() + "\n"


def write_report(result: LessonResult, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_markdown(result, base_dir=path.parent), encoding="utf-8")
    return path


def digest(result: LessonResult, report_path: Path | None = None, out_path: Path | None = None) -> str:
    raw_rows = len(result.raw) if result.raw is not None else 0
    clean = result.cleaned
    clean_rows = len(clean) if clean is not None else 0
    dropped = len(result.isolated) if result.isolated is not None else 0

    stats_lines = []
    if clean is not None and "is_pilot" in clean.columns:
        stats_lines.append(f"pilots    : {int(clean['is_pilot'].sum())} / {clean_rows}")
    if clean is not None and "gender" in clean.columns:
        stats_lines.append(f"top gender: {top_categories(clean, 'gender')}")
    if result.outliers is not None and "name" in result.outliers.columns and len(result.outliers):
        stats_lines.append("outliers  : " + ", ".join(result.outliers["name"].astype(str)))

    agg_head = ""
    if result.aggregated is not None:
        agg_head = result.aggregated.head(5).to_csv(index=False).strip()

    return (
        "=== LESSON RUN SUMMARY ===\n"
        f"when      : {dt.now().strftime('%Y-%m-%d %H:%M:%S')}\n"
        f"steps     : {len(result.steps)}\n"
        f"rows      : raw={raw_rows} -> clean={clean_rows} (dropped={dropped})\n"
        + (f"report    : {report_path}\n" if report_path is not None else "")
        + (f"out       : {out_path}\n" if out_path is not None else "")
        + ("\n".join(stats_lines) + "\n" if stats_lines else "")
        + ("--- aggregate head (first 5 rows) ---\n" + agg_head + "\n" if agg_head else "")
    )
