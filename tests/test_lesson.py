from charclean.config import CleanerConfig, LessonConfig
from charclean.lesson import run_lesson
from charclean.report import digest, render_markdown, write_report


STEP_KEYS = [
    "load", "inspect", "missing", "filter", "derive", "select",
    "coerce", "summarize", "plot", "pipeline", "exercises",
]


def test_lesson_runs_every_step_in_order(tmp_path):
    res = run_lesson(fig_dir=tmp_path / "figures")
    assert [s.key for s in res.steps] == STEP_KEYS
    assert len(res.raw) == 87
    assert len(res.cleaned) == 59
    assert len(res.isolated) == 28
    assert (res.cleaned["name"] == res.raw.loc[res.cleaned.index, "name"]).all()
    assert "same_rows_and_columns=True" in res.step("pipeline").output
    assert len(res.figures) == 4


def test_lesson_without_figures_and_custom_config(capsys):
    cfg = LessonConfig(cleaner=CleanerConfig(drop_na_cols=["height"]), agg_mode="median")
    res = run_lesson(config=cfg, verbose=True)
    assert len(res.cleaned) == 81
    assert res.figures == {}
    assert "(figures skipped)" in res.step("plot").output
    assert "[4/11] Filter" in capsys.readouterr().out


def test_report_contains_every_step_and_relative_images(tmp_path):
    res = run_lesson(fig_dir=tmp_path / "figures")
    path = write_report(res, tmp_path / "lesson.md")
    text = path.read_text(encoding="utf-8")
    for step in res.steps:
        assert step.title in text
    assert "](figures/height_hist.png)" in text
    assert text.count("```python") == len([s for s in res.steps if s.code])


def test_render_markdown_without_base_dir_uses_given_paths(tmp_path):
    res = run_lesson(fig_dir=tmp_path)
    text = render_markdown(res)
    assert (tmp_path / "height_hist.png").as_posix() in text


def test_digest_reports_row_counts():
    res = run_lesson()
    text = digest(res)
    assert "rows      : raw=87 -> clean=59 (dropped=28)" in text
    assert "pilots    : 21 / 59" in text
    assert "Jabba Desilijic Tiure" in text
