"""Tests for the rich terminal dashboard and its CLI entry point."""

import io
from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from rich.console import Console

from adapters.json_store import JsonRecordStore
from conftest import CALENDAR, NOW, make_completion, make_entry
from spine.config import AppConfig, get_config
from spine.domain.models import Exercise, RecordSnapshot
from spine.services.dashboard import main, render_dashboard


def _render(renderable) -> str:
    console = Console(file=io.StringIO(), width=120, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


@pytest.fixture(autouse=True)
def clear_config_cache() -> Iterator[None]:
    get_config.cache_clear()
    yield
    get_config.cache_clear()


class TestRenderDashboard:
    def test_empty_snapshot_shows_placeholder(self) -> None:
        output = _render(render_dashboard(RecordSnapshot(), NOW, CALENDAR, AppConfig()))

        assert "No data yet" in output
        assert "Start logging pain to see trends" in output
        assert "March 2026" in output

    def test_sections_for_logged_data(self) -> None:
        snapshot = RecordSnapshot(
            pain_entries=(
                make_entry(NOW - timedelta(days=1), 2, trigger="Sitting"),
                make_entry(NOW - timedelta(days=2), 6, symptom="Dull"),
            ),
            exercises=(Exercise(name="Bridges", sets=2, reps=12, frequency="3x/week"),),
            completions=(make_completion(NOW - timedelta(days=1)),),
        )

        output = _render(render_dashboard(snapshot, NOW, CALENDAR, AppConfig(), "14D"))

        assert "Trends (Last 14 Days)" in output
        assert "4.0" in output
        assert "2026-03-16" in output
        assert "Sitting" in output
        assert "1/3 this week" in output
        assert "No data yet" not in output

    def test_month_offset(self) -> None:
        output = _render(
            render_dashboard(RecordSnapshot(), NOW, CALENDAR, AppConfig(), month_offset=-2)
        )
        assert "January 2026" in output


class TestMain:
    def test_export_prints_report(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        data = tmp_path / "data.json"
        recent = datetime.now(UTC) - timedelta(hours=1)
        JsonRecordStore(data).save(
            RecordSnapshot(pain_entries=(make_entry(recent, 5, notes="after gardening"),))
        )

        main(["--data", str(data), "--export", "--range", "7D"])

        out = capsys.readouterr().out
        assert "MyBackFit Pain History Export" in out
        assert "Filter: All - Last 7 Days" in out
        assert "Total Entries: 1" in out
        assert "Notes: after gardening" in out

    def test_corrupt_file_renders_empty_dashboard(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        data = tmp_path / "data.json"
        data.write_text("{oops", encoding="utf-8")

        main(["--data", str(data)])

        assert "No data yet" in capsys.readouterr().out
        assert list(tmp_path.glob("data.corrupt-*.json"))

    def test_seed_adds_exercises(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        data = tmp_path / "data.json"

        main(["--data", str(data), "--seed"])

        assert "Pelvic Tilts" in capsys.readouterr().out
        assert len(JsonRecordStore(data).snapshot().exercises) == 8

    @pytest.mark.parametrize("offset", ["-30000", "120000"])
    def test_month_offset_outside_calendar_is_a_usage_error(
        self,
        offset: str,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        data = tmp_path / "data.json"

        with pytest.raises(SystemExit) as exc_info:
            main(["--data", str(data), "--seed", "--month-offset", offset])

        assert exc_info.value.code == 2
        assert "--month-offset" in capsys.readouterr().err
        assert not data.exists()
