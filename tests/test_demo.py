"""Tests for the monitoring demo."""

from pathlib import Path

import matplotlib
import pytest

from h2telemetry.demo import DemoConfig, main, run_monitoring_demo

matplotlib.use("Agg")


@pytest.fixture
def short_config() -> DemoConfig:
    return DemoConfig(hours=6, prewarm_hours=12, emergency_facility_id=2, seed=42)


class TestRunMonitoringDemo:
    def test_results(self, short_config: DemoConfig) -> None:
        results = run_monitoring_demo(short_config)

        assert results.passes == 6
        assert results.summary.total_facilities == 5
        assert [c.rank for c in results.comparison] == [1, 2, 3, 4, 5]
        assert any(a.facility_id == 2 for a in results.alerts)
        assert all(len(points) == 18 for points in results.trends.values())

    def test_without_emergency(self) -> None:
        results = run_monitoring_demo(
            DemoConfig(hours=2, prewarm_hours=0, emergency_facility_id=None)
        )

        assert results.passes == 2
        assert all(len(points) == 2 for points in results.trends.values())

    def test_print_summary(
        self, short_config: DemoConfig, capsys: pytest.CaptureFixture[str]
    ) -> None:
        run_monitoring_demo(short_config).print_summary()

        out = capsys.readouterr().out
        assert "HYDROGEN FACILITY TELEMETRY SUMMARY" in out
        assert "Ranking" in out


class TestMain:
    def test_cli_writes_dashboard(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setattr(
            "sys.argv",
            ["h2telemetry-demo", "--hours", "3", "--output", str(tmp_path)],
        )

        main()

        assert (tmp_path / "dashboard.png").exists()
        assert "Dashboard saved" in capsys.readouterr().out
