"""Tests for the command-line interface."""

from pathlib import Path

import pytest
import yaml

from candles.cli import build_parser, main


@pytest.fixture
def csv_file(tmp_path: Path) -> Path:
    """Write two readings per year for 1998 through 2001."""
    lines = ["utc_timestamp,AT_temperature,BE_temperature"]
    for year in range(1998, 2002):
        base = year - 1998
        lines.append(f"{year}-01-01T00:00:00Z,{base}.0,1.0")
        lines.append(f"{year}-07-01T00:00:00Z,{base + 10}.0,2.0")
    path = tmp_path / "weather.csv"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    """Without a subcommand the help text is shown."""
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out


def test_country_is_required() -> None:
    """Bar commands need a country prefix."""
    with pytest.raises(SystemExit):
        build_parser().parse_args(["bars", "weather.csv"])


class TestInfoCommand:
    """Tests for the info command."""

    def test_summarizes_dataset(
        self, csv_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Prefixes, date span and value range are printed."""
        assert main(["info", str(csv_file)]) == 0

        out = capsys.readouterr().out
        assert "- AT (Austria)" in out
        assert "- BE (Belgium)" in out
        assert "Start: 1998-01-01" in out
        assert "End:   2001-07-01" in out
        assert "Minimum: 0.0" in out
        assert "Maximum: 13.0" in out

    def test_missing_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A missing file is reported with a non-zero exit code."""
        assert main(["info", str(tmp_path / "missing.csv")]) == 1
        assert "Data source error" in capsys.readouterr().out


class TestBarsCommand:
    """Tests for the bars command."""

    def test_lists_yearly_bars(
        self, csv_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Each bar is printed with its four values."""
        assert main(["bars", str(csv_file), "-c", "AT"]) == 0

        out = capsys.readouterr().out
        assert "Computed 4 bars for AT_temperature by year:" in out
        assert "Date: 1998, Open: 0.0, High: 10.0, Low: 0.0, Close: 10.0" in out

    def test_month_granularity(
        self, csv_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Month granularity yields one bar per month with readings."""
        assert main(["bars", str(csv_file), "-c", "AT", "-g", "month"]) == 0
        assert "Date: 1998-07, Open: 10.0" in capsys.readouterr().out

    def test_unknown_country(
        self, csv_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A missing column is an error."""
        assert main(["bars", str(csv_file), "-c", "XX"]) == 1
        assert "Column not found: XX_temperature" in capsys.readouterr().out


class TestPlotCommand:
    """Tests for the plot command."""

    def test_plots_by_decade(
        self, csv_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Both decades of the data get a chart."""
        assert main(["plot", str(csv_file), "-c", "AT"]) == 0

        out = capsys.readouterr().out
        assert "Candlestick Data for 1990s:" in out
        assert "Candlestick Data for 2000s:" in out

    def test_filter_without_data(
        self, csv_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A filter that removes every bar is reported."""
        assert main(["plot", str(csv_file), "-c", "AT", "--start", "1950", "--end", "1960"]) == 1
        assert "No data available for the selected filter." in capsys.readouterr().out

    def test_unpaired_bounds(
        self, csv_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Value bounds must be given together."""
        assert main(["plot", str(csv_file), "-c", "AT", "--min", "1"]) == 1
        assert "--min and --max" in capsys.readouterr().out


class TestPredictCommand:
    """Tests for the predict command."""

    def test_prints_predictions(
        self, csv_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A linear fit extends the yearly midpoints."""
        args = [
            "predict", str(csv_file), "-c", "AT",
            "--start-year", "1998", "--end-year", "2001", "--degree", "1",
        ]

        assert main(args) == 0

        out = capsys.readouterr().out
        assert "Year: 1998, Avg: 5.00" in out
        assert "Year: 2002, Predicted: 9.00" in out
        assert "Year: 2004, Predicted: 11.00" in out

    @pytest.mark.parametrize("height", ["0", "-3"])
    def test_non_positive_height(
        self, csv_file: Path, capsys: pytest.CaptureFixture[str], height: str
    ) -> None:
        """A chart height below one is rejected before any output."""
        args = [
            "predict", str(csv_file), "-c", "AT",
            "--start-year", "1998", "--end-year", "2001", "--height", height,
        ]

        assert main(args) == 1

        out = capsys.readouterr().out
        assert "Error: --height must be positive" in out
        assert "Prediction Summary" not in out

    def test_empty_window(
        self, csv_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A window without data is an error."""
        args = ["predict", str(csv_file), "-c", "AT", "--start-year", "1950", "--end-year", "1960"]

        assert main(args) == 1
        assert "Error:" in capsys.readouterr().out


class TestRunCommand:
    """Tests for the run command."""

    def test_runs_configured_analysis(
        self, csv_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A config file drives aggregation, charts and forecast."""
        config_path = tmp_path / "analysis.yaml"
        config_path.write_text(
            yaml.safe_dump(
                {
                    "data": {"file_path": str(csv_file)},
                    "country": "AT",
                    "forecast": {"start_year": 1998, "end_year": 2001, "degree": 1},
                    "logging": {"level": "WARNING"},
                }
            ),
            encoding="utf-8",
        )

        assert main(["run", str(config_path)]) == 0

        out = capsys.readouterr().out
        assert "Bars:        4 (4 after filters)" in out
        assert "Candlestick Data for 1990s:" in out
        assert "Year: 2002, Predicted: 9.00" in out

    def test_invalid_config(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Configuration problems are reported without a traceback."""
        config_path = tmp_path / "analysis.yaml"
        config_path.write_text("country: AT\n", encoding="utf-8")

        assert main(["run", str(config_path)]) == 1
        assert "Configuration error: Missing required field: data" in capsys.readouterr().out
