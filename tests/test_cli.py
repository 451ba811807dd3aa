"""
Tests for the simulate.py command-line runner.

Verifies exit codes (0 ok, 1 export failure, 2 configuration error) and
that CSV/PNG outputs are written.
"""

import pytest

from simulate import main


class TestListAndSystem:
    """Read-only commands."""

    def test_list(self, capsys):
        assert main(["list"]) == 0
        out = capsys.readouterr().out
        assert "Registered physics terms: 61" in out

    def test_list_category(self, capsys):
        assert main(["list", "--category", "muge_compressed"]) == 0
        assert "MUGECompressedBase" in capsys.readouterr().out

    def test_list_unknown_category(self):
        assert main(["list", "--category", "nope"]) == 2

    def test_system_listing(self, capsys):
        assert main(["system"]) == 0
        assert "SGR1745" in capsys.readouterr().out

    def test_system_detail(self, capsys):
        assert main(["system", "M82"]) == 0
        assert "GALAXY" in capsys.readouterr().out

    def test_unknown_system(self):
        assert main(["system", "NOPE"]) == 2

    def test_command_required(self):
        with pytest.raises(SystemExit):
            main([])


class TestTimeSeriesCommand:
    """timeseries subcommand."""

    def test_csv_export(self, tmp_path, capsys):
        path = tmp_path / "ts.csv"
        code = main(["timeseries", "--t-start", "0", "--t-end", "100", "--dt", "50",
                     "--terms", "MUGECompressedBase", "--csv", str(path)])
        assert code == 0
        lines = path.read_text().splitlines()
        assert lines[0] == "t,total_gravity,total_resonance,MUGECompressedBase"
        assert len(lines) == 4
        assert "3 rounds (time_series)" in capsys.readouterr().out

    def test_plot_export(self, tmp_path):
        path = tmp_path / "ts.png"
        code = main(["timeseries", "--t-end", "2", "--dt", "1",
                     "--terms", "MUGECompressedBase,MUGEEnvelope", "--plot", str(path)])
        assert code == 0
        assert path.exists()

    def test_zero_dt(self):
        assert main(["timeseries", "--dt", "0"]) == 2

    def test_range_too_large_for_dt(self, capsys):
        assert main(["timeseries", "--t-end", "1e300", "--dt", "1e-300"]) == 2
        assert "too large" in capsys.readouterr().out

    def test_too_many_steps(self, capsys):
        assert main(["timeseries", "--t-end", "1e6", "--dt", "1"]) == 2
        assert "Too many steps" in capsys.readouterr().out

    def test_bad_override(self):
        assert main(["timeseries", "--t-end", "1", "--dt", "1", "--set", "novalue"]) == 2

    def test_unknown_system(self):
        assert main(["timeseries", "--t-end", "1", "--dt", "1", "--system", "NOPE"]) == 2

    def test_export_failure(self, tmp_path):
        path = tmp_path / "missing" / "ts.csv"
        code = main(["timeseries", "--t-end", "1", "--dt", "1",
                     "--terms", "MUGEEnvelope", "--csv", str(path)])
        assert code == 1


class TestSweepCommand:
    """sweep subcommand."""

    def test_sweep_csv(self, tmp_path):
        path = tmp_path / "sweep.csv"
        code = main(["sweep", "--param", "B", "--min", "1e13", "--max", "1e16",
                     "--steps", "4", "--terms", "MUGEEnvelope", "--system", "SGR1745",
                     "--set", "fTRZ=0.2", "--csv", str(path)])
        assert code == 0
        lines = path.read_text().splitlines()
        assert lines[0] == "B,total_gravity,total_resonance"
        assert lines[1].startswith("1.000000e+13,")
        assert lines[-1].startswith("1.000000e+16,")

    def test_too_many_steps(self):
        assert main(["sweep", "--param", "B", "--min", "0", "--max", "1",
                     "--steps", "200000"]) == 2

    def test_single_step_rejected(self):
        assert main(["sweep", "--param", "B", "--min", "0", "--max", "1",
                     "--steps", "1"]) == 2


class TestVerifyCommand:
    """verify subcommand without a symbolic engine."""

    def test_missing_engine(self, capsys):
        assert main(["verify", "--executable", "no-such-engine-uqff"]) == 0
        assert "status=unavailable" in capsys.readouterr().out
