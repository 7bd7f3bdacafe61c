"""Tests for the salary-calc CLI.

Uses isolated directories via tmp_path and SALARY_CALC_CONFIG_PATH
to avoid touching real settings.
"""

import json

import pytest
from click.testing import CliRunner

from salarycalc import __version__
from salarycalc.cli.__main__ import cli
from salarycalc.sdk import DEFAULT_CONFIG, config_to_published


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Isolated config directory, no tables override."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("SALARY_CALC_CONFIG_PATH", str(config_dir))
    monkeypatch.delenv("SALARY_CALC_TABLES", raising=False)
    return {"config_dir": config_dir, "tmp_path": tmp_path}


@pytest.fixture
def tables_file(tmp_path):
    published = config_to_published(DEFAULT_CONFIG)
    published["version"] = "2026.9-test"
    published["socialSecurity"]["employeeRate"] = 0.12
    path = tmp_path / "tables.json"
    path.write_text(json.dumps(published))
    return path


def invoke(args):
    return CliRunner().invoke(cli, args)


class TestVersion:

    def test_version(self, isolated_env):
        result = invoke(["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestEmployedCommand:

    def test_json(self, isolated_env):
        result = invoke(["employed", "1500", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["type"] == "employed"
        assert data["ss_employee"] == pytest.approx(165.00)
        assert data["irs_withholding"] == pytest.approx(168.17)

    def test_options(self, isolated_env):
        result = invoke([
            "employed", "2000", "--json",
            "-d", "2", "-m", "married_single_holder", "-r", "madeira",
            "--meal-per-day", "8", "--meal-type", "cash",
            "--months", "12", "--irs-jovem-year", "3", "--other-income", "100",
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["number_of_months"] == 12
        assert data["other_taxable_income"] == 100
        assert data["meal_exempt_monthly"] == pytest.approx(135.30)
        assert data["irs_jovem_discount"] > 0

    def test_text_report(self, isolated_env):
        result = invoke(["employed", "1500"])

        assert result.exit_code == 0, result.output
        assert "TOTAL NET" in result.output
        assert "1,166.83" in result.output
        assert "2026.1" in result.output

    def test_default_output_format_setting(self, isolated_env):
        (isolated_env["config_dir"] / "settings.json").write_text(
            json.dumps({"default_output_format": "json"})
        )
        result = invoke(["employed", "1500"])

        assert result.exit_code == 0
        assert json.loads(result.output)["type"] == "employed"

    def test_tables_option(self, isolated_env, tables_file):
        result = invoke(["employed", "1500", "--json", "--tables", str(tables_file)])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["ss_employee"] == pytest.approx(180.00)

    def test_missing_tables_file(self, isolated_env):
        result = invoke(["employed", "1500", "--tables", str(isolated_env["tmp_path"] / "nope.json")])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_marital_status(self, isolated_env):
        result = invoke(["employed", "1500", "-m", "divorced"])
        assert result.exit_code == 2


class TestSelfEmployedCommand:

    def test_json(self, isolated_env):
        result = invoke(["self-employed", "2000", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["type"] == "self_employed"
        assert data["net_monthly"] == pytest.approx(1240.40)
        assert data["equivalent_gross_employed"] > 0

    def test_flags(self, isolated_env):
        result = invoke([
            "self-employed", "2000", "--json",
            "--activity", "services", "--vat", "normal", "--first-year", "--exempt-retention",
        ])

        data = json.loads(result.output)
        assert data["ss_contribution"] == 0
        assert data["irs_withholding"] == 0
        assert data["vat_collected"] == pytest.approx(460.00)

    def test_organized(self, isolated_env):
        result = invoke(["self-employed", "2000", "--json", "--fiscal-regime", "organized", "--expenses", "500"])

        assert json.loads(result.output)["taxable_income"] == pytest.approx(18000.00)

    def test_text_report(self, isolated_env):
        result = invoke(["self-employed", "2000"])

        assert result.exit_code == 0, result.output
        assert "NET" in result.output
        assert "Equivalent employed gross" in result.output


class TestCompareCommand:

    def test_json(self, isolated_env):
        result = invoke(["compare", "2000", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["type"] == "comparison"
        assert data["difference"]["better_option"] == "employed"

    def test_text_report(self, isolated_env):
        result = invoke(["compare", "2000"])

        assert result.exit_code == 0, result.output
        assert "Better option" in result.output


class TestTablesCommands:

    def test_show_json_is_published_format(self, isolated_env):
        result = invoke(["tables", "show", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["version"] == "2026.1"
        assert data["irsBrackets"]["marriedTwoHolders"] == "single"

    def test_show_uses_configured_file(self, isolated_env, tables_file):
        (isolated_env["config_dir"] / "settings.json").write_text(
            json.dumps({"tables_file": str(tables_file)})
        )
        result = invoke(["tables", "show", "--json"])

        assert json.loads(result.output)["version"] == "2026.9-test"

    def test_show_text(self, isolated_env):
        result = invoke(["tables", "show"])

        assert result.exit_code == 0, result.output
        assert "2026.1" in result.output
        assert "built-in" in result.output

    def test_validate_ok(self, isolated_env, tables_file):
        result = invoke(["tables", "validate", str(tables_file)])

        assert result.exit_code == 0
        assert "OK" in result.output

    def test_validate_errors(self, isolated_env, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"version": "x", "year": 2026}))
        result = invoke(["tables", "validate", str(bad)])

        assert result.exit_code == 1
        assert "error(s)" in result.output


class TestSettingsCommands:

    def test_show_empty(self, isolated_env):
        result = invoke(["settings", "show"])

        assert result.exit_code == 0
        assert "No settings configured" in result.output

    def test_tables_file_set_show_clear(self, isolated_env, tables_file):
        result = invoke(["settings", "tables-file", str(tables_file)])
        assert result.exit_code == 0, result.output

        settings = json.loads((isolated_env["config_dir"] / "settings.json").read_text())
        assert settings["tables_file"] == str(tables_file.resolve())

        result = invoke(["settings", "tables-file"])
        assert str(tables_file.resolve()) in result.output

        result = invoke(["settings", "tables-file", "--clear"])
        assert "Cleared" in result.output
        settings = json.loads((isolated_env["config_dir"] / "settings.json").read_text())
        assert "tables_file" not in settings

    def test_tables_file_missing(self, isolated_env):
        result = invoke(["settings", "tables-file", str(isolated_env["tmp_path"] / "nope.json")])
        assert result.exit_code == 1

    def test_output_format(self, isolated_env):
        result = invoke(["settings", "output-format", "json"])

        assert result.exit_code == 0
        settings = json.loads((isolated_env["config_dir"] / "settings.json").read_text())
        assert settings["default_output_format"] == "json"


class TestBrokenSettings:

    def test_calculation_reports_corrupt_settings(self, isolated_env):
        (isolated_env["config_dir"] / "settings.json").write_text("{oops")
        result = invoke(["employed", "1500"])

        assert result.exit_code == 1
        assert "not valid JSON" in result.output
