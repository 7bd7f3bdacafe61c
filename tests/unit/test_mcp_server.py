"""Tests for the MCP server tools (requires the mcp extra)."""

import asyncio

import pytest

pytest.importorskip("mcp")

from salarycalc.mcp.server import calculate_salary_tool, get_tax_tables, mcp  # noqa: E402


class TestToolRegistration:

    def test_tools_listed(self):
        tools = asyncio.run(mcp.list_tools())
        names = {tool.name for tool in tools}

        assert {"calculate_salary", "get_tax_tables"} <= names

    def test_calculate_salary_schema(self):
        tools = asyncio.run(mcp.list_tools())
        calculate = next(tool for tool in tools if tool.name == "calculate_salary")

        properties = calculate.inputSchema["properties"]
        assert "gross_monthly" in properties
        assert "employment_type" in properties
        assert "gross_monthly" in calculate.inputSchema.get("required", [])


def _calculate(**overrides):
    # Tool defaults are pydantic Field objects, so direct calls pass every argument.
    args = dict(
        gross_monthly=1500,
        employment_type="employed",
        dependents=0,
        marital_status="single",
        region="continente",
        has_disability=False,
        meal_allowance_per_day=0,
        meal_allowance_type="card",
        number_of_months=14,
        irs_jovem_year=None,
        other_taxable_income=0,
        activity_type="services",
        vat_regime="exempt_art53",
        fiscal_regime="simplified",
        monthly_expenses=0,
        self_employed_first_year=False,
        self_employed_exempt_retention=False,
        tables_file=None,
    )
    args.update(overrides)
    return asyncio.run(calculate_salary_tool(**args))


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("SALARY_CALC_CONFIG_PATH", str(tmp_path / "config"))
    monkeypatch.delenv("SALARY_CALC_TABLES", raising=False)


class TestCalculateSalaryTool:

    def test_builtin_tables(self):
        payload = _calculate()

        assert "error" not in payload
        assert payload["result"]["type"] == "employed"
        assert payload["result"]["ss_employee"] == pytest.approx(165.00)

    def test_missing_tables_file(self, tmp_path):
        payload = _calculate(tables_file=str(tmp_path / "missing.json"))

        assert payload["result"] is None
        assert "not found" in payload["error"]


class TestGetTaxTablesTool:

    def test_builtin_tables(self):
        payload = asyncio.run(get_tax_tables(tables_file=None))

        assert payload["source_file"] is None
        assert payload["tables"]["socialSecurity"]["employeeRate"] == pytest.approx(0.11)

    def test_missing_tables_file(self, tmp_path):
        payload = asyncio.run(get_tax_tables(tables_file=str(tmp_path / "missing.json")))

        assert payload["tables"] is None
        assert "not found" in payload["error"]
