"""Tests for the self-employed (recibos verdes) engine.

Worked example for 2000/month, services, simplified regime, VAT exempt:
    IRS at source = 2000 * 0.23          = 460.00
    SS base       = 2000 * 0.70          = 1400.00
    SS            = 1400 * 0.214         = 299.60
    net           = 2000 - 460 - 299.60  = 1240.40
"""

import pytest

from salarycalc.sdk import DEFAULT_CONFIG, SalaryInput, calc_self_employed


MONETARY_FIELDS = [
    "gross_monthly", "irs_withholding", "ss_contribution", "ss_base", "vat_collected",
    "net_monthly", "total_net_monthly", "gross_annual", "irs_annual", "ss_annual",
    "vat_annual", "taxable_income", "net_annual", "total_net_annual",
    "monthly_expenses", "annual_expenses", "equivalent_gross_employed",
]


def self_employed(**kwargs):
    kwargs.setdefault("employment_type", "self_employed")
    return calc_self_employed(SalaryInput(**kwargs), DEFAULT_CONFIG)


class TestServices:

    def test_monthly(self):
        result = self_employed(gross_monthly=2000)

        assert result.type == "self_employed"
        assert result.irs_withholding_rate == 0.23
        assert result.irs_withholding == pytest.approx(460.00)
        assert result.ss_base == pytest.approx(1400.00)
        assert result.ss_rate == 0.214
        assert result.ss_contribution == pytest.approx(299.60)
        assert result.net_monthly == pytest.approx(1240.40)
        assert result.total_net_monthly == result.net_monthly

    def test_annual_over_twelve_months(self):
        result = self_employed(gross_monthly=2000)

        assert result.gross_annual == pytest.approx(24000.00)
        assert result.irs_annual == pytest.approx(5520.00)
        assert result.ss_annual == pytest.approx(3595.20)
        assert result.net_annual == pytest.approx(14884.80)
        assert result.total_net_annual == result.net_annual

    def test_simplified_taxable_income(self):
        result = self_employed(gross_monthly=2000)

        assert result.coefficient == 0.75
        assert result.taxable_income == pytest.approx(18000.00)

    def test_effective_rates(self):
        result = self_employed(gross_monthly=2000)

        assert result.effective_irs_rate == pytest.approx(0.23)
        assert result.effective_total_rate == pytest.approx((5520 + 3595.20) / 24000)


class TestSales:

    def test_no_withholding_and_lower_ss_base(self):
        result = self_employed(gross_monthly=2000, activity_type="sales")

        assert result.irs_withholding == 0
        assert result.ss_base == pytest.approx(400.00)
        assert result.ss_contribution == pytest.approx(85.60)
        assert result.net_monthly == pytest.approx(1914.40)

    def test_coefficient(self):
        result = self_employed(gross_monthly=2000, activity_type="sales")

        assert result.coefficient == 0.15
        assert result.taxable_income == pytest.approx(3600.00)


class TestOrganizedAccounting:

    def test_taxable_income_is_gross_minus_expenses(self):
        result = self_employed(gross_monthly=2000, fiscal_regime="organized", monthly_expenses=500)

        assert result.coefficient == 1.0
        assert result.annual_expenses == pytest.approx(6000.00)
        assert result.taxable_income == pytest.approx(18000.00)

    def test_expenses_above_gross_floor_at_zero(self):
        result = self_employed(gross_monthly=1000, fiscal_regime="organized", monthly_expenses=1500)
        assert result.taxable_income == 0

    def test_expenses_do_not_change_net(self):
        simplified = self_employed(gross_monthly=2000)
        organized = self_employed(gross_monthly=2000, fiscal_regime="organized", monthly_expenses=500)
        assert organized.net_monthly == simplified.net_monthly


class TestVat:

    def test_exempt_by_default(self):
        result = self_employed(gross_monthly=2000)

        assert result.vat_rate == 0
        assert result.vat_collected == 0
        assert result.vat_annual == 0

    def test_normal_regime_collects_on_top(self):
        result = self_employed(gross_monthly=2000, vat_regime="normal")

        assert result.vat_rate == 0.23
        assert result.vat_collected == pytest.approx(460.00)
        assert result.vat_annual == pytest.approx(5520.00)
        assert result.net_monthly == pytest.approx(1240.40)

    def test_threshold_flag(self):
        assert self_employed(gross_monthly=1250).vat_threshold_exceeded is False
        assert self_employed(gross_monthly=1250.01).vat_threshold_exceeded is True


class TestFlags:

    def test_first_year_zeroes_ss(self):
        result = self_employed(gross_monthly=2000, self_employed_first_year=True)

        assert result.ss_contribution == 0
        assert result.ss_annual == 0
        assert result.irs_withholding == pytest.approx(460.00)
        assert result.net_monthly == pytest.approx(1540.00)

    def test_exempt_retention_zeroes_irs(self):
        result = self_employed(gross_monthly=2000, self_employed_exempt_retention=True)

        assert result.irs_withholding == 0
        assert result.irs_withholding_rate == 0
        assert result.ss_contribution == pytest.approx(299.60)

    def test_both_flags(self):
        result = self_employed(
            gross_monthly=2000,
            self_employed_first_year=True,
            self_employed_exempt_retention=True,
        )
        assert result.net_monthly == pytest.approx(2000.00)


class TestRegion:

    @pytest.mark.parametrize("region", ["acores", "madeira"])
    def test_multiplier_applies_to_irs_only(self, region):
        result = self_employed(gross_monthly=2000, region=region)

        assert result.irs_withholding == pytest.approx(322.00)
        assert result.ss_contribution == pytest.approx(299.60)


class TestZeroGross:

    def test_all_amounts_zero(self):
        result = self_employed(gross_monthly=0)

        for name in MONETARY_FIELDS:
            assert getattr(result, name) == 0, name
        assert result.effective_irs_rate == 0
        assert result.effective_total_rate == 0
        assert result.vat_threshold_exceeded is False


class TestEquivalentEmployedGross:

    def test_reported(self):
        result = self_employed(gross_monthly=2000)

        # Employed gross over 14 months needed for 14884.80/yr
        assert 1000 < result.equivalent_gross_employed < 1500

    def test_higher_income_needs_higher_equivalent(self):
        low = self_employed(gross_monthly=2000).equivalent_gross_employed
        high = self_employed(gross_monthly=4000).equivalent_gross_employed
        assert high > low


class TestInvariants:

    @pytest.mark.parametrize("gross", [0, 500, 1000, 2000, 5000, 30000])
    @pytest.mark.parametrize("activity", ["services", "sales"])
    def test_net_not_above_gross_and_amounts_non_negative(self, gross, activity):
        result = self_employed(gross_monthly=gross, activity_type=activity, vat_regime="normal")

        assert result.net_monthly <= result.gross_monthly
        assert result.net_annual <= result.gross_annual
        for name in MONETARY_FIELDS:
            assert getattr(result, name) >= 0, name
