"""Tests for monthly IRS withholding by bracket.

Expected values are worked by hand from the built-in 2026 tables:
withholding = (gross * rate - deduction - dependents * per_dependent) * regional multiplier
"""

import pytest

from salarycalc.sdk.taxes import DEFAULT_CONFIG, calc_irs_withholding, find_bracket, round_cents


def irs(gross, status="single", dependents=0, region="continente"):
    return calc_irs_withholding(gross, status, dependents, region, DEFAULT_CONFIG)


class TestRoundCents:
    """Half-up rounding to cents."""

    def test_half_rounds_up(self):
        assert round_cents(0.125) == 0.13
        assert round_cents(2.5) == 2.5

    def test_below_half_rounds_down(self):
        assert round_cents(0.004) == 0.0
        assert round_cents(10.1249) == 10.12


class TestFindBracket:
    """Bracket lookup by monthly gross."""

    def test_upper_bound_is_inclusive(self):
        brackets = DEFAULT_CONFIG.brackets_for("single")

        assert find_bracket(920, brackets).rate == 0
        assert find_bracket(920.01, brackets).rate == 0.45
        assert find_bracket(1042, brackets).rate == 0.45
        assert find_bracket(1042.01, brackets).rate == 0.36895

    def test_top_bracket_is_unbounded(self):
        bracket = find_bracket(1_000_000, DEFAULT_CONFIG.brackets_for("single"))
        assert bracket.rate == 0.4717

    def test_empty_table_returns_none(self):
        assert find_bracket(1000, ()) is None


class TestExemptThreshold:
    """Gross at or below the first bound pays nothing."""

    @pytest.mark.parametrize("gross", [0, 500, 919.99, 920])
    def test_single_exempt(self, gross):
        assert irs(gross) == 0

    def test_married_single_holder_threshold_is_higher(self):
        assert irs(991, "married_single_holder") == 0
        assert irs(980, "single") > 0

    def test_just_above_threshold_rounds_to_zero(self):
        # 920.01 * 0.45 - 414 = 0.0045
        assert irs(920.01) == 0


class TestBracketFormula:
    """Rate and deduction per bracket."""

    def test_transition_band(self):
        # 1000 * 0.45 - 414
        assert irs(1000) == pytest.approx(36.00)

    def test_boundary_uses_lower_bracket(self):
        # 1042 * 0.45 - 414 = 54.90 (next bracket would give 54.98)
        assert irs(1042) == pytest.approx(54.90)
        assert irs(1042.01) == pytest.approx(54.98)

    def test_1500_single(self):
        # 1500 * 0.241 - 193.33
        assert irs(1500) == pytest.approx(168.17)

    def test_2000_single(self):
        # 2000 * 0.311 - 320.66
        assert irs(2000) == pytest.approx(301.34)

    def test_2000_married_single_holder(self):
        # 2000 * 0.1938 - 213.53
        assert irs(2000, "married_single_holder") == pytest.approx(174.07)

    def test_married_two_holders_uses_single_table(self):
        assert irs(2000, "married_two_holders") == irs(2000, "single")

    def test_top_bracket(self):
        # 25000 * 0.4717 - 1272.31
        assert irs(25000) == pytest.approx(10520.19)


class TestDependents:
    """Per-dependent deduction by table."""

    @pytest.mark.parametrize("status,per_dependent", [
        ("single", 34.29),
        ("married_two_holders", 21.43),
        ("married_single_holder", 42.86),
    ])
    @pytest.mark.parametrize("dependents", [1, 2, 3])
    def test_delta_is_exact(self, status, per_dependent, dependents):
        without = irs(3000, status)
        with_deps = irs(3000, status, dependents)
        assert without - with_deps == pytest.approx(dependents * per_dependent, abs=0.01)

    def test_floored_at_zero(self):
        # 36.00 - 5 * 34.29 < 0
        assert irs(1000, dependents=5) == 0


class TestRegion:
    """Autonomous region multiplier."""

    @pytest.mark.parametrize("region", ["acores", "madeira"])
    def test_seventy_percent(self, region):
        assert irs(2000, region=region) == pytest.approx(irs(2000) * 0.70, abs=0.01)

    def test_2000_acores(self):
        # 301.34 * 0.7 = 210.938
        assert irs(2000, region="acores") == pytest.approx(210.94)


class TestWithinBracketMonotonicity:
    """Withholding and its rate rise with gross inside each bracket.

    Across the transition rows the Despacho values are not continuous, so
    the property is checked inside brackets only.
    """

    @pytest.mark.parametrize("low,high", [
        (930, 1040),
        (1250, 1800),
        (2150, 2450),
        (2600, 3300),
        (3400, 5500),
        (6000, 20000),
        (21000, 50000),
    ])
    def test_single(self, low, high):
        assert irs(high) > irs(low)
        assert irs(high) / high > irs(low) / low
