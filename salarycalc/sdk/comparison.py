"""Employed vs self-employed comparison for the same gross."""

import logging

from .employed import calc_employed
from .schemas import BetterOption, ComparisonDifference, ComparisonResult, SalaryInput
from .self_employed import calc_self_employed
from .taxes.schemas import TaxConfiguration
from .taxes.withholding import round_cents

logger = logging.getLogger(__name__)

# Annual net differences within this amount are reported as "equal"
BETTER_OPTION_THRESHOLD = 10.0


def classify_better_option(annual_difference: float, threshold: float = BETTER_OPTION_THRESHOLD) -> BetterOption:
    """Verdict for an employed-minus-self-employed annual net difference."""
    if annual_difference > threshold:
        return "employed"
    if annual_difference < -threshold:
        return "self_employed"
    return "equal"


def calc_comparison(salary_input: SalaryInput, config: TaxConfiguration) -> ComparisonResult:
    """Run both engines on the same input and compare total net income."""
    employed = calc_employed(salary_input.model_copy(update={"employment_type": "employed"}), config)
    self_employed = calc_self_employed(
        salary_input.model_copy(update={"employment_type": "self_employed"}), config
    )

    monthly_diff = round_cents(employed.total_net_monthly - self_employed.total_net_monthly)
    annual_diff = round_cents(employed.total_net_annual - self_employed.total_net_annual)
    better_option = classify_better_option(annual_diff)

    logger.debug(f"Comparison: annual diff {annual_diff:.2f} -> {better_option}")

    return ComparisonResult(
        employed=employed,
        self_employed=self_employed,
        difference=ComparisonDifference(
            monthly_net=monthly_diff,
            annual_net=annual_diff,
            better_option=better_option,
        ),
    )
