"""Self-employed (trabalhador independente) income calculation.

Withholding at source depends on the activity (services vs sales) and is
the only figure the regional multiplier touches. SS is charged on a share
of income (the relevant base) and waived in the first year of activity.
VAT is collected on top of the gross under the normal regime. Annual figures
are 12x monthly.
"""

import logging

from .equivalence import find_equivalent_employed_gross
from .schemas import SalaryInput, SelfEmployedResult
from .taxes.schemas import TaxConfiguration
from .taxes.withholding import round_cents, safe_ratio

logger = logging.getLogger(__name__)


def calc_self_employed(salary_input: SalaryInput, config: TaxConfiguration) -> SelfEmployedResult:
    """Calculate the self-employed breakdown.

    Args:
        salary_input: Normalized input (amounts already clamped to >= 0)
        config: Resolved tax configuration

    Returns:
        SelfEmployedResult including the employed-equivalent gross
    """
    gross = salary_input.gross_monthly
    activity = salary_input.activity_type
    gross_annual = round_cents(gross * 12)

    # Withholding at source (Art. 101 CIRS)
    irs_withholding_rate = config.irs_retention.for_activity(activity)
    if salary_input.self_employed_exempt_retention:
        irs_withholding_rate = 0.0
    irs_before_region = round_cents(gross * irs_withholding_rate)
    irs_withholding = round_cents(irs_before_region * config.regional_multiplier(salary_input.region))
    irs_annual = round_cents(irs_withholding * 12)

    # Social Security on the relevant income base
    ss_base = round_cents(gross * config.ss.self_employed_base(activity))
    ss_rate = config.ss.self_employed_rate
    ss_contribution = 0.0 if salary_input.self_employed_first_year else round_cents(ss_base * ss_rate)
    ss_annual = round_cents(ss_contribution * 12)

    # VAT
    vat_rate = 0.0
    vat_collected = 0.0
    vat_annual = 0.0
    if salary_input.vat_regime == "normal":
        vat_rate = config.vat.standard_rate
        vat_collected = round_cents(gross * vat_rate)
        vat_annual = round_cents(vat_collected * 12)

    # Taxable income
    annual_expenses = round_cents(salary_input.monthly_expenses * 12)
    if salary_input.fiscal_regime == "simplified":
        coefficient = config.coefficients.for_activity(activity)
        taxable_income = round_cents(gross_annual * coefficient)
    else:
        coefficient = 1.0
        taxable_income = round_cents(max(0.0, gross_annual - annual_expenses))

    net_monthly = round_cents(gross - irs_withholding - ss_contribution)
    net_annual = round_cents(gross_annual - irs_annual - ss_annual)

    equivalent = find_equivalent_employed_gross(
        net_annual,
        salary_input.dependents,
        salary_input.marital_status,
        salary_input.region,
        config,
    )

    logger.debug(
        f"Self-employed: gross={gross:.2f} irs={irs_withholding:.2f} ss={ss_contribution:.2f} "
        f"net={net_monthly:.2f} equivalent={equivalent:.2f}"
    )

    return SelfEmployedResult(
        gross_monthly=gross,
        irs_withholding=irs_withholding,
        irs_withholding_rate=irs_withholding_rate,
        ss_contribution=ss_contribution,
        ss_base=ss_base,
        ss_rate=ss_rate,
        vat_collected=vat_collected,
        vat_rate=vat_rate,
        net_monthly=net_monthly,
        total_net_monthly=net_monthly,
        gross_annual=gross_annual,
        irs_annual=irs_annual,
        ss_annual=ss_annual,
        vat_annual=vat_annual,
        taxable_income=taxable_income,
        coefficient=coefficient,
        net_annual=net_annual,
        total_net_annual=net_annual,
        vat_threshold_exceeded=gross_annual > config.vat.exempt_threshold,
        monthly_expenses=salary_input.monthly_expenses,
        annual_expenses=annual_expenses,
        equivalent_gross_employed=equivalent,
        effective_irs_rate=safe_ratio(irs_annual, gross_annual),
        effective_total_rate=safe_ratio(irs_annual + ss_annual, gross_annual),
    )
