"""Employed (conta de outrem) net salary calculation.

Monthly flow:
    taxable gross = salary + supplements + taxable meal excess
    SS            = taxable gross * employee rate
    IRS           = bracket withholding on taxable gross, less IRS Jovem relief
    net           = taxable gross - SS - IRS
    total net     = net + exempt meal allowance

Annualization: base salary over ``number_of_months`` installments (14 when
holiday and Christmas subsidies are paid separately), supplements over 12
months, meal allowance over the working months, SS and IRS over the salary
installments.
"""

import logging
from typing import Tuple

from .schemas import EmployedResult, SalaryInput
from .taxes.schemas import MealAllowanceRules, TaxConfiguration
from .taxes.withholding import calc_irs_withholding, round_cents, safe_ratio

logger = logging.getLogger(__name__)


def split_meal_allowance(
    per_day: float,
    meal_type: str,
    rules: MealAllowanceRules,
) -> Tuple[float, float, float]:
    """Split a daily meal allowance into monthly total, exempt and taxable parts.

    The exempt part is capped at the ceiling for the delivery method (card
    ceiling is higher than cash). The taxable part is the remainder, so
    ``exempt + taxable == total`` always holds.

    Returns:
        Tuple of (total_monthly, exempt_monthly, taxable_monthly)
    """
    days = rules.working_days_per_month
    limit = rules.exempt_limit(meal_type)

    total = round_cents(per_day * days)
    exempt = round_cents(min(per_day, limit) * days)
    taxable = round_cents(total - exempt)
    return total, exempt, taxable


def calc_employed(salary_input: SalaryInput, config: TaxConfiguration) -> EmployedResult:
    """Calculate the employed breakdown.

    Args:
        salary_input: Normalized input (amounts already clamped to >= 0)
        config: Resolved tax configuration

    Returns:
        EmployedResult with monthly, annual, employer-cost and rate figures
    """
    gross = salary_input.gross_monthly
    other_taxable = max(0.0, salary_input.other_taxable_income)
    months = salary_input.number_of_months
    meal_months = config.meal.working_months_for_meal

    total_gross_monthly = round_cents(gross + other_taxable)

    meal_monthly, meal_exempt_monthly, meal_taxable_monthly = split_meal_allowance(
        salary_input.meal_allowance_per_day,
        salary_input.meal_allowance_type,
        config.meal,
    )

    # Taxable meal excess is salary-equivalent for SS and IRS
    taxable_gross_monthly = round_cents(total_gross_monthly + meal_taxable_monthly)

    ss_employee = round_cents(taxable_gross_monthly * config.ss.employee_rate)
    irs_withholding = calc_irs_withholding(
        taxable_gross_monthly,
        salary_input.marital_status,
        salary_input.dependents,
        salary_input.region,
        config,
    )

    irs_jovem_discount = 0.0
    if salary_input.irs_jovem:
        share = config.irs_jovem_share(salary_input.irs_jovem_year)
        if share is not None:
            irs_jovem_discount = round_cents(irs_withholding * share)
            irs_withholding = round_cents(irs_withholding - irs_jovem_discount)

    net_monthly = round_cents(taxable_gross_monthly - ss_employee - irs_withholding)
    total_net_monthly = round_cents(net_monthly + meal_exempt_monthly)

    # Annual
    gross_annual = round_cents(gross * months + other_taxable * 12)
    meal_annual = round_cents(meal_monthly * meal_months)
    meal_exempt_annual = round_cents(meal_exempt_monthly * meal_months)
    meal_taxable_annual = round_cents(meal_taxable_monthly * meal_months)
    taxable_gross_annual = round_cents(gross_annual + meal_taxable_annual)
    ss_annual = round_cents(ss_employee * months)
    irs_annual = round_cents(irs_withholding * months)
    net_annual = round_cents(taxable_gross_annual - ss_annual - irs_annual)
    total_net_annual = round_cents(net_annual + meal_exempt_annual)

    # Employer costs
    ss_employer = round_cents(taxable_gross_monthly * config.ss.employer_rate)
    ss_employer_annual = round_cents(ss_employer * months)
    total_employer_cost_annual = round_cents(gross_annual + meal_annual + ss_employer_annual)

    logger.debug(
        f"Employed: taxable={taxable_gross_monthly:.2f} ss={ss_employee:.2f} "
        f"irs={irs_withholding:.2f} jovem={irs_jovem_discount:.2f} net={net_monthly:.2f}"
    )

    return EmployedResult(
        gross_monthly=gross,
        other_taxable_income=other_taxable,
        total_gross_monthly=total_gross_monthly,
        taxable_gross_monthly=taxable_gross_monthly,
        ss_employee=ss_employee,
        irs_withholding=irs_withholding,
        irs_jovem_discount=irs_jovem_discount,
        net_monthly=net_monthly,
        meal_allowance_monthly=meal_monthly,
        meal_exempt_monthly=meal_exempt_monthly,
        meal_taxable_monthly=meal_taxable_monthly,
        total_net_monthly=total_net_monthly,
        number_of_months=months,
        gross_annual=gross_annual,
        taxable_gross_annual=taxable_gross_annual,
        ss_annual_employee=ss_annual,
        irs_annual=irs_annual,
        net_annual=net_annual,
        meal_allowance_annual=meal_annual,
        meal_exempt_annual=meal_exempt_annual,
        meal_taxable_annual=meal_taxable_annual,
        total_net_annual=total_net_annual,
        ss_employer=ss_employer,
        ss_employer_annual=ss_employer_annual,
        total_employer_cost_annual=total_employer_cost_annual,
        effective_irs_rate=safe_ratio(irs_annual, taxable_gross_annual),
        effective_total_rate=safe_ratio(irs_annual + ss_annual, taxable_gross_annual),
        ss_rate=config.ss.employee_rate,
        irs_rate=safe_ratio(irs_withholding, taxable_gross_monthly),
    )
