"""Employed-equivalent gross for a self-employed net income.

Answers "what employed monthly gross gives the same annual net?" by
bisection over a monotone gross -> annual net function. The solver takes the
evaluator as an argument so it can be exercised with any monotone function.
"""

import logging
from typing import Callable

from .taxes.schemas import MaritalStatus, Region, TaxConfiguration
from .taxes.withholding import calc_irs_withholding, round_cents

logger = logging.getLogger(__name__)

EQUIVALENCE_ITERATIONS = 50
EQUIVALENCE_RANGE_FACTOR = 2.5
STATUTORY_INSTALLMENTS = 14


def bisect_monotone(
    evaluate: Callable[[float], float],
    target: float,
    low: float,
    high: float,
    iterations: int = EQUIVALENCE_ITERATIONS,
) -> float:
    """Find x in [low, high] where a non-decreasing ``evaluate(x)`` reaches ``target``.

    Runs a fixed number of halvings; no convergence check. If ``evaluate``
    is not monotone the result is some crossing point, not necessarily the
    lowest one.

    Returns:
        Midpoint of the final interval (unrounded)
    """
    for _ in range(iterations):
        mid = (low + high) / 2
        if evaluate(mid) < target:
            low = mid
        else:
            high = mid
    return (low + high) / 2


def employed_annual_net_evaluator(
    dependents: int,
    marital_status: MaritalStatus,
    region: Region,
    config: TaxConfiguration,
    installments: int = STATUTORY_INSTALLMENTS,
) -> Callable[[float], float]:
    """Build ``gross_monthly -> annual net`` for a plain employed salary.

    No meal allowance, supplements or IRS Jovem relief; SS at the employee
    rate and bracket withholding, paid over ``installments``.
    """
    employee_rate = config.ss.employee_rate

    def annual_net(gross_monthly: float) -> float:
        ss = gross_monthly * employee_rate
        irs = calc_irs_withholding(gross_monthly, marital_status, dependents, region, config)
        return (gross_monthly - ss - irs) * installments

    return annual_net


def find_equivalent_employed_gross(
    target_annual_net: float,
    dependents: int,
    marital_status: MaritalStatus,
    region: Region,
    config: TaxConfiguration,
) -> float:
    """Employed monthly gross (14 installments) whose annual net matches the target.

    Searches [0, 2.5 * target_annual_net]; a zero target yields 0.
    """
    evaluate = employed_annual_net_evaluator(dependents, marital_status, region, config)
    high = max(0.0, target_annual_net * EQUIVALENCE_RANGE_FACTOR)
    gross = round_cents(bisect_monotone(evaluate, target_annual_net, 0.0, high))

    logger.debug(f"Equivalent employed gross for net {target_annual_net:.2f}/yr: {gross:.2f}/mo")
    return gross
