"""Monthly IRS withholding (retencao na fonte) for employment income.

Implements the Despacho bracket method: pick the bracket containing the
monthly gross, apply ``gross * rate - deduction``, subtract the
per-dependent amount for the table, then apply the regional multiplier.
"""

import logging
import math
from typing import Optional, Sequence

from .schemas import MaritalStatus, Region, TaxBracket, TaxConfiguration

logger = logging.getLogger(__name__)


def round_cents(amount: float) -> float:
    """Round to 2 decimal places, halves rounding up.

    Example: 288.675 -> 288.68, 0.004 -> 0.0
    """
    return math.floor(amount * 100 + 0.5) / 100


def safe_ratio(numerator: float, denominator: float) -> float:
    """Return numerator / denominator, or 0 when the denominator is not positive."""
    return numerator / denominator if denominator > 0 else 0.0


def find_bracket(gross_monthly: float, brackets: Sequence[TaxBracket]) -> Optional[TaxBracket]:
    """Find the bracket for a monthly gross amount.

    Upper bounds are inclusive: a gross exactly equal to ``up_to`` belongs
    to that bracket, not the next one.
    """
    for bracket in brackets:
        if gross_monthly <= bracket.up_to:
            return bracket
    return None


def calc_irs_withholding(
    gross_monthly: float,
    marital_status: MaritalStatus,
    dependents: int,
    region: Region,
    config: TaxConfiguration,
) -> float:
    """Calculate monthly IRS withholding before IRS Jovem relief.

    Args:
        gross_monthly: Taxable monthly gross (salary + supplements + taxable meal excess)
        marital_status: Selects the bracket table and per-dependent amount
        dependents: Number of dependents
        region: Selects the regional multiplier
        config: Resolved tax configuration

    Returns:
        Withholding amount, rounded to cents and never negative
    """
    bracket = find_bracket(gross_monthly, config.brackets_for(marital_status))
    if bracket is None or bracket.rate == 0:
        return 0.0

    withholding = gross_monthly * bracket.rate - bracket.deduction
    withholding -= dependents * config.dependent_deduction(marital_status)
    withholding *= config.regional_multiplier(region)

    logger.debug(
        f"IRS: gross={gross_monthly:.2f} bracket<={bracket.up_to} rate={bracket.rate} "
        f"deduction={bracket.deduction} -> {withholding:.4f}"
    )

    return max(0.0, round_cents(withholding))
