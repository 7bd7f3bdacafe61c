"""Resolve the tax configuration used by a calculation.

resolve_config() never raises and performs no I/O. Given nothing it returns
the built-in tables; given a published tables mapping it validates and
converts it; given anything malformed it logs a warning and falls back to
the built-in tables.
"""

import logging
import math
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from .defaults import DEFAULT_CONFIG, REGIONAL_IRS_MULTIPLIER
from .schemas import (
    ActivityRates,
    MealAllowanceRules,
    PublishedBracket,
    PublishedTaxTables,
    REGIONS,
    SocialSecurityRates,
    TaxBracket,
    TaxConfiguration,
    VatRules,
)

logger = logging.getLogger(__name__)

ExternalTables = Union[TaxConfiguration, PublishedTaxTables, Dict[str, Any]]

# Published alias name -> resolved marital status key
_ALIAS_TO_STATUS = {
    "single": "single",
    "marriedSingleHolder": "married_single_holder",
}


def _convert_brackets(raw: List[PublishedBracket]) -> tuple:
    return tuple(
        TaxBracket(
            up_to=float("inf") if b.up_to is None else b.up_to,
            rate=b.rate,
            deduction=b.deduction,
        )
        for b in raw
    )


def published_to_config(published: PublishedTaxTables) -> TaxConfiguration:
    """Convert a validated tables file into a TaxConfiguration.

    Raises:
        ValidationError: if the converted tables violate bracket invariants
    """
    raw_brackets = published.irs_brackets
    brackets = {
        "single": _convert_brackets(raw_brackets.single),
        "married_single_holder": _convert_brackets(raw_brackets.married_single_holder),
    }
    if isinstance(raw_brackets.married_two_holders, str):
        brackets["married_two_holders"] = brackets[_ALIAS_TO_STATUS[raw_brackets.married_two_holders]]
    else:
        brackets["married_two_holders"] = _convert_brackets(raw_brackets.married_two_holders)

    regional = dict(REGIONAL_IRS_MULTIPLIER)
    for region, multiplier in published.regional_multipliers.items():
        if region in REGIONS:
            regional[region] = multiplier
        else:
            logger.debug(f"Ignoring unknown region '{region}' in tables {published.version}")

    ss = published.social_security
    meal = published.meal_allowance
    deps = published.dependent_deductions

    return TaxConfiguration(
        version=published.version,
        year=published.year,
        source=published.source,
        published_at=published.published_at,
        updated_at=published.updated_at,
        ss=SocialSecurityRates(
            employee_rate=ss.employee_rate,
            employer_rate=ss.employer_rate,
            self_employed_rate=ss.self_employed_rate,
            self_employed_base_services=ss.self_employed_base_services,
            self_employed_base_sales=ss.self_employed_base_sales,
        ),
        meal=MealAllowanceRules(
            exempt_cash=meal.exempt_cash,
            exempt_card=meal.exempt_card,
            working_days_per_month=meal.working_days_per_month,
            working_months_for_meal=meal.working_months_for_meal,
        ),
        vat=VatRules(
            standard_rate=published.vat.standard_rate,
            exempt_threshold=published.vat.exempt_threshold,
        ),
        irs_retention=ActivityRates(
            services=published.irs_retention.services,
            sales=published.irs_retention.sales,
        ),
        coefficients=ActivityRates(
            services=published.simplified_coefficients.services,
            sales=published.simplified_coefficients.sales,
        ),
        specific_deduction_annual=published.specific_deduction_annual,
        dependent_deductions={
            "single": deps.single,
            "married_two_holders": deps.married_two_holders,
            "married_single_holder": deps.married_single_holder,
        },
        irs_jovem_exemption=dict(published.irs_jovem_exemption),
        regional_multipliers=regional,
        brackets=brackets,
    )


def resolve_config(external: Optional[ExternalTables] = None) -> TaxConfiguration:
    """Return the configuration for a calculation.

    Args:
        external: None for built-in tables, an already resolved
            TaxConfiguration, or a published tables mapping

    Returns:
        A complete TaxConfiguration. Malformed input yields the defaults.
    """
    if external is None:
        return DEFAULT_CONFIG
    if isinstance(external, TaxConfiguration):
        return external

    try:
        published = PublishedTaxTables.model_validate(external)
        config = published_to_config(published)
    except ValidationError as e:
        logger.warning(
            f"Ignoring malformed tax tables ({e.error_count()} error(s)); "
            f"using built-in {DEFAULT_CONFIG.version}"
        )
        logger.debug(str(e))
        return DEFAULT_CONFIG

    logger.debug(f"Resolved tax tables {config.version} ({config.year})")
    return config


def validate_tax_tables(data: Any) -> List[str]:
    """Strictly validate a published tables mapping.

    Returns:
        List of error messages (empty if valid)
    """
    try:
        published_to_config(PublishedTaxTables.model_validate(data))
    except ValidationError as e:
        errors = []
        for err in e.errors():
            loc = ".".join(str(part) for part in err["loc"])
            errors.append(f"{loc}: {err['msg']}" if loc else err["msg"])
        return errors
    return []


def _publish_brackets(brackets) -> List[dict]:
    return [
        {
            "upTo": None if math.isinf(b.up_to) else b.up_to,
            "rate": b.rate,
            "deduction": b.deduction,
        }
        for b in brackets
    ]


def config_to_published(config: TaxConfiguration) -> dict:
    """Export a configuration in the published tables file shape.

    married_two_holders is written as the "single" alias when both tables
    are identical.
    """
    two_holders = config.brackets["married_two_holders"]
    if two_holders == config.brackets["single"]:
        two_holders_out = "single"
    else:
        two_holders_out = _publish_brackets(two_holders)

    return {
        "version": config.version,
        "year": config.year,
        "publishedAt": config.published_at,
        "source": config.source,
        "updatedAt": config.updated_at,
        "socialSecurity": {
            "employeeRate": config.ss.employee_rate,
            "employerRate": config.ss.employer_rate,
            "selfEmployedRate": config.ss.self_employed_rate,
            "selfEmployedBaseServices": config.ss.self_employed_base_services,
            "selfEmployedBaseSales": config.ss.self_employed_base_sales,
        },
        "mealAllowance": {
            "exemptCash": config.meal.exempt_cash,
            "exemptCard": config.meal.exempt_card,
            "workingDaysPerMonth": config.meal.working_days_per_month,
            "workingMonthsForMeal": config.meal.working_months_for_meal,
        },
        "vat": {
            "standardRate": config.vat.standard_rate,
            "exemptThreshold": config.vat.exempt_threshold,
        },
        "irsRetention": {
            "services": config.irs_retention.services,
            "sales": config.irs_retention.sales,
        },
        "simplifiedCoefficients": {
            "services": config.coefficients.services,
            "sales": config.coefficients.sales,
        },
        "specificDeductionAnnual": config.specific_deduction_annual,
        "dependentDeductions": {
            "single": config.dependent_deductions["single"],
            "marriedTwoHolders": config.dependent_deductions["married_two_holders"],
            "marriedSingleHolder": config.dependent_deductions["married_single_holder"],
        },
        "irsJovemExemption": {str(year): pct for year, pct in sorted(config.irs_jovem_exemption.items())},
        "regionalMultipliers": dict(config.regional_multipliers),
        "irsBrackets": {
            "single": _publish_brackets(config.brackets["single"]),
            "marriedSingleHolder": _publish_brackets(config.brackets["married_single_holder"]),
            "marriedTwoHolders": two_holders_out,
        },
    }
