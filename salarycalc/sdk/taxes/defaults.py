"""Built-in 2026 tax tables.

Source: Despacho n.º 233-A/2026 (6 January) withholding tables, applied to
GROSS monthly salary. Other constants as in force for 2026:

- IRS retention for self-employed services 23% (OE 2025), none for sales
  (Art. 101 CIRS)
- IVA Art. 53 exemption threshold 15,000 (since 2025)
- IRS Jovem over 10 years (Art. 12-B CIRS, OE 2025)
- Acores and Madeira 30% withholding reduction (DLR 8/2025/M)
- Self-employed SS base: 70% services, 20% sales
"""

from typing import Dict, List, Tuple

from .schemas import (
    ActivityRates,
    MealAllowanceRules,
    SocialSecurityRates,
    TaxBracket,
    TaxConfiguration,
    VatRules,
)


DEFAULT_TABLES_VERSION = "2026.1"
DEFAULT_TABLES_YEAR = 2026

# Social Security
SS_EMPLOYEE_RATE = 0.11
SS_EMPLOYER_RATE = 0.2375
SS_SELF_EMPLOYED_RATE = 0.214
SS_SELF_EMPLOYED_BASE_SERVICES = 0.70
SS_SELF_EMPLOYED_BASE_SALES = 0.20

# Meal allowance
MEAL_ALLOWANCE_EXEMPT_CASH = 6.15
MEAL_ALLOWANCE_EXEMPT_CARD = 10.46
WORKING_DAYS_PER_MONTH = 22
WORKING_MONTHS_FOR_MEAL = 11

# IVA
VAT_STANDARD_RATE = 0.23
VAT_EXEMPT_THRESHOLD = 15000

# Self-employed withholding at source and simplified regime coefficients (Art. 31 CIRS)
IRS_RETENTION_SERVICES = 0.23
IRS_RETENTION_SALES = 0.0
COEFFICIENT_SERVICES = 0.75
COEFFICIENT_SALES = 0.15

SPECIFIC_DEDUCTION_ANNUAL = 4104

# Per-dependent monthly deduction, by table
DEPENDENT_DEDUCTIONS: Dict[str, float] = {
    "single": 34.29,
    "married_two_holders": 21.43,
    "married_single_holder": 42.86,
}

# Relief year -> share of withholding exempted
IRS_JOVEM_EXEMPTION: Dict[int, float] = {
    1: 1.0,
    2: 0.75, 3: 0.75, 4: 0.75,
    5: 0.50, 6: 0.50, 7: 0.50,
    8: 0.25, 9: 0.25, 10: 0.25,
}

REGIONAL_IRS_MULTIPLIER: Dict[str, float] = {
    "continente": 1.0,
    "acores": 0.70,
    "madeira": 0.70,
}

# Format: (monthly_gross_up_to, rate, deduction)
# Rows 2-3 are transition bands; their rate/deduction pairs are the
# effective values of the Despacho's variable formula, not marginal rates.

# Tabela I - Nao casado (also Tabela II - Casado, dois titulares)
IRS_BRACKETS_SINGLE: List[Tuple[float, float, float]] = [
    (920, 0.0, 0.00),            # Minimum exempt
    (1042, 0.45, 414.00),
    (1108, 0.36895, 329.47),
    (1154, 0.157, 94.71),
    (1212, 0.212, 158.18),
    (1819, 0.241, 193.33),
    (2119, 0.311, 320.66),
    (2499, 0.349, 401.19),
    (3305, 0.3836, 487.66),
    (5547, 0.3969, 531.62),
    (20221, 0.4495, 823.40),
    (float('inf'), 0.4717, 1272.31),
]

# Tabela III - Casado, unico titular
IRS_BRACKETS_MARRIED_SINGLE_HOLDER: List[Tuple[float, float, float]] = [
    (991, 0.0, 0.00),            # Minimum exempt
    (1042, 0.45, 445.95),
    (1108, 0.29375, 283.13),
    (1119, 0.125, 96.17),
    (1432, 0.1272, 98.64),
    (1962, 0.157, 141.32),
    (2240, 0.1938, 213.53),
    (2773, 0.2277, 289.47),
    (3389, 0.257, 370.72),
    (5965, 0.2881, 476.12),
    (20265, 0.3843, 1049.96),
    (float('inf'), 0.4717, 2821.13),
]


def _brackets(rows: List[Tuple[float, float, float]]) -> Tuple[TaxBracket, ...]:
    return tuple(TaxBracket(up_to=up_to, rate=rate, deduction=deduction) for up_to, rate, deduction in rows)


def default_config() -> TaxConfiguration:
    """Build the built-in 2026 configuration."""
    single = _brackets(IRS_BRACKETS_SINGLE)

    return TaxConfiguration(
        version=DEFAULT_TABLES_VERSION,
        year=DEFAULT_TABLES_YEAR,
        source="Despacho n.º 233-A/2026, 6 de janeiro (built-in)",
        published_at="2026-01-06",
        updated_at="2026-01-06",
        ss=SocialSecurityRates(
            employee_rate=SS_EMPLOYEE_RATE,
            employer_rate=SS_EMPLOYER_RATE,
            self_employed_rate=SS_SELF_EMPLOYED_RATE,
            self_employed_base_services=SS_SELF_EMPLOYED_BASE_SERVICES,
            self_employed_base_sales=SS_SELF_EMPLOYED_BASE_SALES,
        ),
        meal=MealAllowanceRules(
            exempt_cash=MEAL_ALLOWANCE_EXEMPT_CASH,
            exempt_card=MEAL_ALLOWANCE_EXEMPT_CARD,
            working_days_per_month=WORKING_DAYS_PER_MONTH,
            working_months_for_meal=WORKING_MONTHS_FOR_MEAL,
        ),
        vat=VatRules(standard_rate=VAT_STANDARD_RATE, exempt_threshold=VAT_EXEMPT_THRESHOLD),
        irs_retention=ActivityRates(services=IRS_RETENTION_SERVICES, sales=IRS_RETENTION_SALES),
        coefficients=ActivityRates(services=COEFFICIENT_SERVICES, sales=COEFFICIENT_SALES),
        specific_deduction_annual=SPECIFIC_DEDUCTION_ANNUAL,
        dependent_deductions=dict(DEPENDENT_DEDUCTIONS),
        irs_jovem_exemption=dict(IRS_JOVEM_EXEMPTION),
        regional_multipliers=dict(REGIONAL_IRS_MULTIPLIER),
        brackets={
            "single": single,
            "married_single_holder": _brackets(IRS_BRACKETS_MARRIED_SINGLE_HOLDER),
            "married_two_holders": single,
        },
    )


# Immutable; safe to share across calls
DEFAULT_CONFIG = default_config()
