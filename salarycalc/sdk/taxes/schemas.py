"""Pydantic schemas for tax tables.

Two families of models live here:

- TaxConfiguration and its parts: the resolved, immutable rule set the
  engines read. Field names are snake_case and every table is complete.
- Published*: the camelCase shape of the versioned tables file
  (e.g. tax-tables/2026.json). These are only used by the resolver to
  validate external input before converting it to a TaxConfiguration.
"""

import math
from typing import Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


MaritalStatus = Literal["single", "married_single_holder", "married_two_holders"]
Region = Literal["continente", "acores", "madeira"]
ActivityType = Literal["services", "sales"]

MARITAL_STATUSES: Tuple[str, ...] = ("single", "married_single_holder", "married_two_holders")
REGIONS: Tuple[str, ...] = ("continente", "acores", "madeira")


# =============================================================================
# Resolved configuration
# =============================================================================


class TaxBracket(BaseModel):
    """Single monthly withholding bracket.

    Withholding for a gross amount in this bracket is
    ``gross * rate - deduction``. The last bracket has ``up_to = inf``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    up_to: float = Field(
        ..., ge=0, allow_inf_nan=True, description="Inclusive upper bound (inf for the top bracket)"
    )
    rate: float = Field(..., ge=0, le=1, description="Effective rate as decimal")
    deduction: float = Field(default=0, description="Fixed amount subtracted (parcela a abater)")


class SocialSecurityRates(BaseModel):
    """Social Security contribution rates and self-employed income bases."""

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    employee_rate: float = Field(..., ge=0, le=1)
    employer_rate: float = Field(..., ge=0, le=1)
    self_employed_rate: float = Field(..., ge=0, le=1)
    self_employed_base_services: float = Field(..., ge=0, le=1, description="Share of income subject to SS (services)")
    self_employed_base_sales: float = Field(..., ge=0, le=1, description="Share of income subject to SS (sales)")

    def self_employed_base(self, activity: ActivityType) -> float:
        if activity == "services":
            return self.self_employed_base_services
        return self.self_employed_base_sales


class MealAllowanceRules(BaseModel):
    """Meal allowance exempt ceilings and working-time constants."""

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    exempt_cash: float = Field(..., ge=0, description="Exempt amount per day when paid in cash")
    exempt_card: float = Field(..., ge=0, description="Exempt amount per day when paid on a meal card")
    working_days_per_month: int = Field(..., gt=0)
    working_months_for_meal: int = Field(..., ge=0, le=12)

    def exempt_limit(self, meal_type: str) -> float:
        return self.exempt_card if meal_type == "card" else self.exempt_cash


class VatRules(BaseModel):
    """VAT (IVA) standard rate and Art. 53 exemption threshold."""

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    standard_rate: float = Field(..., ge=0, le=1)
    exempt_threshold: float = Field(..., ge=0, description="Annual turnover ceiling for Art. 53 exemption")


class ActivityRates(BaseModel):
    """A value per self-employed activity type."""

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    services: float = Field(..., ge=0, le=1)
    sales: float = Field(..., ge=0, le=1)

    def for_activity(self, activity: ActivityType) -> float:
        return self.services if activity == "services" else self.sales


class TaxConfiguration(BaseModel):
    """Complete, resolved rule set for one tax year.

    Built once per calculation by resolve_config() and never mutated.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    version: str
    year: int
    source: str = ""
    published_at: str = ""
    updated_at: str = ""

    ss: SocialSecurityRates
    meal: MealAllowanceRules
    vat: VatRules
    irs_retention: ActivityRates = Field(..., description="Self-employed withholding at source")
    coefficients: ActivityRates = Field(..., description="Simplified regime coefficients")
    specific_deduction_annual: float = Field(default=0, ge=0)

    dependent_deductions: Dict[MaritalStatus, float]
    irs_jovem_exemption: Dict[int, float] = Field(
        default_factory=dict, description="Relief year -> share of withholding exempted"
    )
    regional_multipliers: Dict[Region, float]
    brackets: Dict[MaritalStatus, Tuple[TaxBracket, ...]]

    @model_validator(mode="after")
    def check_tables(self) -> "TaxConfiguration":
        """Validate that every category is covered and bracket tables are well formed."""
        errors = []

        for status in MARITAL_STATUSES:
            if status not in self.dependent_deductions:
                errors.append(f"dependent_deductions missing '{status}'")
            if status not in self.brackets:
                errors.append(f"brackets missing '{status}'")

        for region in REGIONS:
            if region not in self.regional_multipliers:
                errors.append(f"regional_multipliers missing '{region}'")

        for status, table in self.brackets.items():
            if not table:
                errors.append(f"brackets.{status} is empty")
                continue
            if table[0].rate != 0:
                errors.append(f"brackets.{status}: first bracket rate must be 0 (exempt threshold)")
            if not math.isinf(table[-1].up_to):
                errors.append(f"brackets.{status}: last bracket must be unbounded")
            for prev, cur in zip(table, table[1:]):
                if cur.up_to <= prev.up_to:
                    errors.append(
                        f"brackets.{status}: up_to {cur.up_to} not above {prev.up_to}"
                    )

        for year, pct in self.irs_jovem_exemption.items():
            if not 0 <= pct <= 1:
                errors.append(f"irs_jovem_exemption[{year}] must be between 0 and 1, got {pct}")

        if errors:
            raise ValueError("; ".join(errors))

        return self

    def brackets_for(self, marital_status: MaritalStatus) -> Tuple[TaxBracket, ...]:
        return self.brackets.get(marital_status, ())

    def dependent_deduction(self, marital_status: MaritalStatus) -> float:
        return self.dependent_deductions.get(marital_status, 0.0)

    def regional_multiplier(self, region: Region) -> float:
        return self.regional_multipliers.get(region, 1.0)

    def irs_jovem_share(self, relief_year: int) -> Optional[float]:
        """Exempted share for a relief year, or None if the year is outside the schedule."""
        return self.irs_jovem_exemption.get(relief_year)


# =============================================================================
# Published tables file (camelCase JSON/YAML)
# =============================================================================


class _PublishedModel(BaseModel):
    model_config = ConfigDict(
        extra="ignore", alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False
    )


class PublishedBracket(_PublishedModel):
    up_to: Optional[float] = Field(default=None, description="Upper bound, null for the top bracket")
    rate: float
    deduction: float = 0


class PublishedSocialSecurity(_PublishedModel):
    employee_rate: float
    employer_rate: float
    self_employed_rate: float
    self_employed_base_services: float
    self_employed_base_sales: float


class PublishedMealAllowance(_PublishedModel):
    exempt_cash: float
    exempt_card: float
    working_days_per_month: int
    working_months_for_meal: int


class PublishedVat(_PublishedModel):
    standard_rate: float
    exempt_threshold: float


class PublishedActivityRates(_PublishedModel):
    services: float
    sales: float


class PublishedDependentDeductions(_PublishedModel):
    single: float
    married_two_holders: float
    married_single_holder: float


BracketAlias = Literal["single", "marriedSingleHolder"]


class PublishedBrackets(_PublishedModel):
    single: List[PublishedBracket]
    married_single_holder: List[PublishedBracket]
    married_two_holders: Union[BracketAlias, List[PublishedBracket]] = Field(
        ..., description="Bracket array, or the name of another table it shares"
    )


class PublishedTaxTables(_PublishedModel):
    """Versioned tables file as published alongside each Despacho."""

    version: str
    year: int
    published_at: str = ""
    source: str = ""
    updated_at: str = ""
    social_security: PublishedSocialSecurity
    meal_allowance: PublishedMealAllowance
    vat: PublishedVat
    irs_retention: PublishedActivityRates
    simplified_coefficients: PublishedActivityRates
    specific_deduction_annual: float = 0
    dependent_deductions: PublishedDependentDeductions
    irs_jovem_exemption: Dict[int, float] = Field(default_factory=dict)
    regional_multipliers: Dict[str, float] = Field(default_factory=dict)
    irs_brackets: PublishedBrackets
