"""Pydantic schemas for salary calculation input and results.

SalaryInput normalizes numeric fields at the boundary (clamping instead of
rejecting) so the engines never see negative amounts or out-of-range
counts. Result models are frozen and tagged by ``type`` so SalaryResult can
be validated as a discriminated union.
"""

import math
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .taxes.schemas import ActivityType, MaritalStatus, Region


EmploymentType = Literal["employed", "self_employed", "compare"]
VatRegime = Literal["normal", "exempt_art53"]
FiscalRegime = Literal["simplified", "organized"]
MealAllowanceType = Literal["cash", "card"]
BetterOption = Literal["employed", "self_employed", "equal"]

MAX_DEPENDENTS = 10
MIN_IRS_JOVEM_YEAR = 1
MAX_IRS_JOVEM_YEAR = 10


# =============================================================================
# Input
# =============================================================================


class SalaryInput(BaseModel):
    """Calculation request for one worker profile."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    employment_type: EmploymentType = "employed"
    gross_monthly: float = Field(default=0, allow_inf_nan=False, description="Gross monthly amount")
    dependents: int = Field(default=0, description="Number of dependents (0-10)")
    marital_status: MaritalStatus = "single"
    has_disability: bool = False
    region: Region = "continente"

    # Employed (conta de outrem)
    meal_allowance_per_day: float = Field(default=0, allow_inf_nan=False)
    meal_allowance_type: MealAllowanceType = "card"
    number_of_months: Literal[12, 14] = Field(
        default=14, description="Salary installments per year (14 = separate holiday/Christmas subsidies)"
    )
    irs_jovem: bool = False
    irs_jovem_year: int = Field(default=1, description="IRS Jovem benefit year (1-10)")
    other_taxable_income: float = Field(
        default=0, allow_inf_nan=False, description="Overtime, shift pay, bonuses - subject to IRS and SS"
    )

    # Self-employed (trabalhador independente)
    activity_type: ActivityType = "services"
    vat_regime: VatRegime = "exempt_art53"
    fiscal_regime: FiscalRegime = "simplified"
    monthly_expenses: float = Field(default=0, allow_inf_nan=False, description="Organized accounting expenses")
    self_employed_first_year: bool = Field(default=False, description="First year of activity - SS exempt")
    self_employed_exempt_retention: bool = Field(default=False, description="Exempt from withholding at source")

    @field_validator(
        "gross_monthly", "meal_allowance_per_day", "other_taxable_income", "monthly_expenses",
        mode="before",
    )
    @classmethod
    def clamp_non_negative(cls, v):
        """Negative and missing amounts become zero."""
        if v is None:
            return 0.0
        return max(0.0, float(v))

    @field_validator("dependents", mode="before")
    @classmethod
    def clamp_dependents(cls, v):
        if v is None:
            return 0
        if isinstance(v, float) and math.isinf(v):
            return MAX_DEPENDENTS if v > 0 else 0
        return max(0, min(MAX_DEPENDENTS, int(v)))

    @field_validator("irs_jovem_year", mode="before")
    @classmethod
    def clamp_irs_jovem_year(cls, v):
        if v is None:
            return MIN_IRS_JOVEM_YEAR
        if isinstance(v, float) and math.isinf(v):
            return MAX_IRS_JOVEM_YEAR if v > 0 else MIN_IRS_JOVEM_YEAR
        return max(MIN_IRS_JOVEM_YEAR, min(MAX_IRS_JOVEM_YEAR, int(v)))


# =============================================================================
# Results
# =============================================================================


class EmployedResult(BaseModel):
    """Breakdown for a traditionally employed worker."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["employed"] = "employed"

    # Monthly
    gross_monthly: float
    other_taxable_income: float
    total_gross_monthly: float = Field(..., description="Salary + taxable supplements")
    taxable_gross_monthly: float = Field(..., description="Total gross + taxable meal excess")
    ss_employee: float
    irs_withholding: float = Field(..., description="IRS after IRS Jovem relief")
    irs_jovem_discount: float
    net_monthly: float
    meal_allowance_monthly: float
    meal_exempt_monthly: float
    meal_taxable_monthly: float
    total_net_monthly: float = Field(..., description="Net + exempt meal allowance")

    # Annual
    number_of_months: int
    gross_annual: float
    taxable_gross_annual: float
    ss_annual_employee: float
    irs_annual: float
    net_annual: float
    meal_allowance_annual: float
    meal_exempt_annual: float
    meal_taxable_annual: float
    total_net_annual: float

    # Employer costs
    ss_employer: float
    ss_employer_annual: float
    total_employer_cost_annual: float

    # Rates
    effective_irs_rate: float
    effective_total_rate: float
    ss_rate: float
    irs_rate: float


class SelfEmployedResult(BaseModel):
    """Breakdown for a self-employed worker (recibos verdes)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["self_employed"] = "self_employed"

    # Monthly
    gross_monthly: float
    irs_withholding: float = Field(..., description="Withholding at source after regional multiplier")
    irs_withholding_rate: float
    ss_contribution: float
    ss_base: float
    ss_rate: float
    vat_collected: float
    vat_rate: float
    net_monthly: float
    total_net_monthly: float

    # Annual
    gross_annual: float
    irs_annual: float
    ss_annual: float
    vat_annual: float
    taxable_income: float
    coefficient: float
    net_annual: float
    total_net_annual: float
    vat_threshold_exceeded: bool = Field(
        ..., description="Annual gross above the Art. 53 threshold (informational)"
    )

    # Organized accounting
    monthly_expenses: float
    annual_expenses: float

    # Equivalence
    equivalent_gross_employed: float = Field(
        ..., description="Employed monthly gross (14 installments) with the same annual net"
    )

    # Rates
    effective_irs_rate: float
    effective_total_rate: float


class ComparisonDifference(BaseModel):
    """Employed minus self-employed net income."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    monthly_net: float
    annual_net: float
    better_option: BetterOption


class ComparisonResult(BaseModel):
    """Employed and self-employed breakdowns for the same gross."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["comparison"] = "comparison"
    employed: EmployedResult
    self_employed: SelfEmployedResult
    difference: ComparisonDifference


SalaryResult = Annotated[
    Union[EmployedResult, SelfEmployedResult, ComparisonResult],
    Field(discriminator="type"),
]
