"""Calculation entry point.

    from salarycalc.sdk import calculate_salary, SalaryInput

    result = calculate_salary(SalaryInput(gross_monthly=2000))
    result.type  # "employed"

Dispatches on ``employment_type``; the optional tables argument accepts
anything resolve_config() accepts.
"""

from typing import Any, Mapping, Optional, Union

from .comparison import calc_comparison
from .employed import calc_employed
from .schemas import SalaryInput, SalaryResult
from .self_employed import calc_self_employed
from .taxes.resolver import ExternalTables, resolve_config


def calculate_salary(
    salary_input: Union[SalaryInput, Mapping[str, Any]],
    tables: Optional[ExternalTables] = None,
) -> SalaryResult:
    """Calculate the net income breakdown for one profile.

    Args:
        salary_input: SalaryInput, or a mapping validated into one
        tables: None for built-in tables, a TaxConfiguration, or a
            published tables mapping (malformed tables fall back to defaults)

    Returns:
        EmployedResult, SelfEmployedResult or ComparisonResult

    Raises:
        pydantic.ValidationError: if a mapping input has unknown fields or
            invalid choices (numeric ranges are clamped, not rejected)
    """
    if not isinstance(salary_input, SalaryInput):
        salary_input = SalaryInput.model_validate(salary_input)

    config = resolve_config(tables)

    if salary_input.employment_type == "compare":
        return calc_comparison(salary_input, config)
    if salary_input.employment_type == "self_employed":
        return calc_self_employed(salary_input, config)
    return calc_employed(salary_input, config)
