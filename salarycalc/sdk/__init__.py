"""Salary Calc SDK - Net salary and withholding calculations."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    clear_setting,
    Settings,
    SettingsError,
)

from .taxes import (
    TaxBracket,
    TaxConfiguration,
    DEFAULT_CONFIG,
    resolve_config,
    validate_tax_tables,
    config_to_published,
    calc_irs_withholding,
    round_cents,
    load_tax_tables,
    load_configured_tax_tables,
    get_tax_tables_path,
    TaxTablesError,
    TaxTablesNotFoundError,
    TaxTablesFormatError,
)

from .schemas import (
    SalaryInput,
    EmployedResult,
    SelfEmployedResult,
    ComparisonResult,
    ComparisonDifference,
    SalaryResult,
)

from .employed import calc_employed, split_meal_allowance
from .self_employed import calc_self_employed
from .equivalence import (
    bisect_monotone,
    employed_annual_net_evaluator,
    find_equivalent_employed_gross,
)
from .comparison import calc_comparison, classify_better_option, BETTER_OPTION_THRESHOLD
from .calculator import calculate_salary

__all__ = [
    # Settings
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "clear_setting",
    "Settings",
    "SettingsError",
    # Tax tables
    "TaxBracket",
    "TaxConfiguration",
    "DEFAULT_CONFIG",
    "resolve_config",
    "validate_tax_tables",
    "config_to_published",
    "calc_irs_withholding",
    "round_cents",
    "load_tax_tables",
    "load_configured_tax_tables",
    "get_tax_tables_path",
    "TaxTablesError",
    "TaxTablesNotFoundError",
    "TaxTablesFormatError",
    # Schemas
    "SalaryInput",
    "EmployedResult",
    "SelfEmployedResult",
    "ComparisonResult",
    "ComparisonDifference",
    "SalaryResult",
    # Engines
    "calc_employed",
    "split_meal_allowance",
    "calc_self_employed",
    "bisect_monotone",
    "employed_annual_net_evaluator",
    "find_equivalent_employed_gross",
    "calc_comparison",
    "classify_better_option",
    "BETTER_OPTION_THRESHOLD",
    "calculate_salary",
]
