"""taxes - Tax tables and withholding logic.

Scope:
- Built-in tax tables for the default year (defaults)
- Published tables file schema and resolution to a TaxConfiguration
- Monthly IRS withholding by bracket (Despacho tables)
- Loading tables files from disk (the only I/O in this package)

Constraints:
- Pure calculation - engines receive a TaxConfiguration, never read files
- resolve_config() never raises; malformed tables fall back to defaults

Usage:
    from salarycalc.sdk.taxes import resolve_config, calc_irs_withholding

    config = resolve_config(load_tax_tables("2026.json"))
    irs = calc_irs_withholding(2000, "single", 0, "continente", config)
"""

from .schemas import (
    MaritalStatus,
    Region,
    ActivityType,
    TaxBracket,
    TaxConfiguration,
    PublishedTaxTables,
)

from .defaults import DEFAULT_CONFIG, default_config

from .withholding import (
    calc_irs_withholding,
    find_bracket,
    round_cents,
    safe_ratio,
)

from .resolver import (
    resolve_config,
    validate_tax_tables,
    config_to_published,
)

from .tables import (
    load_tax_tables,
    load_configured_tax_tables,
    get_tax_tables_path,
    TaxTablesError,
    TaxTablesNotFoundError,
    TaxTablesFormatError,
)

__all__ = [
    # Schemas
    "MaritalStatus",
    "Region",
    "ActivityType",
    "TaxBracket",
    "TaxConfiguration",
    "PublishedTaxTables",
    # Defaults
    "DEFAULT_CONFIG",
    "default_config",
    # Withholding
    "calc_irs_withholding",
    "find_bracket",
    "round_cents",
    "safe_ratio",
    # Resolution
    "resolve_config",
    "validate_tax_tables",
    "config_to_published",
    # Tables files
    "load_tax_tables",
    "load_configured_tax_tables",
    "get_tax_tables_path",
    "TaxTablesError",
    "TaxTablesNotFoundError",
    "TaxTablesFormatError",
]
