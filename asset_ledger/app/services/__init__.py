"""Service layer exposing asset depreciation computations."""

from .depreciation import (
    REDUCING_BALANCE_RATE,
    calculate_depreciation,
    generate_schedule,
    years_between,
)
from .formatting import format_amount, format_currency
from .register import (
    export_register_csv,
    export_schedule_csv,
    filter_assets,
    get_catalogue,
    summarize_register,
)

__all__ = [
    "REDUCING_BALANCE_RATE",
    "calculate_depreciation",
    "generate_schedule",
    "years_between",
    "format_amount",
    "format_currency",
    "export_register_csv",
    "export_schedule_csv",
    "filter_assets",
    "get_catalogue",
    "summarize_register",
]
