from __future__ import annotations

import csv
import io
from datetime import date
from typing import Iterable, List, Optional

from ..logging_config import get_logger
from ..schemas.asset import (
    Asset,
    CatalogueOption,
    CatalogueResponse,
    RegisterSummary,
    ScheduleEntry,
)
from .depreciation import calculate_depreciation
from .formatting import format_amount

logger = get_logger("services.register")

ASSET_CATEGORIES: List[CatalogueOption] = [
    CatalogueOption(value="IT", label="IT Equipment"),
    CatalogueOption(value="Vehicles", label="Vehicles"),
    CatalogueOption(value="Machinery", label="Machinery"),
    CatalogueOption(value="Furniture", label="Furniture"),
    CatalogueOption(value="Buildings", label="Buildings"),
    CatalogueOption(value="Other", label="Other"),
]

DEPRECIATION_METHODS: List[CatalogueOption] = [
    CatalogueOption(
        value="straight_line",
        label="Straight-Line",
        description="Equal annual depreciation",
    ),
    CatalogueOption(
        value="reducing_balance",
        label="Reducing Balance (20%)",
        description="Higher depreciation in early years",
    ),
]

ASSET_STATUSES: List[CatalogueOption] = [
    CatalogueOption(value="active", label="Active"),
    CatalogueOption(value="disposed", label="Disposed"),
    CatalogueOption(value="fully_depreciated", label="Fully Depreciated"),
]

_METHOD_LABELS = {"straight_line": "Straight-Line", "reducing_balance": "Reducing Balance"}

REGISTER_CSV_HEADERS = [
    "Name",
    "Category",
    "Serial Number",
    "Purchase Date",
    "Purchase Cost",
    "Depreciation Method",
    "Useful Life (Years)",
    "Salvage Value",
    "Current NBV",
    "Status",
]

SCHEDULE_CSV_HEADERS = ["Year", "Opening Value", "Depreciation", "Accumulated", "Closing Value"]


def get_catalogue() -> CatalogueResponse:
    return CatalogueResponse(
        categories=ASSET_CATEGORIES,
        methods=DEPRECIATION_METHODS,
        statuses=ASSET_STATUSES,
    )


def filter_assets(
    assets: Iterable[Asset],
    *,
    category: Optional[str] = None,
    status: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Asset]:
    """Apply the register filters; ``None`` or ``"all"`` disables a filter."""
    term = search.strip().lower() if search else ""
    selected: List[Asset] = []
    for asset in assets:
        if category not in (None, "all") and asset.category != category:
            continue
        if status not in (None, "all") and asset.status != status:
            continue
        if term:
            haystack = " ".join(filter(None, [asset.name, asset.serial_number])).lower()
            if term not in haystack:
                continue
        selected.append(asset)
    return selected


def summarize_register(assets: Iterable[Asset], as_of: Optional[date] = None) -> RegisterSummary:
    """
    Headline figures for the asset register.

    Only active assets contribute to the count and NBV total; assets that are
    already fully depreciated add nothing to the upcoming monthly charge.
    """
    assets = list(assets)
    total_assets = 0
    total_net_book_value = 0.0
    monthly_depreciation = 0.0

    for asset in assets:
        if asset.status != "active":
            continue
        result = calculate_depreciation(asset, as_of)
        total_assets += 1
        total_net_book_value += result.net_book_value
        if not result.is_fully_depreciated:
            monthly_depreciation += result.monthly_depreciation

    disposed_count = sum(1 for asset in assets if asset.status == "disposed")
    logger.debug(
        "register_summarised",
        extra={"assets": len(assets), "active": total_assets, "disposed": disposed_count},
    )
    return RegisterSummary(
        total_assets=total_assets,
        total_net_book_value=total_net_book_value,
        monthly_depreciation=monthly_depreciation,
        disposed_count=disposed_count,
    )


def _write_csv(headers: List[str], rows: Iterable[List[str]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue()


def export_register_csv(assets: Iterable[Asset], as_of: Optional[date] = None) -> str:
    rows = []
    for asset in assets:
        result = calculate_depreciation(asset, as_of)
        rows.append(
            [
                asset.name or "",
                asset.category or "",
                asset.serial_number or "",
                asset.purchase_date.isoformat(),
                format_amount(asset.purchase_cost),
                _METHOD_LABELS[asset.depreciation_method],
                str(asset.useful_life_years),
                format_amount(asset.salvage_value),
                format_amount(result.net_book_value),
                asset.status,
            ]
        )
    return _write_csv(REGISTER_CSV_HEADERS, rows)


def export_schedule_csv(schedule: Iterable[ScheduleEntry]) -> str:
    rows = [
        [
            entry.year_label,
            format_amount(entry.opening_value),
            format_amount(entry.depreciation),
            format_amount(entry.accumulated_depreciation),
            format_amount(entry.closing_value),
        ]
        for entry in schedule
    ]
    return _write_csv(SCHEDULE_CSV_HEADERS, rows)
