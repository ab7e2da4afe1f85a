from __future__ import annotations

import math
from datetime import date
from typing import List, NamedTuple, Optional

from ..config import REDUCING_BALANCE_RATE, get_settings
from ..errors import ValidationError
from ..logging_config import get_logger
from ..schemas.asset import Asset, DepreciationResult, ScheduleEntry

__all__ = [
    "REDUCING_BALANCE_RATE",
    "FULLY_DEPRECIATED_TOLERANCE",
    "years_between",
    "calculate_depreciation",
    "generate_schedule",
]

# Half a minor currency unit.
FULLY_DEPRECIATED_TOLERANCE = 0.005

logger = get_logger("services.depreciation")


class _Basis(NamedTuple):
    cost: float
    floor: float
    base: float
    life: int
    rate: float


class _YearCharge(NamedTuple):
    opening: float
    charge: float
    closing: float


def _anniversary(start: date, years: int) -> date:
    try:
        return start.replace(year=start.year + years)
    except ValueError:
        # 29 February rolls back to 28 February in non-leap years.
        return start.replace(year=start.year + years, day=28)


def years_between(start: date, end: date) -> float:
    """
    Fractional years from ``start`` to ``end`` on a calendar-anniversary basis.

    Whole years are counted in anniversaries; the remainder is the share of the
    current anniversary year that has elapsed, so exactly N anniversaries after
    ``start`` is exactly ``N``. Dates on or before ``start`` give ``0.0``.
    """
    if end <= start:
        return 0.0
    whole = end.year - start.year
    if _anniversary(start, whole) > end:
        whole -= 1
    last = _anniversary(start, whole)
    upcoming = _anniversary(start, whole + 1)
    return whole + (end - last).days / (upcoming - last).days


def _resolve_basis(asset: Asset, rate: Optional[float]) -> _Basis:
    if asset.useful_life_years <= 0:
        raise ValidationError("useful_life_years must be at least 1.", field="useful_life_years")
    if not math.isfinite(asset.purchase_cost):
        raise ValidationError("purchase_cost must be a finite amount.", field="purchase_cost")
    if asset.purchase_cost < 0:
        raise ValidationError("purchase_cost cannot be negative.", field="purchase_cost")
    if not math.isfinite(asset.salvage_value):
        raise ValidationError("salvage_value must be a finite amount.", field="salvage_value")

    effective_rate = get_settings().reducing_balance_rate if rate is None else rate
    if not math.isfinite(effective_rate) or not 0 < effective_rate <= 1:
        raise ValidationError("rate must be greater than 0 and at most 1.", field="rate")

    cost = asset.purchase_cost
    floor = min(max(asset.salvage_value, 0.0), cost)
    if floor != asset.salvage_value:
        logger.debug(
            "salvage_value_clamped",
            extra={"asset_id": asset.id, "salvage_value": asset.salvage_value, "effective_salvage": floor},
        )
    return _Basis(cost=cost, floor=floor, base=cost - floor, life=asset.useful_life_years, rate=effective_rate)


def _year_charges(method: str, basis: _Basis) -> List[_YearCharge]:
    """
    Per-year charges for every year of the asset's life.

    Both the point-in-time calculator and the schedule read from this list, so
    their figures cannot drift apart. The final life-year writes the remaining
    balance down to salvage under either method.
    """
    straight_line_charge = basis.base / basis.life
    charges: List[_YearCharge] = []
    opening = basis.cost

    for year in range(1, basis.life + 1):
        remaining = opening - basis.floor
        if remaining <= 0:
            charges.append(_YearCharge(opening, 0.0, opening))
            continue

        if year == basis.life:
            charge = remaining
        elif method == "straight_line":
            charge = min(straight_line_charge, remaining)
        else:
            charge = min(opening * basis.rate, remaining)

        closing = basis.floor if charge >= remaining else opening - charge
        charges.append(_YearCharge(opening, charge, closing))
        opening = closing

    return charges


def _years_to_salvage(charges: List[_YearCharge], basis: _Basis) -> int:
    """1-based life-year whose closing value first reaches salvage."""
    for year, entry in enumerate(charges, start=1):
        if entry.closing <= basis.floor:
            return year
    return basis.life


def _effective_as_of(asset: Asset, as_of: Optional[date]) -> date:
    evaluation_date = as_of or date.today()
    if asset.disposal_date is not None and asset.disposal_date < evaluation_date:
        return asset.disposal_date
    return evaluation_date


def calculate_depreciation(
    asset: Asset,
    as_of: Optional[date] = None,
    *,
    rate: Optional[float] = None,
) -> DepreciationResult:
    """
    Compute the depreciation position of ``asset`` at ``as_of`` (default today).

    Steps:
      1) Depreciable base = cost - salvage, clamped to be non-negative.
      2) Elapsed life in fractional years, capped at the disposal date.
      3) Sum the charges of completed life-years.
      4) Add the elapsed share of the year in progress.
      5) Derive NBV, annual/monthly charge and progress figures.

    Raises ``ValidationError`` for a non-positive useful life, a negative or
    non-finite cost, a non-finite salvage value, or a rate outside (0, 1].
    """
    basis = _resolve_basis(asset, rate)
    evaluation_date = _effective_as_of(asset, as_of)
    method = asset.depreciation_method

    if evaluation_date < asset.purchase_date:
        logger.debug(
            "as_of_before_purchase",
            extra={"asset_id": asset.id, "purchase_date": asset.purchase_date, "as_of": evaluation_date},
        )

    elapsed = years_between(asset.purchase_date, evaluation_date)
    completed_years = math.floor(elapsed)
    fraction = elapsed - completed_years

    charges = _year_charges(method, basis)
    accumulated = sum(entry.charge for entry in charges[: min(completed_years, basis.life)])
    current_charge = 0.0
    if completed_years < basis.life:
        current_charge = charges[completed_years].charge
        accumulated += fraction * current_charge
    accumulated = min(max(accumulated, 0.0), basis.base)

    if method == "straight_line":
        annual_depreciation = basis.base / basis.life
    elif current_charge > 0:
        annual_depreciation = current_charge
    else:
        recognised = [entry.charge for entry in charges[:completed_years] if entry.charge > 0]
        annual_depreciation = recognised[-1] if recognised else 0.0

    net_book_value = max(basis.floor, basis.cost - accumulated)
    is_fully_depreciated = net_book_value <= basis.floor + FULLY_DEPRECIATED_TOLERANCE
    years_remaining = 0.0 if is_fully_depreciated else max(0.0, _years_to_salvage(charges, basis) - elapsed)
    percent_depreciated = (
        min(100.0, max(0.0, accumulated * 100 / basis.base)) if basis.base > 0 else 0.0
    )

    disposal_gain_loss: Optional[float] = None
    if asset.disposal_value is not None:
        disposal_gain_loss = asset.disposal_value - net_book_value

    logger.debug(
        "depreciation_calculated",
        extra={
            "asset_id": asset.id,
            "method": method,
            "as_of": evaluation_date,
            "years_elapsed": elapsed,
            "accumulated_depreciation": accumulated,
            "net_book_value": net_book_value,
        },
    )

    return DepreciationResult(
        as_of=evaluation_date,
        accumulated_depreciation=accumulated,
        net_book_value=net_book_value,
        annual_depreciation=annual_depreciation,
        monthly_depreciation=annual_depreciation / 12,
        percent_depreciated=percent_depreciated,
        is_fully_depreciated=is_fully_depreciated,
        years_elapsed=elapsed,
        years_remaining=years_remaining,
        disposal_gain_loss=disposal_gain_loss,
    )


def generate_schedule(
    asset: Asset,
    as_of: Optional[date] = None,
    *,
    rate: Optional[float] = None,
) -> List[ScheduleEntry]:
    """
    Build the year-by-year schedule from acquisition to full depreciation.

    Straight-line always yields ``useful_life_years`` rows. Reducing balance
    stops after the row that reaches salvage and yields nothing when there is
    no depreciable base. ``as_of`` only marks rows as past/current/future.
    """
    basis = _resolve_basis(asset, rate)
    method = asset.depreciation_method

    current_year: Optional[int] = None
    if as_of is not None:
        if as_of < asset.purchase_date:
            current_year = 0
        else:
            current_year = math.floor(years_between(asset.purchase_date, as_of)) + 1

    schedule: List[ScheduleEntry] = []
    accumulated = 0.0
    for year, entry in enumerate(_year_charges(method, basis), start=1):
        if method == "reducing_balance" and entry.opening <= basis.floor:
            break

        accumulated += entry.charge
        period = None
        if current_year is not None:
            if year < current_year:
                period = "past"
            elif year == current_year:
                period = "current"
            else:
                period = "future"

        schedule.append(
            ScheduleEntry(
                year=year,
                year_label=str(asset.purchase_date.year + year - 1),
                opening_value=entry.opening,
                depreciation=entry.charge,
                accumulated_depreciation=accumulated,
                closing_value=entry.closing,
                period=period,
            )
        )

        if method == "reducing_balance" and entry.closing <= basis.floor:
            break

    logger.debug(
        "schedule_generated",
        extra={"asset_id": asset.id, "method": method, "rows": len(schedule)},
    )
    return schedule
