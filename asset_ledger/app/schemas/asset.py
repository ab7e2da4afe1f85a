from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

DepreciationMethod = Literal["straight_line", "reducing_balance"]
AssetStatus = Literal["active", "disposed", "fully_depreciated"]
SchedulePeriod = Literal["past", "current", "future"]


class Asset(BaseModel):
    """Asset record as supplied by the persistence layer.

    Financial invariants (positive life, non-negative cost) are checked by the
    depreciation service rather than here, so that every caller gets the same
    ``ValidationError`` whether it arrives over HTTP or in-process.
    """

    id: Optional[str] = None
    name: Optional[str] = Field(default=None, description="Display name of the asset.")
    category: Optional[str] = Field(
        default=None,
        description="Register category (IT, Vehicles, Machinery, Furniture, Buildings, Other).",
    )
    serial_number: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    assigned_to: Optional[str] = None
    purchase_date: date = Field(..., description="Acquisition date.")
    purchase_cost: float = Field(..., description="Original acquisition cost.")
    salvage_value: float = Field(
        default=0.0,
        description="Expected residual value at the end of useful life.",
    )
    useful_life_years: int = Field(..., description="Depreciation horizon in years.")
    depreciation_method: DepreciationMethod = Field(
        default="straight_line",
        description="Depreciation policy fixed at creation.",
    )
    status: AssetStatus = Field(default="active", description="Lifecycle status.")
    disposal_date: Optional[date] = Field(
        default=None,
        description="Date the asset left the register; depreciation stops here.",
    )
    disposal_value: Optional[float] = Field(
        default=None,
        description="Proceeds realised on disposal.",
    )


class DepreciationRequest(BaseModel):
    asset: Asset
    as_of: Optional[date] = Field(
        default=None,
        description="Evaluation date; defaults to today.",
    )
    rate: Optional[float] = Field(
        default=None,
        description="Reducing-balance rate override; defaults to the configured rate (20%).",
    )


class DepreciationResult(BaseModel):
    as_of: date = Field(..., description="Effective evaluation date (capped at disposal).")
    accumulated_depreciation: float
    net_book_value: float
    annual_depreciation: float = Field(
        ...,
        description="Charge for the year in progress (constant under straight-line).",
    )
    monthly_depreciation: float
    percent_depreciated: float = Field(..., ge=0, le=100)
    is_fully_depreciated: bool
    years_elapsed: float = Field(..., ge=0)
    years_remaining: float = Field(..., ge=0)
    disposal_gain_loss: Optional[float] = Field(
        default=None,
        description="Disposal proceeds minus net book value at disposal.",
    )


class ScheduleEntry(BaseModel):
    year: int = Field(..., ge=1, description="1-based life-year index.")
    year_label: str = Field(..., description="Calendar year the life-year starts in.")
    opening_value: float
    depreciation: float
    accumulated_depreciation: float
    closing_value: float
    period: Optional[SchedulePeriod] = Field(
        default=None,
        description=(
            "Position of the life-year (anniversary to anniversary, not the calendar "
            "year in year_label) relative to the as-of date, when one was given."
        ),
    )


class ScheduleResponse(BaseModel):
    asset_label: Optional[str]
    method: DepreciationMethod
    schedule: List[ScheduleEntry]
    total_depreciation: float


class RegisterRequest(BaseModel):
    assets: List[Asset]
    as_of: Optional[date] = None


class RegisterSummary(BaseModel):
    total_assets: int = Field(..., description="Number of active assets.")
    total_net_book_value: float = Field(..., description="Sum of NBV over active assets.")
    monthly_depreciation: float = Field(
        ...,
        description="Upcoming monthly charge over active assets still depreciating.",
    )
    disposed_count: int


class FormatRequest(BaseModel):
    amount: float
    symbol: Optional[str] = None


class FormatResponse(BaseModel):
    formatted: str


class CatalogueOption(BaseModel):
    value: str
    label: str
    description: Optional[str] = None


class CatalogueResponse(BaseModel):
    categories: List[CatalogueOption]
    methods: List[CatalogueOption]
    statuses: List[CatalogueOption]
