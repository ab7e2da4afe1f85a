from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from ...schemas.asset import (
    CatalogueResponse,
    DepreciationRequest,
    DepreciationResult,
    FormatRequest,
    FormatResponse,
    RegisterRequest,
    RegisterSummary,
    ScheduleResponse,
)
from ...services.depreciation import calculate_depreciation, generate_schedule
from ...services.formatting import format_currency
from ...services.register import (
    export_register_csv,
    export_schedule_csv,
    get_catalogue,
    summarize_register,
)

router = APIRouter()


@router.post("/depreciation", response_model=DepreciationResult, summary="Point-in-time depreciation")
def run_depreciation(payload: DepreciationRequest) -> DepreciationResult:
    """
    Compute accumulated depreciation and net book value for an asset at ``as_of``.
    """
    return calculate_depreciation(payload.asset, payload.as_of, rate=payload.rate)


@router.post("/schedule", response_model=ScheduleResponse, summary="Depreciation schedule")
def run_schedule(payload: DepreciationRequest) -> ScheduleResponse:
    """
    Generate the year-by-year schedule from acquisition to full depreciation.
    """
    schedule = generate_schedule(payload.asset, payload.as_of, rate=payload.rate)
    return ScheduleResponse(
        asset_label=payload.asset.name or payload.asset.id,
        method=payload.asset.depreciation_method,
        schedule=schedule,
        total_depreciation=schedule[-1].accumulated_depreciation if schedule else 0.0,
    )


@router.post("/schedule/csv", response_class=PlainTextResponse, summary="Schedule CSV export")
def run_schedule_csv(payload: DepreciationRequest) -> PlainTextResponse:
    schedule = generate_schedule(payload.asset, payload.as_of, rate=payload.rate)
    return PlainTextResponse(export_schedule_csv(schedule), media_type="text/csv")


@router.post("/register/summary", response_model=RegisterSummary, summary="Asset register summary")
def run_register_summary(payload: RegisterRequest) -> RegisterSummary:
    """Headline totals for the register: active count, NBV, monthly charge, disposals."""
    return summarize_register(payload.assets, payload.as_of)


@router.post("/register/csv", response_class=PlainTextResponse, summary="Asset register CSV export")
def run_register_csv(payload: RegisterRequest) -> PlainTextResponse:
    return PlainTextResponse(export_register_csv(payload.assets, payload.as_of), media_type="text/csv")


@router.post("/format", response_model=FormatResponse, summary="Currency formatting")
def run_format(payload: FormatRequest) -> FormatResponse:
    return FormatResponse(formatted=format_currency(payload.amount, payload.symbol))


@router.get("/catalogue", response_model=CatalogueResponse, summary="Asset pick-lists")
def read_catalogue() -> CatalogueResponse:
    """Categories, depreciation methods and statuses offered by the asset forms."""
    return get_catalogue()
