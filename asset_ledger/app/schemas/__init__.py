"""Export Pydantic schema models."""

from .asset import (
    Asset,
    CatalogueOption,
    CatalogueResponse,
    DepreciationRequest,
    DepreciationResult,
    FormatRequest,
    FormatResponse,
    RegisterRequest,
    RegisterSummary,
    ScheduleEntry,
    ScheduleResponse,
)

__all__ = [
    "Asset",
    "CatalogueOption",
    "CatalogueResponse",
    "DepreciationRequest",
    "DepreciationResult",
    "FormatRequest",
    "FormatResponse",
    "RegisterRequest",
    "RegisterSummary",
    "ScheduleEntry",
    "ScheduleResponse",
]
