from __future__ import annotations

import math
from typing import Optional

from ..config import get_settings
from ..errors import ValidationError


def _round_money(amount: float) -> float:
    rounded = round(amount, 2)
    # Collapse -0.0 so tiny negative residues never print as "-0.00".
    return 0.0 if rounded == 0 else rounded


def format_currency(amount: float, symbol: Optional[str] = None) -> str:
    """Render ``amount`` as ``"<symbol> 1,234.56"`` using the configured symbol by default."""
    if not math.isfinite(amount):
        raise ValidationError("amount must be a finite number.", field="amount")
    prefix = get_settings().currency_symbol if symbol is None else symbol
    return f"{prefix} {_round_money(amount):,.2f}"


def format_amount(amount: float) -> str:
    """Two decimals without grouping, for CSV cells."""
    return f"{_round_money(amount):.2f}"
