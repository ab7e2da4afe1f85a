"""
Utility script to exercise the Asset Ledger Engine API endpoints with representative payloads.

Usage:
    python -m asset_ledger.examples.sample_requests

Override the default base URL by setting the ASSET_LEDGER_API_BASE_URL environment variable,
e.g. `export ASSET_LEDGER_API_BASE_URL=https://asset-ledger.example.com`.
"""

from __future__ import annotations

import json
import os
import textwrap
import urllib.request
from typing import Dict, Iterable, List, Tuple

BASE_URL = os.getenv("ASSET_LEDGER_API_BASE_URL", "http://localhost:8000").rstrip("/")

DELIVERY_VAN = {
    "id": "asset-001",
    "name": "Delivery Van",
    "category": "Vehicles",
    "serial_number": "VAN-2021-0042",
    "purchase_date": "2021-03-15",
    "purchase_cost": 185000.0,
    "salvage_value": 25000.0,
    "useful_life_years": 6,
    "depreciation_method": "reducing_balance",
    "status": "active",
}

POS_TERMINALS = {
    "id": "asset-002",
    "name": "POS Terminals",
    "category": "IT",
    "serial_number": "POS-BATCH-7",
    "purchase_date": "2022-07-01",
    "purchase_cost": 42000.0,
    "salvage_value": 2000.0,
    "useful_life_years": 4,
    "depreciation_method": "straight_line",
    "status": "active",
}

OFFICE_DESKS = {
    "id": "asset-003",
    "name": "Office Desks",
    "category": "Furniture",
    "purchase_date": "2018-01-10",
    "purchase_cost": 12000.0,
    "salvage_value": 0.0,
    "useful_life_years": 5,
    "depreciation_method": "straight_line",
    "status": "disposed",
    "disposal_date": "2023-06-30",
    "disposal_value": 800.0,
}

AS_OF = "2024-09-30"

ASSET_SAMPLES: List[Tuple[str, Dict]] = [
    ("/asset/depreciation", {"asset": DELIVERY_VAN, "as_of": AS_OF}),
    ("/asset/depreciation", {"asset": OFFICE_DESKS, "as_of": AS_OF}),
    ("/asset/schedule", {"asset": POS_TERMINALS, "as_of": AS_OF}),
    ("/asset/schedule", {"asset": DELIVERY_VAN, "as_of": AS_OF, "rate": 0.25}),
    ("/asset/register/summary", {"assets": [DELIVERY_VAN, POS_TERMINALS, OFFICE_DESKS], "as_of": AS_OF}),
    ("/asset/format", {"amount": 1234567.891}),
]


def _print_heading(title: str) -> None:
    bar = "=" * len(title)
    print(f"\n{title}\n{bar}")


def _get(path: str) -> Tuple[int, str]:
    with urllib.request.urlopen(f"{BASE_URL}{path}") as response:  # type: ignore[no-untyped-call]
        return response.status, response.read().decode("utf-8")


def _post(path: str, payload: Dict) -> Tuple[int, str]:
    data = json.dumps(payload).encode("utf-8")
    request = urllib.request.Request(
        f"{BASE_URL}{path}",
        data=data,
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    with urllib.request.urlopen(request) as response:  # type: ignore[no-untyped-call]
        return response.status, response.read().decode("utf-8")


def _summarise(body: str, limit: int = 400) -> str:
    snippet = body if len(body) <= limit else f"{body[:limit]}…"
    return textwrap.indent(snippet, prefix="  ")


def run_health_check() -> None:
    _print_heading("GET /health")
    status, body = _get("/health")
    print(f"Status: {status}")
    print("Response:\n" + _summarise(body))


def run_samples(samples: Iterable[Tuple[str, Dict]]) -> None:
    for path, payload in samples:
        _print_heading(f"POST {path}")
        status, body = _post(path, payload)
        print(f"Status: {status}")
        print("Payload:")
        print(_summarise(json.dumps(payload, indent=2)))
        print("Response:\n" + _summarise(body))


def main() -> None:
    run_health_check()
    run_samples(ASSET_SAMPLES)


if __name__ == "__main__":
    main()
