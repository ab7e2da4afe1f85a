import io
import logging
import math
import threading

import pytest

try:  # pragma: no cover - compatibility for local vs packaged imports
    from asset_ledger.app.config import get_settings, reset_settings
    from asset_ledger.app.errors import ValidationError
    from asset_ledger.app.logging_config import configure_logging, get_logger, reset_logging
    from asset_ledger.app.services.formatting import format_amount, format_currency
except ModuleNotFoundError:  # pragma: no cover
    from app.config import get_settings, reset_settings
    from app.errors import ValidationError
    from app.logging_config import configure_logging, get_logger, reset_logging
    from app.services.formatting import format_amount, format_currency


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    for name in ("ASSET_LEDGER_CURRENCY_SYMBOL", "ASSET_LEDGER_REDUCING_BALANCE_RATE", "ASSET_LEDGER_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.mark.parametrize(
    "amount, expected",
    [
        (0, "K 0.00"),
        (1234.5, "K 1,234.50"),
        (1234567.891, "K 1,234,567.89"),
        (-1500, "K -1,500.00"),
        (-0.001, "K 0.00"),
    ],
)
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected


def test_format_currency_with_explicit_symbol():
    assert format_currency(99.999, "$") == "$ 100.00"


def test_format_currency_uses_configured_symbol(monkeypatch):
    monkeypatch.setenv("ASSET_LEDGER_CURRENCY_SYMBOL", "ZMW")
    reset_settings()
    assert format_currency(10) == "ZMW 10.00"


@pytest.mark.parametrize("amount", [math.inf, -math.inf, math.nan])
def test_format_currency_rejects_non_finite(amount):
    with pytest.raises(ValidationError):
        format_currency(amount)


def test_format_amount_has_no_grouping():
    assert format_amount(1234567.891) == "1234567.89"
    assert format_amount(-0.004) == "0.00"


def test_settings_defaults_and_environment(monkeypatch):
    settings = get_settings()
    assert settings.currency_symbol == "K"
    assert settings.reducing_balance_rate == 0.20
    assert get_settings() is settings

    monkeypatch.setenv("ASSET_LEDGER_REDUCING_BALANCE_RATE", "0.3")
    reset_settings()
    assert get_settings().reducing_balance_rate == 0.3


def test_configure_logging_renders_extra_fields():
    reset_logging()
    stream = io.StringIO()
    try:
        configure_logging(level=logging.DEBUG, stream=stream)
        get_logger("tests").debug("schedule_generated", extra={"asset_id": "a-1", "rows": 5})
        output = stream.getvalue()
    finally:
        reset_logging()

    assert "asset_ledger.tests schedule_generated" in output
    assert "asset_id=a-1" in output
    assert "rows=5" in output


def test_concurrent_configure_and_reset_leave_consistent_state():
    reset_logging()
    logger = logging.getLogger("asset_ledger")

    def configure():
        configure_logging(stream=io.StringIO())

    def reconfigure():
        reset_logging()
        configure_logging(stream=io.StringIO())

    try:
        threads = [threading.Thread(target=configure if i % 2 else reconfigure) for i in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        # Every interleaving ends configured exactly once.
        assert len(logger.handlers) == 1
        assert logger.propagate is False
    finally:
        reset_logging()
    assert logger.handlers == []
