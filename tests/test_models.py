import logging

import pytest

from log_utils import get_logger
from models import format_price, parse_price


@pytest.mark.parametrize("price, text", [
    (10.0, "10"),
    (9.5, "9.5"),
    (12345.67, "12345.67"),
    (1500000.0, "1500000"),
    (0.1, "0.1"),
])
def test_format_price_keeps_every_digit(price, text):
    assert format_price(price) == text
    assert parse_price(text) == price


@pytest.mark.parametrize("raw", ["ten", "", None, "nan", "inf"])
def test_unparsable_price_is_zero(raw):
    assert parse_price(raw) == 0.0


def test_bad_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("SUBMGR_LOG_LEVEL", "LOUD")
    assert get_logger("submgr.test.badlevel").level == logging.INFO


def test_explicit_log_level(monkeypatch):
    monkeypatch.delenv("SUBMGR_LOG_LEVEL", raising=False)
    assert get_logger("submgr.test.debug", "debug").level == logging.DEBUG
