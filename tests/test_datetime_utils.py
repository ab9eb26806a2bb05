import pytest
from datetime import datetime, timedelta, timezone

from app.core.datetime_utils import expand_two_digit_year, parse_date_token, resolve_date, utc_now

NOW = datetime(2025, 8, 10, 9, 30)

@pytest.mark.parametrize("token, expected", [
    ("09-08-25", datetime(2025, 8, 9)),
    ("9-8-2025", datetime(2025, 8, 9)),
    ("09-Aug-25", datetime(2025, 8, 9)),
    ("31-dec-1999", datetime(1999, 12, 31)),
    ("01-01-49", datetime(2049, 1, 1)),
    ("01-01-50", datetime(1950, 1, 1)),
])
def test_parse_date_token(token, expected):
    assert parse_date_token(token) == expected

@pytest.mark.parametrize("token", [
    None,
    "",
    "20Dec24",
    "09-",
    "31-02-25",
    "09-13-25",
    "09-Foo-25",
    "09-08-025",
])
def test_unusable_tokens(token):
    assert parse_date_token(token) is None

def test_century_inference():
    assert expand_two_digit_year(0) == 2000
    assert expand_two_digit_year(49) == 2049
    assert expand_two_digit_year(99) == 1999
    assert expand_two_digit_year(2024) == 2024

def test_resolve_date_uses_first_usable_candidate():
    assert resolve_date(["07-08-25", "05-01-24"], now=NOW) == datetime(2025, 8, 7)
    assert resolve_date([None, "05-01-24"], now=NOW) == datetime(2024, 1, 5)

def test_resolve_date_defaults_to_now():
    assert resolve_date([None], now=NOW) == NOW
    assert resolve_date(["20Dec24"], now=NOW) == NOW

def test_resolve_date_without_injected_now():
    before = datetime.now()
    resolved = resolve_date([])

    assert before <= resolved <= datetime.now()

def test_utc_now_is_naive_utc():
    now = utc_now()

    assert now.tzinfo is None
    assert abs(now - datetime.now(timezone.utc).replace(tzinfo=None)) < timedelta(seconds=5)
