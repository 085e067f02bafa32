import random
from datetime import date, timedelta

import pytest

from currency_tracker.services.history import (
    HistoryService,
    generate_mock_series,
    parse_timeframe_payload,
)

from .conftest import FakeRateClient

TODAY = date(2024, 5, 31)


@pytest.mark.parametrize("period, days", [("7d", 7), ("30d", 30)])
def test_mock_series_shape(period, days):
    series = generate_mock_series("usd", "eur", period, today=TODAY, rng=random.Random(1))
    assert series.base_currency == "USD"
    assert series.target_currency == "EUR"
    assert series.source == "mock"
    assert len(series.points) == days + 1
    assert series.points[0].date == TODAY - timedelta(days=days)
    assert series.points[-1].date == TODAY
    dates = [p.date for p in series.points]
    assert dates == sorted(dates)
    for p in series.points:
        assert p.rate == round(p.rate, 4)


def test_mock_series_first_point_is_start_value():
    rng = random.Random(42)
    expected_start = random.Random(42).random() * 0.5 + 0.8
    series = generate_mock_series("USD", "EUR", "7d", today=TODAY, rng=rng)
    # i == days on the first iteration, so the fluctuation term is zero
    assert series.points[0].rate == round(expected_start, 4)
    assert 0.8 <= series.points[0].rate <= 1.3


def test_mock_series_is_deterministic_with_seed():
    a = generate_mock_series("USD", "EUR", "30d", today=TODAY, rng=random.Random(7))
    b = generate_mock_series("USD", "EUR", "30d", today=TODAY, rng=random.Random(7))
    assert a.points == b.points


def test_unknown_period():
    with pytest.raises(ValueError):
        generate_mock_series("USD", "EUR", "90d", today=TODAY)


def test_caption():
    series = generate_mock_series("USD", "TRY", "30d", today=TODAY, rng=random.Random(0))
    assert series.caption == (
        "Showing historical exchange rates for 1 USD to TRY over the past 30 days"
    )


def test_parse_timeframe_payload_sorts_and_skips():
    payload = {
        "success": True,
        "quotes": {
            "2024-05-02": {"USDEUR": 0.93},
            "2024-05-01": {"USDEUR": 0.92},
            "2024-05-03": {"USDGBP": 0.8},
        },
    }
    points = parse_timeframe_payload(payload, "USD", "EUR")
    assert [(p.date.isoformat(), p.rate) for p in points] == [
        ("2024-05-01", 0.92),
        ("2024-05-02", 0.93),
    ]


def test_parse_timeframe_payload_skips_non_object_entries():
    payload = {
        "success": True,
        "quotes": {
            "2024-05-01": None,
            "2024-05-02": "bad",
            "2024-05-03": {"USDEUR": 0.9},
            "2024-05-04": [0.91],
        },
    }
    points = parse_timeframe_payload(payload, "USD", "EUR")
    assert [(p.date.isoformat(), p.rate) for p in points] == [("2024-05-03", 0.9)]


def test_parse_timeframe_payload_non_object_quotes():
    assert parse_timeframe_payload({"success": True, "quotes": ["2024-05-01"]}, "USD", "EUR") == []


def test_service_uses_mock_by_default():
    client = FakeRateClient(timeframe={"success": True, "quotes": {}})
    series = HistoryService(client, rng=random.Random(3)).get_series("USD", "EUR", "7d", today=TODAY)
    assert series.source == "mock"
    assert client.calls == []


def test_service_api_source():
    timeframe = {
        "success": True,
        "quotes": {"2024-05-30": {"USDEUR": 0.92}, "2024-05-31": {"USDEUR": 0.93}},
    }
    client = FakeRateClient(timeframe=timeframe)
    series = HistoryService(client, source="api").get_series("USD", "EUR", "7d", today=TODAY)
    assert series.source == "api"
    assert [p.rate for p in series.points] == [0.92, 0.93]
    assert client.calls == [("timeframe", "USD", "EUR", TODAY - timedelta(days=7), TODAY)]


def test_service_api_failure_falls_back_to_mock():
    client = FakeRateClient(fail_timeframe=True)
    series = HistoryService(client, source="api").get_series("USD", "EUR", "30d", today=TODAY)
    assert series.source == "mock"
    assert len(series.points) == 31


def test_service_empty_api_quotes_falls_back_to_mock():
    client = FakeRateClient(timeframe={"success": True, "quotes": {}})
    series = HistoryService(client, source="api").get_series("USD", "EUR", "7d", today=TODAY)
    assert series.source == "mock"


def test_service_malformed_api_quotes_falls_back_to_mock():
    timeframe = {"success": True, "quotes": {"2024-05-30": None, "2024-05-31": "n/a"}}
    client = FakeRateClient(timeframe=timeframe)
    series = HistoryService(client, source="api").get_series("USD", "EUR", "7d", today=TODAY)
    assert series.source == "mock"
    assert len(series.points) == 8


def test_service_rejects_unknown_currency():
    with pytest.raises(ValueError):
        HistoryService(FakeRateClient()).get_series("USD", "CHF", "7d")
