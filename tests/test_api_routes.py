import pytest

from currency_tracker.models.constants import FALLBACK_WARNING

from .conftest import FakeRateClient


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_root_redirects_to_ui(client):
    resp = client.get("/", follow_redirects=False)
    assert resp.status_code == 307
    assert resp.headers["location"] == "/ui"


def test_unknown_route_returns_not_found_shape(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


def test_request_id_header(client):
    resp = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert resp.headers["X-Request-ID"] == "abc-123"


def test_dashboard_json(client):
    data = client.get("/api/dashboard").json()
    assert data["base_currency"] == "USD"
    assert len(data["rows"]) == 8
    assert data["favorites_count"] == 3
    assert data["empty_message"] is None


def test_dashboard_search(client):
    data = client.get("/api/dashboard", params={"q": "pound"}).json()
    assert [r["code"] for r in data["rows"]] == ["GBP"]


def test_dashboard_no_match_message(client):
    data = client.get("/api/dashboard", params={"q": "xyz"}).json()
    assert data["rows"] == []
    assert data["empty_message"] == "No currencies found matching your search."


def test_dashboard_bad_view(client):
    resp = client.get("/api/dashboard", params={"view": "recent"})
    assert resp.status_code == 400


def test_toggle_favorite_via_api(client):
    resp = client.post("/api/dashboard/favorites/cad")
    assert resp.status_code == 200
    assert resp.json() == {
        "code": "CAD",
        "name": "Canadian Dollar",
        "rate": 1.36,
        "change": -0.3,
        "is_favorite": True,
    }
    favs = client.get("/api/dashboard", params={"view": "favorites"}).json()
    assert [r["code"] for r in favs["rows"]] == ["EUR", "GBP", "CAD", "TRY"]


def test_toggle_unknown_favorite(client):
    resp = client.post("/api/dashboard/favorites/XYZ")
    assert resp.status_code == 404


def test_live_rates_pass_through(client):
    data = client.get("/api/rates/live", params={"base": "usd"}).json()
    assert data["success"] is True
    assert data["quotes"]["USDEUR"] == 0.92


def test_live_rates_failure_is_bad_gateway(make_client, failing_client):
    resp = make_client(failing_client).get("/api/rates/live")
    assert resp.status_code == 502


def test_convert_live_tier(client):
    data = client.get("/api/convert", params={"from": "USD", "to": "EUR", "amount": "10"}).json()
    assert data["source"] == "live"
    assert data["rate"] == 0.92
    assert data["result"] == pytest.approx(9.2)


def test_convert_direct_tier(make_client):
    c = make_client(FakeRateClient(convert_rate=0.5))
    data = c.get("/api/convert", params={"from": "GBP", "to": "USD", "amount": "4"}).json()
    assert data["source"] == "convert"
    assert data["result"] == pytest.approx(2.0)


def test_convert_fallback(make_client, failing_client):
    data = make_client(failing_client).get(
        "/api/convert", params={"from": "USD", "to": "EUR", "amount": "2"}
    ).json()
    assert data["rate"] == 1.08
    assert data["result"] == pytest.approx(2.16)
    assert data["error"] == FALLBACK_WARNING


def test_convert_fallback_rate_is_configurable(make_client, failing_client):
    c = make_client(failing_client, fallback_rate=2.0)
    data = c.get("/api/convert", params={"amount": "3"}).json()
    assert data["result"] == pytest.approx(6.0)


@pytest.mark.parametrize("amount", ["-1", "abc", "1e3", ""])
def test_convert_rejects_bad_amount(client, amount):
    resp = client.get("/api/convert", params={"amount": amount})
    assert resp.status_code == 400


def test_convert_rejects_unknown_currency(client):
    resp = client.get("/api/convert", params={"from": "XXX", "to": "EUR"})
    assert resp.status_code == 400


def test_history_mock(client):
    data = client.get("/api/history", params={"base": "USD", "target": "TRY", "period": "30d"}).json()
    assert data["source"] == "mock"
    assert data["days"] == 30
    assert len(data["points"]) == 31


def test_history_bad_period(client):
    resp = client.get("/api/history", params={"period": "1y"})
    assert resp.status_code == 400


def test_history_api_source(make_client):
    timeframe = {"success": True, "quotes": {"2024-01-01": {"USDEUR": 0.9}}}
    c = make_client(FakeRateClient(timeframe=timeframe), history_source="api")
    data = c.get("/api/history").json()
    assert data["source"] == "api"
    assert data["points"] == [{"date": "2024-01-01", "rate": 0.9}]
