import json
import os
import sys

from fastapi.testclient import TestClient

from currency_tracker.core.config import Settings
from currency_tracker.main import create_app

"""Smoke run against the real upstream API.

Uses EXCHANGE_API_KEY from the environment. Prints the converter result, a
live rates sample and a history summary so the active tier of the fallback
chain (convert / live / fallback) is visible. Without a key every call ends
in the fallback branch.
"""


def run():
    settings = Settings(history_source="api")
    client = TestClient(create_app(settings_override=settings))

    conversion = client.get(
        "/api/convert", params={"from": "USD", "to": "EUR", "amount": "100"}
    ).json()
    live = client.get("/api/rates/live", params={"base": "USD"})
    history = client.get(
        "/api/history", params={"base": "USD", "target": "EUR", "period": "7d"}
    ).json()

    print(
        json.dumps(
            {
                "conversion": conversion,
                "live_status": live.status_code,
                "live_sample": dict(list((live.json().get("quotes") or {}).items())[:3])
                if live.status_code == 200
                else live.json(),
                "history_source": history.get("source"),
                "history_points": len(history.get("points", [])),
            },
            indent=2,
        )
    )


if __name__ == "__main__":
    sys.path.append(os.getcwd())
    run()
