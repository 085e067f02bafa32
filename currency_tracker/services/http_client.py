from __future__ import annotations

"""Lightweight HTTP client util for upstream JSON APIs.

Uses stdlib urllib; one attempt per call, bounded only by the timeout.
"""
import http.client
import json
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Dict, Mapping

from currency_tracker.core.errors import HttpError


def build_url(base_url: str, path: str, params: Mapping[str, Any]) -> str:
    # None values are dropped so an unset access key is simply omitted
    query = urllib.parse.urlencode({k: v for k, v in params.items() if v is not None})
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    return f"{url}?{query}" if query else url


def get_json(url: str, *, timeout: float = 5.0) -> Dict[str, Any]:
    try:
        with urllib.request.urlopen(url, timeout=timeout) as resp:  # nosec B310
            if resp.status >= 400:
                raise HttpError(f"HTTP {resp.status} for {redact(url)}")
            data = resp.read()
            payload = json.loads(data.decode("utf-8"))
    except urllib.error.HTTPError as e:
        raise HttpError(f"API error: {e.code}") from e
    except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as e:
        # OSError covers timeouts and resets; ValueError covers JSON and UTF-8 decode failures
        raise HttpError(f"Failed to fetch JSON from {redact(url)}: {e}") from e
    if not isinstance(payload, dict):
        raise HttpError(f"Unexpected JSON payload from {redact(url)}")
    return payload


def redact(url: str, secret_params: tuple = ("access_key",)) -> str:
    parts = urllib.parse.urlsplit(url)
    if not parts.query:
        return url
    pairs = [
        (k, "***" if k in secret_params else v)
        for k, v in urllib.parse.parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urllib.parse.urlunsplit(parts._replace(query=urllib.parse.urlencode(pairs, safe="*")))
