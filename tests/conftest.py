"""Shared fixtures: temporary SQLite log, clean UV cache and a Flask client."""

from unittest.mock import Mock

import pytest
import requests

import analysis_log
import config
import uv_index


@pytest.fixture(autouse=True)
def isolated_storage(tmp_path, monkeypatch):
    """Point the analysis log and CSV exports at a temp dir for every test."""
    monkeypatch.setitem(config.SQLITE_CONFIG, "path", str(tmp_path / "analysis.db"))
    monkeypatch.setattr(analysis_log, "EXPORT_FOLDER", str(tmp_path / "exports"))
    uv_index.uv_cache.clear()
    yield tmp_path
    uv_index.uv_cache.clear()


@pytest.fixture
def client():
    from main import app

    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client


def make_response(payload=None, status_code=200, json_error=False):
    response = Mock()
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status_code} Error")
    else:
        response.raise_for_status.return_value = None
    if json_error:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = payload
    return response


GEO_LISBON = [{"name": "Lisbon", "lat": 38.7077, "lon": -9.1366, "country": "PT"}]
WEATHER_LISBON = {
    "main": {"temp": 24.6},
    "weather": [{"description": "clear sky", "icon": "01d"}],
    "timezone": 3600,
}


def provider(geo=None, weather=None, uv=None, overrides=None):
    """Build a requests.get side effect that answers per OpenWeather endpoint."""
    responses = {
        "/geo/1.0/direct": make_response(GEO_LISBON if geo is None else geo),
        "/data/2.5/weather": make_response(WEATHER_LISBON if weather is None else weather),
        "/data/2.5/uvi": make_response({"value": 6.4} if uv is None else uv),
    }
    responses.update(overrides or {})

    def fake_get(url, params=None, timeout=None):
        for path, response in responses.items():
            if url.endswith(path):
                return response
        raise AssertionError(f"unexpected URL {url}")

    return fake_get


@pytest.fixture
def fake_provider():
    return provider


@pytest.fixture
def http_response():
    return make_response
