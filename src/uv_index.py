# src/uv_index.py
import logging
import math
import re
import time
from datetime import datetime, timedelta, timezone

import requests

from config import OPENWEATHER_CONFIG, UV_CACHE_TTL
from models import CurrentWeather, Location, WeatherReport
from uv_risk import round_half_up

logger = logging.getLogger(__name__)

USER_MESSAGE = "Failed to fetch weather data. Please try again."

# Cache simples (chave=lat_lon, valor=(uv, timestamp))
uv_cache = {}
UV_CACHE_MAX_ENTRIES = 512

APPID_PATTERN = re.compile(r"appid=[^&\s]+")


class WeatherFetchError(Exception):
    """One stage of geocode -> weather -> UV failed; later stages were not run."""

    def __init__(self, stage, detail):
        super().__init__(f"{stage}: {detail}")
        self.stage = stage
        self.detail = detail
        self.user_message = USER_MESSAGE


class LocationNotFound(WeatherFetchError):
    def __init__(self, location):
        super().__init__("geocode", f"location not found: {location!r}")
        self.location = location


def redact(text):
    """Hide the API key that requests puts in error messages (full URL)."""
    return APPID_PATTERN.sub("appid=***", text)


def _store_uv(cache_key, uv_index, now):
    # Remove entradas expiradas e limita o tamanho (mais antigas primeiro)
    for key in [k for k, (_, ts) in uv_cache.items() if now - ts >= UV_CACHE_TTL]:
        del uv_cache[key]
    uv_cache.pop(cache_key, None)
    while len(uv_cache) >= UV_CACHE_MAX_ENTRIES:
        del uv_cache[next(iter(uv_cache))]
    uv_cache[cache_key] = (uv_index, now)


def _get_json(stage, path, params):
    params = dict(params, appid=OPENWEATHER_CONFIG["api_key"])
    url = f"{OPENWEATHER_CONFIG['base_url']}{path}"
    start = time.time()
    try:
        response = requests.get(url, params=params, timeout=OPENWEATHER_CONFIG["timeout"])
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.RequestException as e:
        raise WeatherFetchError(stage, redact(str(e))) from e
    except ValueError as e:
        raise WeatherFetchError(stage, redact(f"invalid JSON: {e}")) from e
    logger.debug("%s took %.2fs", stage, time.time() - start)
    return data


def geocode(location, limit=1):
    """Resolve free text to the provider's best matches (lat, lon, name, country)."""
    data = _get_json("geocode", "/geo/1.0/direct", {"q": location, "limit": limit})
    if not isinstance(data, list):
        raise WeatherFetchError("geocode", "unexpected response")
    try:
        return [
            Location(lat=item["lat"], lon=item["lon"], name=item["name"], country=item.get("country"))
            for item in data
        ]
    except (KeyError, TypeError, ValueError) as e:
        raise WeatherFetchError("geocode", f"malformed match: {e}") from e


def get_current_weather(location: Location) -> CurrentWeather:
    data = _get_json(
        "weather",
        "/data/2.5/weather",
        {"lat": location.lat, "lon": location.lon, "units": "metric"},
    )
    try:
        return CurrentWeather(
            temperature_celsius=round_half_up(float(data["main"]["temp"])),
            description=data["weather"][0]["description"],
            icon=data["weather"][0].get("icon"),
            timezone_offset_seconds=int(data.get("timezone", 0)),
        )
    except (AttributeError, KeyError, IndexError, TypeError, ValueError) as e:
        raise WeatherFetchError("weather", f"missing field: {e}") from e


def get_uv_index(location: Location) -> float:
    """Raw UV index for a resolved location, cached for UV_CACHE_TTL seconds."""
    cache_key = f"{location.lat:.4f}_{location.lon:.4f}"

    if UV_CACHE_TTL > 0 and cache_key in uv_cache:
        cached_uv, cached_time = uv_cache[cache_key]
        if time.time() - cached_time < UV_CACHE_TTL:
            logger.debug("UV cache hit for %s: %s", cache_key, cached_uv)
            return cached_uv
        logger.debug("UV cache expired for %s", cache_key)

    data = _get_json("uv", "/data/2.5/uvi", {"lat": location.lat, "lon": location.lon})
    value = data.get("value") if isinstance(data, dict) else None
    if value is None:
        raise WeatherFetchError("uv", "UV index not found in API response")
    try:
        uv_index = float(value)
    except (TypeError, ValueError) as e:
        raise WeatherFetchError("uv", f"UV index is not a number: {value!r}") from e
    if math.isnan(uv_index) or math.isinf(uv_index) or uv_index < 0:
        raise WeatherFetchError("uv", f"UV index out of range: {value!r}")

    if UV_CACHE_TTL > 0:
        _store_uv(cache_key, uv_index, time.time())
    return uv_index


def fetch_weather_report(location):
    """Geocode -> current weather -> UV index, stopping at the first failure."""
    if not location or not location.strip():
        raise WeatherFetchError("geocode", "empty location")

    matches = geocode(location.strip())
    if not matches:
        raise LocationNotFound(location)
    place = matches[0]

    weather = get_current_weather(place)
    uv_raw = get_uv_index(place)

    local_time = datetime.now(timezone.utc) + timedelta(seconds=weather.timezone_offset_seconds)
    logger.info("Weather for %s, %s: %s C, UV %.2f", place.name, place.country, weather.temperature_celsius, uv_raw)

    return WeatherReport(
        location=place,
        weather=weather,
        uv_index_raw=uv_raw,
        uv_index=round_half_up(uv_raw),
        local_time=local_time,
    )


def suggest_locations(text, limit=5):
    """Autocomplete helper; provider errors give an empty list."""
    if not text or not text.strip():
        return []
    try:
        return geocode(text.strip(), limit=limit)
    except WeatherFetchError as e:
        logger.warning("Location suggestions failed: %s", e)
        return []
