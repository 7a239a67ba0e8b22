import logging
import math
import time
from typing import Any, Callable, Dict, Optional

import requests

from src.config.settings import API_KEY_ENV_VAR, Settings
from src.models.schemas import WeatherPayload

logger = logging.getLogger(__name__)

DEFAULT_ICON = "01d"
GENERIC_UPSTREAM_ERROR = "Failed to fetch weather."
UNEXPECTED_ERROR = "Unexpected server error fetching weather."
MISSING_KEY_ERROR = f"Server is missing OpenWeather API key. Set {API_KEY_ENV_VAR} in your environment."
GENERIC_CONFIG_ERROR = "Server configuration error."

MS_TO_KMH = 3.6


class WeatherServiceError(Exception):
    """Base error carrying the HTTP status the handler should answer with."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class MissingCredentialError(WeatherServiceError):
    status_code = 500


class UpstreamError(WeatherServiceError):
    """The provider answered with a non-2xx status."""


def _to_number(value: Any, default: float = 0.0) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return number


def _round(value: float) -> int:
    # half-up, so 2.5 -> 3 and -2.5 -> -2
    if not math.isfinite(value):
        return 0
    return int(math.floor(value + 0.5))


def _section(data: Dict, key: str) -> Dict:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _text(value: Any, default: str) -> str:
    return default if value is None else str(value)


def normalize_payload(data: Any, city: str, now: Callable[[], float] = time.time) -> WeatherPayload:
    """
    Reshape an OpenWeatherMap current-weather document into a WeatherPayload.

    Missing or non-numeric numbers become 0, except ``dt`` which falls back
    to the current time when the provider leaves it out.
    """
    if not isinstance(data, dict):
        data = {}

    main = _section(data, "main")
    sys_info = _section(data, "sys")
    wind = _section(data, "wind")
    conditions = data.get("weather")
    first = conditions[0] if isinstance(conditions, list) and conditions and isinstance(conditions[0], dict) else {}

    raw_dt = data.get("dt")
    dt = int(now()) if raw_dt is None else _round(_to_number(raw_dt))

    return WeatherPayload(
        city=_text(data.get("name"), city),
        country=_text(sys_info.get("country"), ""),
        temp_c=_round(_to_number(main.get("temp"))),
        feels_c=_round(_to_number(main.get("feels_like"))),
        condition=_text(first.get("main"), ""),
        description=_text(first.get("description"), ""),
        icon=_text(first.get("icon"), DEFAULT_ICON),
        humidity=_round(_to_number(main.get("humidity"))),
        wind_kmh=_round(_to_number(wind.get("speed")) * MS_TO_KMH),
        sunrise=_round(_to_number(sys_info.get("sunrise"))),
        sunset=_round(_to_number(sys_info.get("sunset"))),
        timezone=_round(_to_number(data.get("timezone"))),
        dt=dt,
    )


def extract_error_message(response) -> str:
    """Pull the provider's ``message`` out of an error body, if it has one."""
    try:
        body = response.json()
    except ValueError:
        return GENERIC_UPSTREAM_ERROR
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return GENERIC_UPSTREAM_ERROR


class WeatherService:
    def __init__(self, settings: Settings):
        self.settings = settings
        self.api_key = settings.weather_api_key
        self.base_url = settings.weather_api_url.rstrip("/")
        self.timeout = settings.weather_timeout

    def get_current_weather(self, city: str) -> WeatherPayload:
        """Fetch current conditions for a city from OpenWeatherMap."""
        if not self.api_key:
            logger.error(f"{API_KEY_ENV_VAR} is not configured; refusing weather lookup")
            message = MISSING_KEY_ERROR if self.settings.expose_config_errors else GENERIC_CONFIG_ERROR
            raise MissingCredentialError(message)

        url = f"{self.base_url}/weather"
        params = {
            "q": city,
            "appid": self.api_key,
            "units": "metric"
        }

        logger.info(f"Fetching weather data for {city}")

        with requests.get(url, params=params, timeout=self.timeout) as response:
            if not 200 <= response.status_code < 300:
                message = extract_error_message(response)
                logger.warning(f"Provider rejected weather lookup for {city}: HTTP {response.status_code} {message}")
                raise UpstreamError(message, response.status_code)

            data = response.json()

        payload = normalize_payload(data, city)
        logger.info(f"Weather data fetched successfully for {payload.city}, temperature: {payload.temp_c}°C")
        return payload
