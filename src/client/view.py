import logging
from dataclasses import dataclass
from typing import Optional

import requests

from src.models.schemas import WeatherPayload

logger = logging.getLogger(__name__)

EMPTY_CITY_ERROR = "Please enter a city name."
FETCH_FAILED_ERROR = "Failed to fetch weather."
CITY_NOT_FOUND_ERROR = "City not found. Please check the spelling and try again."
UNEXPECTED_ERROR = "Unexpected error. Please try again."

WEATHER_ENDPOINT = "/api/weather"


class WeatherLookupError(Exception):
    """Handler answered with an error; the message is ready for display."""


@dataclass
class ViewState:
    city: str = ""
    loading: bool = False
    error: Optional[str] = None
    data: Optional[WeatherPayload] = None


class WeatherView:
    """
    Client-side search form for current weather.

    ``http`` is anything with a requests-style ``post(url, json=...)``;
    a ``requests.Session`` by default, or a FastAPI ``TestClient``.
    """

    def __init__(self, base_url: str = "", http=None, endpoint: str = WEATHER_ENDPOINT):
        self.url = f"{base_url.rstrip('/')}{endpoint}"
        self.http = http if http is not None else requests.Session()
        self.state = ViewState()

    @property
    def can_submit(self) -> bool:
        return not self.state.loading and bool(self.state.city.strip())

    def submit(self, city: Optional[str] = None) -> ViewState:
        if city is not None:
            self.state.city = city

        query = self.state.city.strip()
        if not query:
            self.state.error = EMPTY_CITY_ERROR
            return self.state

        self.state.loading = True
        self.state.error = None
        self.state.data = None

        try:
            self.state.data = self._lookup(query)
        except Exception as e:
            logger.warning(f"Weather lookup for {query} failed: {e}")
            self.state.error = str(e) or UNEXPECTED_ERROR
        finally:
            self.state.loading = False

        return self.state

    def _lookup(self, city: str) -> WeatherPayload:
        response = self.http.post(self.url, json={"city": city})
        try:
            if not 200 <= response.status_code < 300:
                raise WeatherLookupError(self._error_message(response))
            return WeatherPayload.model_validate(response.json())
        finally:
            response.close()

    @staticmethod
    def _error_message(response) -> str:
        if response.status_code == 404:
            return CITY_NOT_FOUND_ERROR
        try:
            body = response.json()
        except ValueError:
            return FETCH_FAILED_ERROR
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return FETCH_FAILED_ERROR
