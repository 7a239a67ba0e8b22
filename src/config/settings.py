import os
import logging
from typing import Optional

logger = logging.getLogger(__name__)

API_KEY_ENV_VAR = "OPENWEATHER_API_KEY"

class Settings:
    def __init__(self):
        self.api_host = os.getenv("API_HOST", "0.0.0.0")
        self.api_port = int(os.getenv("API_PORT", "8000"))
        self.debug = os.getenv("DEBUG", "false").lower() == "true"
        self.log_level = os.getenv("LOG_LEVEL", "INFO")

        self.weather_api_url = os.getenv("OPENWEATHER_API_URL", "https://api.openweathermap.org/data/2.5")
        self.weather_timeout = self._get_timeout()
        self.expose_config_errors = os.getenv("EXPOSE_CONFIG_ERRORS", "true").lower() == "true"

        self._load_secrets()

    def _get_timeout(self) -> Optional[float]:
        """Outbound timeout in seconds; None leaves it to the transport."""
        raw = os.getenv("WEATHER_TIMEOUT")
        if not raw:
            return None
        try:
            return float(raw)
        except ValueError:
            logger.warning(f"Ignoring invalid WEATHER_TIMEOUT value: {raw!r}")
            return None

    def _load_secrets(self):
        """Load the OpenWeather key from the environment or Parameter Store."""
        self.weather_api_key = os.getenv(API_KEY_ENV_VAR, "")
        if self.weather_api_key:
            return

        if os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION"):
            try:
                from .parameter_store import parameter_store
                self.weather_api_key = parameter_store.get_parameter("openweather-key") or ""
                if self.weather_api_key:
                    logger.info("Using OpenWeather API key from Parameter Store")
            except Exception as e:
                logger.warning(f"Parameter Store not available: {e}")

    def validate(self):
        """
        Report whether the provider credential is configured.
        A missing key is not fatal at startup; each request checks it again.
        """
        return bool(self.weather_api_key)

settings = Settings()


def get_settings() -> Settings:
    return settings
