from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class WeatherQuery(BaseModel):
    city: str = Field(..., description="City name")

    @field_validator('city')
    @classmethod
    def validate_city(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('City is required.')
        return v

    @classmethod
    def from_body(cls, body: Any) -> Optional["WeatherQuery"]:
        """Build a query from a decoded JSON body, or None when no usable city is present."""
        if not isinstance(body, dict) or not isinstance(body.get("city"), str):
            return None
        try:
            return cls(city=body["city"])
        except ValidationError:
            return None


class WeatherPayload(BaseModel):
    """Normalized current conditions returned to the client."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    city: str
    country: str = ""
    temp_c: int = Field(0, alias="tempC")
    feels_c: int = Field(0, alias="feelsC")
    condition: str = ""
    description: str = ""
    icon: str = "01d"
    humidity: int = 0
    wind_kmh: int = Field(0, alias="windKmh")
    sunrise: int = 0
    sunset: int = 0
    timezone: int = 0
    dt: int = 0

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)


class ErrorResponse(BaseModel):
    error: str
