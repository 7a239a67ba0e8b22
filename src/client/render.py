"""Pure presentation helpers for a WeatherPayload."""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional

from src.models.schemas import WeatherPayload

ICON_URL = "https://openweathermap.org/img/wn/{icon}@4x.png"

WARM = "warm"
NEUTRAL = "neutral"
SLATE = "slate"
STONE = "stone"
NEUTRAL_LIGHT = "neutral-light"
GRAY = "gray"
DEFAULT = "default"

# checked in order, first hit wins
THEME_RULES = (
    (WARM, ("clear",)),
    (NEUTRAL, ("cloud",)),
    (SLATE, ("rain", "drizzle")),
    (STONE, ("thunder",)),
    (NEUTRAL_LIGHT, ("snow",)),
    (GRAY, ("mist", "fog", "haze", "smoke")),
)


@dataclass(frozen=True)
class Palette:
    name: str
    styles: Dict[str, str]

    def style_for(self, theme: str) -> str:
        return self.styles.get(theme, self.styles[DEFAULT])


GRADIENT_PALETTE = Palette(
    name="gradient",
    styles={
        WARM: "bg-gradient-to-br from-yellow-50 to-amber-100",
        NEUTRAL: "bg-gradient-to-br from-zinc-100 to-zinc-300",
        SLATE: "bg-gradient-to-br from-slate-200 to-slate-400",
        STONE: "bg-gradient-to-br from-stone-300 to-stone-500",
        NEUTRAL_LIGHT: "bg-gradient-to-br from-neutral-100 to-neutral-300",
        GRAY: "bg-gradient-to-br from-gray-100 to-gray-300",
        DEFAULT: "bg-gradient-to-br from-gray-50 to-gray-200",
    },
)

PLAIN_PALETTE = Palette(
    name="plain",
    styles={
        WARM: "yellow",
        NEUTRAL: "white",
        SLATE: "blue",
        STONE: "magenta",
        NEUTRAL_LIGHT: "bright_white",
        GRAY: "bright_black",
        DEFAULT: "default",
    },
)

PALETTES = {p.name: p for p in (GRADIENT_PALETTE, PLAIN_PALETTE)}


def select_theme(condition: Optional[str]) -> str:
    c = (condition or "").lower()
    for theme, keywords in THEME_RULES:
        if any(k in c for k in keywords):
            return theme
    return DEFAULT


def background_for(condition: Optional[str], palette: Palette = GRADIENT_PALETTE) -> str:
    return palette.style_for(select_theme(condition))


def _shifted(unix_seconds: int, offset_seconds: int) -> datetime:
    # the offset is applied to the instant, which is then read as UTC wall-clock time
    return datetime.fromtimestamp(unix_seconds + offset_seconds, tz=timezone.utc)


def format_local_datetime(unix_seconds: int, offset_seconds: int) -> str:
    """Weekday, date and 24-hour time at the location, e.g. ``Thu, Jan 01, 1970, 01:25``."""
    return _shifted(unix_seconds, offset_seconds).strftime("%a, %b %d, %Y, %H:%M")


def format_local_time(unix_seconds: int, offset_seconds: int) -> str:
    return _shifted(unix_seconds, offset_seconds).strftime("%H:%M")


def icon_url(icon: str) -> str:
    return ICON_URL.format(icon=icon)


def render_weather_card(weather: WeatherPayload) -> str:
    """Format a payload into a readable text card."""
    lines = [
        f"{weather.city} ({weather.country or '—'})",
        f"Local time: {format_local_datetime(weather.dt, weather.timezone)}",
        "",
        f"{weather.condition or '—'}",
    ]
    if weather.description:
        lines.append(weather.description.capitalize())
    lines += [
        "",
        f"Temperature: {weather.temp_c}°C",
        f"Feels like: {weather.feels_c}°C",
        f"Humidity: {weather.humidity}%",
        f"Wind: {weather.wind_kmh} km/h",
        f"Sunrise: {format_local_time(weather.sunrise, weather.timezone)}",
        f"Sunset: {format_local_time(weather.sunset, weather.timezone)}",
    ]
    return "\n".join(lines)
