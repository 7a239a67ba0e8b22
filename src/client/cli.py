import argparse
import os
import sys
from typing import List, Optional

import requests
from dotenv import load_dotenv

from src.client.render import PALETTES, background_for, icon_url, render_weather_card
from src.client.view import WeatherView
from src.config.logging import setup_logging


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(".env.local")

    parser = argparse.ArgumentParser(prog="weather-now", description="Show current weather for a city.")
    parser.add_argument("city", nargs="*", help="City name, e.g. 'New York'")
    parser.add_argument("--url", default=os.getenv("WEATHER_NOW_URL", "http://localhost:8000"),
                        help="Base URL of the weather server")
    parser.add_argument("--palette", choices=sorted(PALETTES), default="plain")
    args = parser.parse_args(argv)

    setup_logging(os.getenv("LOG_LEVEL", "WARNING"))

    with requests.Session() as http:
        view = WeatherView(base_url=args.url, http=http)
        state = view.submit(" ".join(args.city))

    if state.error:
        print(f"Oops: {state.error}", file=sys.stderr)
        return 1

    print(render_weather_card(state.data))
    print(f"Icon: {icon_url(state.data.icon)}")
    print(f"Theme: {background_for(state.data.condition, PALETTES[args.palette])}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
