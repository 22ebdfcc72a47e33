"""Command line entry point: serve the weather API or show a city's weather."""
import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from app import create_app
from client_storage import ClientStorage
from config import Settings, load_settings
from weather_client import WeatherClient, WeatherSession, alert_severity, condition_category


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("garden-weather")
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--verbose", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the weather HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    show = subparsers.add_parser("show", help="Fetch and print weather for a city")
    show.add_argument("--city", default=None, help="City name (defaults to the last one used)")
    show.add_argument("--mock", action="store_true", help="Use simulated weather data")
    show.add_argument("--api-key", default=None, help="Save an OpenWeather API key and use live data")
    show.add_argument("--api-url", default=None, help="Base URL of the weather API")
    show.add_argument("--storage", default=None, help="Path of the client storage file")
    return parser.parse_args(argv)


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def format_session(session: WeatherSession) -> str:
    # A failed fetch leaves the previous city's weather in place
    if session.weather is None or session.error:
        return f"No weather for {session.city}: {session.error or 'unavailable'}"

    weather = session.weather
    source = "simulated" if weather.simulated else "live"
    lines = [
        f"{weather.location} ({source}, {weather.season})",
        f"  {weather.temperature:.1f}°C  {weather.condition} [{condition_category(weather.condition)}]"
        f" - {weather.description}",
        f"  Humidity {weather.humidity}%  Wind {weather.wind_speed:.1f}m/s  Rain {weather.rainfall:.1f}mm",
        f"  Tip: {session.tip}",
    ]

    alerts = session.relevant_alerts()
    if alerts:
        lines.append("Alerts:")
        for alert in alerts:
            lines.append(f"  [{alert_severity(alert.event)}] {alert.event} ({alert.sender})")

    if session.forecast is not None:
        lines.append("Forecast:")
        for day in session.forecast.forecast:
            lines.append(f"  {day.date[:10]}  {day.temperature:.1f}°C  {day.description}")
    return "\n".join(lines)


def serve(settings: Settings, args: argparse.Namespace) -> None:
    logging.info("Starting weather API on %s:%s", args.host, args.port)
    uvicorn.run(create_app(settings), host=args.host, port=args.port, log_config=None)


def show(settings: Settings, args: argparse.Namespace) -> int:
    storage = ClientStorage(args.storage or settings.storage_path)
    client = WeatherClient(
        storage=storage,
        base_url=args.api_url or settings.api_url,
        env_credential=settings.public_api_key,
        default_city=settings.default_city,
        timeout=settings.timeout,
    )
    try:
        session = client.start()
        if args.api_key:
            client.submit_credential(args.api_key)
        if args.mock:
            client.toggle_simulated(True)
        if args.city:
            client.select_city(args.city)
        print(format_session(session))
        return 1 if session.error else 0
    finally:
        client.close()


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    settings = load_settings()

    if args.command == "serve":
        serve(settings, args)
    else:
        sys.exit(show(settings, args))


if __name__ == "__main__":
    main()
