"""HTTP API exposing the weather resolver."""
import logging
from typing import Optional

from fastapi import FastAPI, Header, Query
from fastapi.responses import JSONResponse

from config import Settings, load_settings
from weather_service import WeatherResolver, resolve_credential

CITY_REQUIRED = "City name is required"


def _flag(value: Optional[str]) -> bool:
    return value == "true"


def create_app(settings: Optional[Settings] = None, resolver: Optional[WeatherResolver] = None) -> FastAPI:
    settings = settings or load_settings()
    resolver = resolver or WeatherResolver(lang=settings.lang, timeout=settings.timeout)

    app = FastAPI(title="Garden Weather", version="1.0.0")

    @app.get("/weather")
    def get_weather(
        city: Optional[str] = Query(default=None),
        forecast: Optional[str] = Query(default=None),
        mock: Optional[str] = Query(default=None),
        x_api_key: Optional[str] = Header(default=None, alias="X-API-Key"),
    ) -> JSONResponse:
        want_forecast = _flag(forecast)
        use_mock = _flag(mock)
        logging.info("Weather API called with: city=%r forecast=%s mock=%s", city, want_forecast, use_mock)

        if not city or not city.strip():
            return JSONResponse({"error": CITY_REQUIRED}, status_code=400)

        snapshot = resolver.resolve(
            city.strip(),
            forecast=want_forecast,
            credential=resolve_credential(settings, x_api_key),
            force_simulated=use_mock,
        )
        return JSONResponse(snapshot.to_dict())

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app
