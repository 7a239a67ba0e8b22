from fastapi import FastAPI, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from contextlib import asynccontextmanager
from datetime import datetime
from src.config.logging import setup_logging
from src.config.settings import Settings, get_settings, settings
from src.models.schemas import ErrorResponse, WeatherQuery
from src.services.weather import UNEXPECTED_ERROR, MissingCredentialError, UpstreamError, WeatherService
from prometheus_fastapi_instrumentator import Instrumentator
from prometheus_client import Counter
from typing import Any
import time

# Setup logging
logger = setup_logging()

@asynccontextmanager
async def lifespan(app: FastAPI) -> Any:
    """Application lifespan handler for startup and shutdown events."""
    if settings.validate():
        logger.info("OpenWeather API key configured")
    else:
        logger.warning("OpenWeather API key not found; weather lookups will fail until it is set")

    yield

    logger.info("Application shutting down...")

app = FastAPI(title="Weather Now", version="1.0.0", lifespan=lifespan)

# Prometheus instrumentation
instrumentator = Instrumentator(
    should_group_status_codes=False,
    should_ignore_untemplated=True,
    should_respect_env_var=True,
    should_instrument_requests_inprogress=True,
    excluded_handlers=["/metrics"],
    env_var_name="ENABLE_METRICS",
)
instrumentator.instrument(app).expose(app)

# Custom business metrics
weather_requests_total = Counter(
    'weather_requests_total',
    'Total weather lookups by outcome',
    ['outcome']
)


def get_weather_service(config: Settings = Depends(get_settings)) -> WeatherService:
    return WeatherService(config)


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(ErrorResponse(error=message).model_dump(), status_code=status_code)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start_time) * 1000
    logger.info(f"HTTP {request.method} {request.url.path} -> {response.status_code} ({duration_ms:.2f} ms)")
    return response

@app.get("/")
async def root():
    logger.info("Root endpoint accessed")
    return {"message": "Weather Now", "status": "running"}

@app.get("/health")
async def health(config: Settings = Depends(get_settings)):
    logger.info("Health check requested")
    return {
        "status": "healthy",
        "weather_api_configured": config.validate(),
        "timestamp": datetime.now().isoformat()
    }

@app.post("/api/weather")
async def get_weather(request: Request, weather_service: WeatherService = Depends(get_weather_service)):
    try:
        try:
            body = await request.json()
        except ValueError:
            body = None

        query = WeatherQuery.from_body(body)
        if query is None:
            weather_requests_total.labels(outcome='invalid_input').inc()
            logger.warning("Weather request rejected: no city supplied")
            return error_response("City is required.", 400)

        logger.info(f"Weather API requested for city: {query.city}")
        # blocking I/O, must not run on the event loop
        payload = await run_in_threadpool(weather_service.get_current_weather, query.city)

        weather_requests_total.labels(outcome='success').inc()
        logger.info(f"Weather API completed successfully for {query.city}")
        return JSONResponse(payload.to_json(), status_code=200)

    except MissingCredentialError as e:
        weather_requests_total.labels(outcome='config_error').inc()
        return error_response(e.message, e.status_code)
    except UpstreamError as e:
        weather_requests_total.labels(outcome='upstream_error').inc()
        return error_response(e.message, e.status_code)
    except Exception as e:
        weather_requests_total.labels(outcome='exception').inc()
        logger.exception(f"Weather API error: {str(e)}")
        return error_response(UNEXPECTED_ERROR, 500)

if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server on {settings.api_host}:{settings.api_port}, debug={settings.debug}")
    uvicorn.run("src.api.main:app",
               host=settings.api_host,
               port=settings.api_port,
               reload=settings.debug)
