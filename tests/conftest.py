import pytest
from fastapi.testclient import TestClient

from src.api.main import app
from src.config.settings import Settings, get_settings
from src.services import weather as weather_mod


class DummyResponse:
    def __init__(self, status_code: int, json_body=None, invalid_json: bool = False):
        self.status_code = status_code
        self._json = json_body
        self._invalid_json = invalid_json
        self.closed = False

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._json

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


class FakeUpstream:
    """Stands in for requests.get and records every outbound call."""

    def __init__(self):
        self.calls = []
        self.responses = []
        self.error = None

    def respond(self, status_code: int, json_body=None, invalid_json: bool = False) -> DummyResponse:
        response = DummyResponse(status_code, json_body, invalid_json)
        self.responses.append(response)
        return response

    def __call__(self, url, params=None, **kwargs):
        self.calls.append({"url": url, "params": params, **kwargs})
        if self.error is not None:
            raise self.error
        return self.responses[len(self.calls) - 1]


@pytest.fixture
def make_settings(monkeypatch):
    def _make(api_key: str | None = "test-key", **env):
        monkeypatch.delenv("AWS_REGION", raising=False)
        monkeypatch.delenv("AWS_DEFAULT_REGION", raising=False)
        if api_key is None:
            monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)
        else:
            monkeypatch.setenv("OPENWEATHER_API_KEY", api_key)
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return Settings()
    return _make


@pytest.fixture
def upstream(monkeypatch):
    fake = FakeUpstream()
    monkeypatch.setattr(weather_mod.requests, "get", fake)
    return fake


@pytest.fixture
def use_settings():
    def _use(config: Settings):
        app.dependency_overrides[get_settings] = lambda: config
    yield _use
    app.dependency_overrides.pop(get_settings, None)


@pytest.fixture
def client(make_settings, use_settings):
    use_settings(make_settings())
    return TestClient(app)
