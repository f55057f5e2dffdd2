"""
Pytest configuration and fixtures
"""
import pytest
from fastapi.testclient import TestClient

from mentor_api.api import http_api
from mentor_api.llm.provider_config import EvaluationVariant, ProviderSettings


class FakeResponse:
    """Minimal stand-in for `requests.Response`."""

    def __init__(self, status_code=200, json_data=None, json_error=False):
        self.status_code = status_code
        self._json_data = json_data
        self._json_error = json_error

    def json(self):
        if self._json_error:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._json_data


class FakeHttp:
    """Records `post` calls and returns a canned response or raises."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, headers=None, json=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


def provider_ok(text="Nice work.", total_tokens=123):
    return {
        "output": [{"content": [{"type": "output_text", "text": text}]}],
        "usage": {"total_tokens": total_tokens},
    }


@pytest.fixture
def settings():
    return ProviderSettings(api_key="sk-test", model="test-model", base_url="https://provider.test/v1")


@pytest.fixture
def variant():
    return EvaluationVariant()


@pytest.fixture
def fake_http():
    return FakeHttp(response=FakeResponse(200, provider_ok()))


@pytest.fixture
def client(settings, variant, fake_http):
    """TestClient with provider settings, variant and transport overridden."""
    app = http_api.app
    app.dependency_overrides[http_api.get_provider_settings] = lambda: settings
    app.dependency_overrides[http_api.get_evaluation_variant] = lambda: variant
    app.dependency_overrides[http_api.get_http_transport] = lambda: fake_http
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
