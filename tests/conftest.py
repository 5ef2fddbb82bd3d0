"""
Pytest configuration and shared fixtures for Translator Gateway tests.
"""
import pytest
from fastapi.testclient import TestClient

from translator_gateway.config import AppConfig
from translator_gateway.gateway.base import BaseTranslatorGateway, dictionary_target
from translator_gateway.main import create_app


class FakeGateway(BaseTranslatorGateway):
    """In-memory gateway that records calls and returns canned results."""

    def __init__(self):
        self.calls = []
        self.error = None

    def _record(self, operation, **kwargs):
        self.calls.append((operation, kwargs))
        if self.error is not None:
            raise self.error

    async def list_languages(self):
        self._record("list_languages")
        return {"en": "English", "fr": "French"}

    async def translate(self, text, to_language, from_language="en"):
        self._record("translate", text=text, to_language=to_language, from_language=from_language)
        return "Hallo Welt"

    async def transliterate(self, text, language, from_script, to_script):
        self._record(
            "transliterate",
            text=text,
            language=language,
            from_script=from_script,
            to_script=to_script,
        )
        return "konnichiwa"

    async def detect(self, text):
        self._record("detect", text=text)
        return "de"

    async def break_sentence(self, text, language):
        self._record("break_sentence", text=text, language=language)
        return [13, 11]

    async def dictionary_lookup(self, text, language):
        self._record("dictionary_lookup", text=text, language=language)
        return [{
            "normalizedTarget": "volar",
            "displayTarget": "volar",
            "posTag": "VERB",
            "confidence": 0.4081,
            "targetLanguage": dictionary_target(language),
        }]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep the developer's environment and working directory out of tests."""
    for name in (
        "TRANSLATOR_KEY",
        "TRANSLATOR_LOCATION",
        "TRANSLATOR_ENDPOINT",
        "TRANSLATOR_API_VERSION",
        "TRANSLATOR_REQUEST_TIMEOUT",
        "TRANSLATOR_PROXY_URL",
        "TRANSLATOR_CONFIG_FILE",
        "TRANSLATOR_DEBUG",
        "TRANSLATOR_ENABLE_DOCS",
        "HOST",
        "PORT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def app_config():
    """Return a configuration with fake credentials."""
    return AppConfig(
        key="test-key",
        location="westeurope",
        endpoint="https://translator.example.com",
    )


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def test_client(app_config, fake_gateway):
    """Create a test client for the app, backed by the fake gateway."""
    app = create_app(app_config, gateway=fake_gateway)

    with TestClient(app) as client:
        yield client
