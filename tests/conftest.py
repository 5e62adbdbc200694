"""
Pytest configuration and shared fixtures for PoolPal tests.
"""
import json

import pytest

from poolpal import create_app
from poolpal.services.ai import GoogleAIClient, GoogleAIClientError, GoogleAIResult


class FakeGoogleAIClient:
    """Stands in for the Gemini client; records prompts and replays canned replies."""

    default_model = "fake-gemini"

    def __init__(self, replies=None, error=None):
        self.replies = list(replies or [])
        self.error = error
        self.calls = []

    def generate(self, prompt, **kwargs):
        self.calls.append(dict(kwargs, prompt=prompt))
        if self.error is not None:
            raise self.error
        text = self.replies.pop(0) if self.replies else ""
        return GoogleAIResult(text=text, raw=None, finish_reason="STOP")

    @property
    def last_prompt(self):
        return self.calls[-1]["prompt"]


def advice_reply(chlorine="Add 375 g of dichlor. Dosages must be calibrated to your product.",
                 ph_minus="Add 1000 g of pH-minus. Dosages must be calibrated to your product."):
    return json.dumps({"chlorineDosageSuggestion": chlorine, "phMinusDosageSuggestion": ph_minus})


@pytest.fixture(scope='function')
def app():
    """Create and configure a new app instance for each test."""
    app = create_app({
        'TESTING': True,
        'WTF_CSRF_ENABLED': False,
        'RATELIMIT_ENABLED': False,
        'SECRET_KEY': 'test-secret-key',
        'GOOGLE_AI_API_KEY': 'test-key',
        'POOLPAL_LOCALE': 'en',
    })
    yield app


@pytest.fixture
def client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture
def runner(app):
    """A test runner for the app's Click commands."""
    return app.test_cli_runner()


@pytest.fixture
def fake_ai(monkeypatch):
    """Route every GoogleAIClient.from_app() call to one fake client."""
    fake = FakeGoogleAIClient(replies=[advice_reply()])
    monkeypatch.setattr(GoogleAIClient, "from_app", classmethod(lambda cls: fake))
    return fake


@pytest.fixture
def failing_ai(monkeypatch):
    fake = FakeGoogleAIClient(error=GoogleAIClientError("Gemini request failed: deadline exceeded"))
    monkeypatch.setattr(GoogleAIClient, "from_app", classmethod(lambda cls: fake))
    return fake


@pytest.fixture
def valid_form_data():
    return {
        'pool_length': '10',
        'pool_width': '5',
        'pool_average_depth': '1.5',
        'current_chlorine': '0.5',
        'current_ph': '7.8',
    }
