"""Test configuration for SERP Search Hub."""

import pytest

from serp_search_hub.config import AppSettings, get_settings


@pytest.fixture
def mock_env(monkeypatch):
    """Mock environment variables for testing."""
    monkeypatch.setenv("SERP_API_KEY", "test_serp_key")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    # Clear lru_cache to ensure it picks up the new env vars
    get_settings.cache_clear()

    yield

    # Clean up
    get_settings.cache_clear()


@pytest.fixture
def settings():
    """Settings with a credential and a small result count."""
    return AppSettings(serp_api_key="test_serp_key", serper={"num_results": 10})


@pytest.fixture
def settings_without_key():
    """Settings with no credential configured."""
    return AppSettings(serp_api_key="")


@pytest.fixture
def serper_payload():
    """A Serper response with an answer box repeated in the organic listing."""
    return {
        "searchParameters": {"q": "what is garlic", "type": "search"},
        "credits": 1,
        "answerBox": {
            "title": "Garlic - Wikipedia",
            "link": "https://en.wikipedia.org/wiki/Garlic",
            "snippet": "Garlic is a species of bulbous flowering plant.",
        },
        "organic": [
            {
                "title": "Garlic - Wikipedia",
                "link": "https://en.wikipedia.org/wiki/Garlic",
                "snippet": "Garlic (Allium sativum) is a species in the onion genus.",
                "position": 1,
            },
            {
                "title": "Garlic: Health benefits",
                "link": "https://www.healthline.com/nutrition/garlic",
                "snippet": "Garlic contains compounds with potent medicinal properties.",
                "position": 2,
            },
        ],
        "peopleAlsoAsk": [
            {
                "question": "What is garlic good for?",
                "snippet": "Garlic may help lower blood pressure.",
                "title": "Garlic benefits",
                "link": "https://example.com/garlic-benefits",
            }
        ],
        "relatedSearches": [
            {"query": "garlic benefits"},
            {"query": "garlic plant"},
        ],
    }
