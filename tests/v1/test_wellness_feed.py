"""API tests for the wellness news feed."""

import httpx
from fastapi import FastAPI
from fastapi.testclient import TestClient

from mindwell.api.v1.dependencies import get_wellness_feed
from mindwell.services.wellness_feed import FEED_FAILURE, NewsConfig, WellnessFeedClient

FEED = "/api/v1/wellness-feed"


def _install(app: FastAPI, response: httpx.Response, api_key: str | None = "news-key") -> None:
    config = NewsConfig(
        api_key=api_key,
        url="https://news.test/v2/everything",
        query="wellness",
        page_size=15,
        timeout_seconds=5,
    )
    transport = httpx.MockTransport(lambda request: response)
    app.dependency_overrides[get_wellness_feed] = lambda: WellnessFeedClient(
        config, transport=transport
    )


def test_feed_returns_articles(app: FastAPI, client: TestClient) -> None:
    articles = [{"title": "Five-minute breathing", "url": "https://news.test/b"}]
    _install(app, httpx.Response(200, json={"status": "ok", "articles": articles}))

    response = client.get(FEED)

    assert response.status_code == 200
    assert response.json() == {"articles": articles}


def test_feed_without_key_is_503(app: FastAPI, client: TestClient) -> None:
    _install(app, httpx.Response(200, json={"status": "ok", "articles": []}), api_key=None)

    response = client.get(FEED)

    assert response.status_code == 503
    assert response.json()["detail"] == "Server configuration error: News API key missing."


def test_feed_upstream_error_is_500(app: FastAPI, client: TestClient) -> None:
    _install(app, httpx.Response(429, json={"status": "error", "code": "rateLimited"}))

    response = client.get(FEED)

    assert response.status_code == 500
    assert response.json()["detail"] == FEED_FAILURE


def test_default_feed_without_configuration_is_503(client: TestClient) -> None:
    assert client.get(FEED).status_code == 503
