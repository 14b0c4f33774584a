from __future__ import annotations

import pytest
from fakes import FakeFetcher, FakeResolver, server_page
from fastapi.testclient import TestClient

from aniembed.api import app, get_extractor
from aniembed.errors import TransportError
from aniembed.extractor import EmbedExtractor
from aniembed.models import ExternalMatch

BASE = "https://anime.test"


@pytest.fixture()
def client():
    pages = {
        f"{BASE}/episode/spy-x-family-3x1/": server_page((1, "Filemoon", "https://fm.test/e/1")),
        f"{BASE}/episode/naruto-1x4/": server_page((0, "", "https://voe.test/e/0")),
        f"{BASE}/episode/?data_id=20333&season=2": "<html></html>",
        f"{BASE}/episode/broken-1x1/": TransportError(f"{BASE}/episode/broken-1x1/", "timed out"),
    }
    resolver = FakeResolver(match=ExternalMatch(external_id="spy-x-family-17977", numeric_id=17977, title="Spy x Family"))
    extractor = EmbedExtractor(
        fetcher=FakeFetcher(pages),
        resolver=resolver,
        base_url=BASE,
        popular_slugs=["naruto"],
    )
    app.dependency_overrides[get_extractor] = lambda: extractor
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "source": "anime.test", "baseUrl": BASE}


def test_get_embed_returns_mapping_envelope(client) -> None:
    response = client.get("/embed/spy-x-family-3x1")
    assert response.status_code == 200
    assert response.json() == {
        "id": "spy-x-family-3x1",
        "servers": [{"server": 1, "name": "Filemoon", "url": "https://fm.test/e/1"}],
        "externalApiMapping": {
            "animeId": "spy-x-family-17977",
            "dataId": "17977",
            "title": "Spy x Family",
            "season": 3,
            "episode": 1,
        },
    }


def test_get_embed_by_data_id_and_episode(client) -> None:
    response = client.get("/embed/20333/1/4")
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == "20333/1/4"
    assert body["servers"] == [{"server": 0, "name": "Server 0", "url": "https://voe.test/e/0"}]
    assert body["externalApiMapping"]["constructedId"] == "naruto-1x4"


def test_get_embed_by_data_id_and_season_with_no_servers(client) -> None:
    response = client.get("/embed/20333/2")
    assert response.status_code == 200
    assert response.json() == {"id": "20333-season-2", "servers": [], "externalApiMapping": {"dataId": "20333", "season": 2}}


def test_extraction_failure_is_a_client_error(client) -> None:
    response = client.get("/embed/broken-1x1")
    assert response.status_code == 400
    assert response.json()["detail"].startswith("Failed to extract embed data: timed out")

    response = client.get("/embed/missing-1x1")
    assert response.status_code == 400


def test_invalid_season_is_rejected_before_lookup(client) -> None:
    assert client.get("/embed/20333/0/1").status_code == 422
    assert client.get("/embed/20333/one/1").status_code == 422
