"""
HTML and JSON route tests through FastAPI's TestClient.
"""

from __future__ import annotations

import logging
import re

import pytest
from fastapi.testclient import TestClient

from app.lego.errors import StoreConnectionError
from app.lego.store import CatalogStore
from app.main import create_app


def test_home_and_about_pages(client) -> None:
    assert client.get("/").status_code == 200
    about = client.get("/about")
    assert about.status_code == 200
    assert "About" in about.text


def test_static_stylesheet_is_served(client) -> None:
    response = client.get("/static/site.css")
    assert response.status_code == 200


def test_sets_page_lists_seed_set_and_themes(client) -> None:
    response = client.get("/lego/sets")
    assert response.status_code == 200
    assert "Starter Set" in response.text
    for name in ("City", "Classic Town", "Star Wars", "Technic"):
        assert name in response.text


def test_sets_page_filters_by_theme(client) -> None:
    response = client.get("/lego/sets", params={"theme": "classic"})
    assert response.status_code == 200
    assert "Starter Set" in response.text


def test_sets_page_unknown_theme_renders_not_found(client) -> None:
    response = client.get("/lego/sets", params={"theme": "zzz-no-match"})
    assert response.status_code == 404
    assert "Unable to find requested sets" in response.text


def test_set_detail_page(client) -> None:
    response = client.get("/lego/sets/001")
    assert response.status_code == 200
    assert "Starter Set" in response.text
    assert "Classic Town" in response.text


def test_set_detail_unknown_set_renders_not_found(client) -> None:
    response = client.get("/lego/sets/nope")
    assert response.status_code == 404
    assert "Unable to find requested set" in response.text


def test_add_set_form_lists_themes(client) -> None:
    response = client.get("/lego/addSet")
    assert response.status_code == 200
    assert 'value="300"' in response.text
    assert "Star Wars" in response.text


def test_add_set_redirects_and_creates(client) -> None:
    response = client.post(
        "/lego/addSet",
        data={
            "set_num": "10497-1",
            "name": "Galaxy Explorer",
            "year": "2022",
            "num_parts": "1254",
            "theme_id": "100",
            "img_url": "",
        },
        follow_redirects=False,
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/lego/sets"

    created = client.get("/api/lego/sets/10497-1").json()
    assert created["year"] == 2022
    assert created["num_parts"] == 1254
    assert created["theme"]["name"] == "Classic Town"


def test_add_set_without_set_num_renders_bad_request(client) -> None:
    response = client.post("/lego/addSet", data={"name": "Nameless"})
    assert response.status_code == 400
    assert "set_num is required" in response.text


def test_add_duplicate_set_renders_conflict(client) -> None:
    response = client.post("/lego/addSet", data={"set_num": "001", "name": "Again"})
    assert response.status_code == 409


def test_delete_set_redirects_and_removes(client) -> None:
    response = client.get("/lego/deleteSet/001", follow_redirects=False)
    assert response.status_code == 303
    assert client.get("/lego/sets/001").status_code == 404


def test_delete_unknown_set_renders_not_found(client) -> None:
    response = client.get("/lego/deleteSet/nope")
    assert response.status_code == 404
    assert "Set not found" in response.text


def test_unknown_page_renders_not_found_page(client) -> None:
    response = client.get("/no/such/page")
    assert response.status_code == 404
    assert "unable to find what you" in response.text


def test_api_lists_themes_alphabetically(client) -> None:
    response = client.get("/api/lego/themes")
    assert response.status_code == 200
    assert [t["name"] for t in response.json()] == [
        "City",
        "Classic Town",
        "Star Wars",
        "Technic",
    ]


def test_api_create_get_delete_round(client) -> None:
    response = client.post("/api/lego/sets", json={"set_num": "002", "name": "Two", "year": "2019"})
    assert response.status_code == 201
    assert response.json() == {"status": "ok", "set_num": "002"}

    fetched = client.get("/api/lego/sets/002").json()
    assert fetched["year"] == 2019
    assert fetched["theme"] is None

    listed = client.get("/api/lego/sets").json()
    assert [s["set_num"] for s in listed] == ["001", "002"]

    assert client.delete("/api/lego/sets/002").json() == {"status": "ok"}
    missing = client.delete("/api/lego/sets/002")
    assert missing.status_code == 404
    assert missing.json() == {"detail": "Set not found"}


def test_api_theme_filter_and_errors(client) -> None:
    found = client.get("/api/lego/sets", params={"theme": "TOWN"})
    assert [s["set_num"] for s in found.json()] == ["001"]

    assert client.get("/api/lego/sets", params={"theme": "zzz"}).status_code == 404
    assert client.post("/api/lego/sets", json={"name": "x"}).status_code == 400
    assert client.post("/api/lego/sets", json={"set_num": "001"}).status_code == 409


def test_api_unknown_path_keeps_json_error(client) -> None:
    response = client.get("/api/lego/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"detail": "Not Found"}


def test_startup_fails_when_store_is_unreachable(caplog) -> None:
    store = CatalogStore("sqlite:////nonexistent-dir/for/catalog/tests.db")
    app = create_app(store=store)

    with caplog.at_level(logging.CRITICAL):
        with pytest.raises(StoreConnectionError):
            with TestClient(app):
                pass

    assert "Initialization Error" in caplog.text


def test_delete_link_targets_set_whose_key_contains_hash(client) -> None:
    client.post("/api/lego/sets", json={"set_num": "10", "name": "Ten"})
    client.post("/api/lego/sets", json={"set_num": "10#1", "name": "Ten hash one", "theme_id": 100})

    page = client.get("/lego/sets").text
    delete_links = re.findall(r'href="(/lego/deleteSet/[^"]+)"', page)
    assert "/lego/deleteSet/10%231" in delete_links
    assert 'href="/lego/sets/10%231"' in page
    assert 'href="/lego/sets?theme=Classic%20Town"' in page

    assert client.get("/lego/sets/10%231").status_code == 200

    response = client.get("/lego/deleteSet/10%231", follow_redirects=False)
    assert response.status_code == 303

    remaining = [s["set_num"] for s in client.get("/api/lego/sets").json()]
    assert remaining == ["001", "10"]


def test_failed_startup_closes_store() -> None:
    store = CatalogStore("sqlite:////nonexistent-dir/for/catalog/tests.db")
    closed = []
    original_close = store.close

    def close() -> None:
        closed.append(True)
        original_close()

    store.close = close
    with pytest.raises(StoreConnectionError):
        with TestClient(create_app(store=store)):
            pass

    assert closed == [True]
