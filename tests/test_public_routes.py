from __future__ import annotations

from fastapi.testclient import TestClient


def _publish(client: TestClient, category: str, artist: str, title: str, rating: str = "5") -> None:
    response = client.post("/admin/reviews", data={"type": category, "artist": artist, "title": title, "rating": rating})
    assert response.status_code == 303


def test_home_feed_shows_every_category(admin_client: TestClient) -> None:
    _publish(admin_client, "albums", "Björk", "Homogenic")
    _publish(admin_client, "songs", "Robyn", "Dancing On My Own")
    _publish(admin_client, "articles", "", "Why Vinyl Won")

    page = admin_client.get("/")
    assert page.status_code == 200
    for title in ("Homogenic", "Dancing On My Own", "Why Vinyl Won"):
        assert title in page.text
    # Newest first.
    assert page.text.index("Why Vinyl Won") < page.text.index("Homogenic")


def test_tab_filters_by_category(admin_client: TestClient) -> None:
    _publish(admin_client, "albums", "Björk", "Homogenic")
    _publish(admin_client, "songs", "Robyn", "Dancing On My Own")

    page = admin_client.get("/", params={"tab": "songs"})
    assert page.status_code == 200
    assert "Dancing On My Own" in page.text
    assert "Homogenic" not in page.text


def test_unknown_tab_is_404(admin_client: TestClient) -> None:
    assert admin_client.get("/", params={"tab": "podcasts"}).status_code == 404


def test_unknown_category_or_slug_is_404(admin_client: TestClient) -> None:
    assert admin_client.get("/music/podcasts/anything").status_code == 404
    assert admin_client.get("/music/albums/missing").status_code == 404


def test_high_ratings_are_highlighted(admin_client: TestClient) -> None:
    _publish(admin_client, "albums", "Kate Bush", "Hounds of Love", rating="9.8")
    page = admin_client.get("/music/albums/kate-bush-hounds-of-love")
    assert "rating-high" in page.text
    assert "9.8 / 10.0" in page.text
