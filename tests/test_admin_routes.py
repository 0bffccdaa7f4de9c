from __future__ import annotations

from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from ditchfork.services import reviews as review_service

from .conftest import UPLOAD_DIR

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def _create(client: TestClient, **fields) -> None:
    data = {"type": "albums", "artist": "Radiohead", "title": "OK Computer", "rating": "9.5", "body": "<p>Great.</p>"}
    data.update(fields)
    response = client.post("/admin/reviews", data=data)
    assert response.status_code == 303, response.text
    assert response.headers["location"] == "/admin/"


def test_dashboard_lists_content(admin_client: TestClient) -> None:
    _create(admin_client)
    response = admin_client.get("/admin/")
    assert response.status_code == 200
    assert "OK Computer" in response.text
    assert "/admin/albums/1/edit" in response.text


def test_create_and_read_album(admin_client: TestClient) -> None:
    _create(admin_client)
    page = admin_client.get("/music/albums/radiohead-ok-computer")
    assert page.status_code == 200
    assert "OK Computer" in page.text
    assert "<p>Great.</p>" in page.text
    assert "9.5" in page.text


def test_duplicate_titles_get_numbered_slugs(admin_client: TestClient) -> None:
    _create(admin_client)
    _create(admin_client)
    _create(admin_client)
    assert admin_client.get("/music/albums/radiohead-ok-computer-2").status_code == 200
    assert admin_client.get("/music/albums/radiohead-ok-computer-3").status_code == 200


def test_same_slug_allowed_in_different_categories(admin_client: TestClient) -> None:
    _create(admin_client)
    _create(admin_client, type="songs")
    assert admin_client.get("/music/albums/radiohead-ok-computer").status_code == 200
    assert admin_client.get("/music/songs/radiohead-ok-computer").status_code == 200


def test_article_ignores_artist_and_rating(admin_client: TestClient) -> None:
    _create(admin_client, type="articles", artist="Ignored", title="Best of 2026", rating="7", article_type="List")
    page = admin_client.get("/music/articles/best-of-2026")
    assert page.status_code == 200
    assert "Ignored" not in page.text
    assert "List" in page.text


def test_validation_errors_render_form(admin_client: TestClient) -> None:
    missing_artist = admin_client.post("/admin/reviews", data={"type": "albums", "title": "Untitled"})
    assert missing_artist.status_code == 400
    assert "Artist and title are required" in missing_artist.text

    missing_title = admin_client.post("/admin/reviews", data={"type": "albums", "artist": "Someone"})
    assert missing_title.status_code == 400
    assert "Title is required" in missing_title.text

    bad_rating = admin_client.post(
        "/admin/reviews", data={"type": "songs", "artist": "A", "title": "B", "rating": "11"}
    )
    assert bad_rating.status_code == 400
    assert "Rating must be between 0 and 10.0" in bad_rating.text


def test_unknown_type_is_rejected(admin_client: TestClient) -> None:
    response = admin_client.post("/admin/reviews", data={"type": "podcasts", "title": "X"})
    assert response.status_code == 400


def test_edit_recomputes_slug(admin_client: TestClient) -> None:
    _create(admin_client)
    form = admin_client.get("/admin/albums/1/edit")
    assert form.status_code == 200
    assert 'value="Radiohead"' in form.text

    response = admin_client.post(
        "/admin/albums/1", data={"artist": "Radiohead", "title": "Kid A", "rating": "10", "body": "<p>Yes.</p>"}
    )
    assert response.status_code == 303
    assert admin_client.get("/music/albums/radiohead-kid-a").status_code == 200
    assert admin_client.get("/music/albums/radiohead-ok-computer").status_code == 404


def test_edit_without_title_change_keeps_slug(admin_client: TestClient) -> None:
    _create(admin_client)
    response = admin_client.post(
        "/admin/albums/1", data={"artist": "Radiohead", "title": "OK Computer", "rating": "8", "body": "Revised."}
    )
    assert response.status_code == 303
    page = admin_client.get("/music/albums/radiohead-ok-computer")
    assert "Revised." in page.text


def test_edit_missing_record_is_404(admin_client: TestClient) -> None:
    assert admin_client.get("/admin/albums/99/edit").status_code == 404
    assert admin_client.get("/admin/podcasts/1/edit").status_code == 404


def test_delete(admin_client: TestClient) -> None:
    _create(admin_client)
    response = admin_client.post("/admin/albums/1/delete")
    assert response.status_code == 303
    assert admin_client.get("/music/albums/radiohead-ok-computer").status_code == 404


def test_cover_upload_is_stored_and_served(admin_client: TestClient) -> None:
    response = admin_client.post(
        "/admin/reviews",
        data={"type": "albums", "artist": "Boards of Canada", "title": "Geogaddi", "rating": "9"},
        files={"cover": ("cover.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 303

    page = admin_client.get("/music/albums/boards-of-canada-geogaddi")
    marker = 'src="/uploads/'
    start = page.text.index(marker) + len(marker)
    relative = page.text[start : page.text.index('"', start)]
    assert relative.endswith(".png")
    assert (UPLOAD_DIR / relative).read_bytes() == PNG_BYTES
    assert admin_client.get(f"/uploads/{relative}").content == PNG_BYTES


def test_cover_with_wrong_type_is_rejected(admin_client: TestClient) -> None:
    response = admin_client.post(
        "/admin/reviews",
        data={"type": "albums", "artist": "A", "title": "B", "rating": "5"},
        files={"cover": ("cover.gif", b"GIF89a", "image/gif")},
    )
    assert response.status_code == 400
    assert "unsupported image type: image/gif" in response.text


def test_settings_roundtrip(admin_client: TestClient) -> None:
    response = admin_client.post("/admin/settings", data={"site_title": "Pitchfork Lite", "accent_color": "#00AA00"})
    assert response.status_code == 200
    assert "Settings saved successfully." in response.text

    page = admin_client.get("/admin/settings")
    assert 'value="Pitchfork Lite"' in page.text
    assert 'value="#00aa00"' in page.text
    assert 'value="#111111"' in page.text


def test_settings_reject_bad_colour(admin_client: TestClient) -> None:
    response = admin_client.post("/admin/settings", data={"nav_bg_color": "red"})
    assert response.status_code == 400
    assert "is not a #rrggbb colour" in response.text


def test_failed_insert_discards_uploaded_cover(admin_client: TestClient, monkeypatch) -> None:
    async def lost_slug_race(*args, **kwargs):
        raise IntegrityError("INSERT INTO albums", {}, Exception("UNIQUE constraint failed: albums.slug"))

    monkeypatch.setattr(review_service, "create_review", lost_slug_race)
    before = {path for path in UPLOAD_DIR.rglob("*") if path.is_file()}

    response = admin_client.post(
        "/admin/reviews",
        data={"type": "albums", "artist": "Low", "title": "HEY WHAT", "rating": "8"},
        files={"cover": ("cover.png", PNG_BYTES, "image/png")},
    )

    assert response.status_code == 500
    assert response.text == "Internal server error"
    assert {path for path in UPLOAD_DIR.rglob("*") if path.is_file()} == before
