# tests/clients/test_google_books.py
import asyncio
import httpx
import pytest

from libroteca.clients import google_books
from libroteca.clients.google_books import parse_volume, search_books_google_api

VOLUME = {
    "volumeInfo": {
        "title": "Cien años de soledad",
        "authors": ["Gabriel García Márquez"],
        "description": "La historia de la familia Buendía.",
        "categories": ["Fiction", "Classics"],
        "publishedDate": "1967-05-30",
        "pageCount": 471,
        "imageLinks": {"smallThumbnail": "http://example.org/small.jpg", "thumbnail": "http://example.org/thumb.jpg"},
        "industryIdentifiers": [
            {"type": "ISBN_10", "identifier": "0060883286"},
            {"type": "ISBN_13", "identifier": "9780060883287"},
        ],
    }
}

def test_parse_volume():
    fields = parse_volume(VOLUME)

    assert fields == {
        "title": "Cien años de soledad",
        "author": "Gabriel García Márquez",
        "description": "La historia de la familia Buendía.",
        "genre": "Fiction",
        "published_year": 1967,
        "pages": 471,
        "cover_image_url": "http://example.org/thumb.jpg",
        "isbn": "9780060883287",
    }

def test_parse_volume_joins_authors_and_falls_back_to_isbn_10():
    fields = parse_volume({
        "volumeInfo": {
            "title": "Good Omens",
            "authors": ["Terry Pratchett", "Neil Gaiman"],
            "publishedDate": "1990",
            "industryIdentifiers": [{"type": "ISBN_10", "identifier": "0575048530"}],
        }
    })

    assert fields["author"] == "Terry Pratchett, Neil Gaiman"
    assert fields["isbn"] == "0575048530"
    assert fields["published_year"] == 1990
    assert fields["genre"] is None
    assert fields["pages"] is None
    assert fields["cover_image_url"] is None

@pytest.mark.parametrize("volume_info", [
    {"authors": ["Anonymous"]},
    {"title": "No Author"},
    {"title": "Empty Authors", "authors": []},
])
def test_parse_volume_requires_title_and_author(volume_info):
    assert parse_volume({"volumeInfo": volume_info}) is None

@pytest.mark.parametrize("published_date, expected", [("2019-05", 2019), ("circa", None), ("", None)])
def test_parse_volume_published_year(published_date, expected):
    fields = parse_volume({"volumeInfo": {"title": "T", "authors": ["A"], "publishedDate": published_date}})
    assert fields["published_year"] == expected

def _search_with(handler, monkeypatch, query="fantasy"):
    monkeypatch.setattr(google_books.settings, "GOOGLE_BOOKS_API_KEY", "test-key")

    async def _run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await search_books_google_api(query, max_results=5, client=client)

    return asyncio.run(_run())

def test_search_returns_items(monkeypatch):
    seen = {}

    def handler(request):
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"items": [VOLUME]})

    items = _search_with(handler, monkeypatch)

    assert items == [VOLUME]
    assert seen["params"]["q"] == "fantasy"
    assert seen["params"]["maxResults"] == "5"
    assert seen["params"]["key"] == "test-key"

def test_search_without_results(monkeypatch):
    assert _search_with(lambda request: httpx.Response(200, json={"totalItems": 0}), monkeypatch) == []

def test_search_http_error_returns_none(monkeypatch):
    assert _search_with(lambda request: httpx.Response(503, text="unavailable"), monkeypatch) is None

def test_search_network_error_returns_none(monkeypatch):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    assert _search_with(handler, monkeypatch) is None

def test_search_without_api_key(monkeypatch):
    monkeypatch.setattr(google_books.settings, "GOOGLE_BOOKS_API_KEY", "NO_GOOGLE_KEY_SET")
    assert asyncio.run(search_books_google_api("anything")) is None
