"""
Google Books 查询客户端测试
"""
import pytest
from unittest.mock import AsyncMock, patch

from library_catalog.services import google_books
from library_catalog.services.google_books import GoogleBooksAPIError, GoogleBooksClient
from tests.fixtures.sample_data import GOOGLE_VOLUME


class FakeResponse:
    def __init__(self, status, payload):
        self.status = status
        self._payload = payload

    async def json(self, content_type=None):
        return self._payload

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return False


class FakeSession:
    """记录请求参数的 aiohttp.ClientSession 替身"""
    requests = []

    def __init__(self, status=200, payload=None, **kwargs):
        self._status = status
        self._payload = payload

    def get(self, url, params=None):
        FakeSession.requests.append((url, params))
        return FakeResponse(self._status, self._payload)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return False


class TestGoogleBooksClient:
    """GoogleBooksClient测试类"""

    @pytest.fixture
    def client(self):
        return GoogleBooksClient(base_url="https://books.test/volumes", api_key="k")

    def test_to_book_data(self):
        """测试 volume 转表单字段"""
        data = GoogleBooksClient.to_book_data(GOOGLE_VOLUME)

        assert data == {
            "title": "Dune",
            "author": "Frank Herbert",
            "isbn": "9780441172719",
            "publishedDate": "1965-01-01",
            "genre": "Fiction",
            "description": "Set on the desert planet Arrakis.",
            "pages": 612,
            "language": "English",
            "coverImage": "https://books.google.com/books/content?id=1&zoom=1",
            "price": 0,
            "inStock": True,
        }

    def test_to_book_data_with_sparse_volume(self):
        data = GoogleBooksClient.to_book_data({
            "volumeInfo": {
                "title": "Sparse",
                "language": "fr",
                "publishedDate": "2001-05-02",
                "industryIdentifiers": [{"type": "ISBN_10", "identifier": "123456789X"}],
            }
        })

        assert data["isbn"] == "123456789X"
        assert data["author"] == ""
        assert data["genre"] == "Fiction"
        assert data["language"] == "fr"
        assert data["publishedDate"] == "2001-05-02"
        assert data["coverImage"] == ""
        assert data["pages"] == 0

    @pytest.mark.asyncio
    async def test_search_sends_query(self, client):
        FakeSession.requests = []
        fake = lambda **kwargs: FakeSession(200, {"totalItems": 1, "items": [GOOGLE_VOLUME]})
        with patch.object(google_books.aiohttp, "ClientSession", side_effect=fake):
            result = await client.search("isbn:9780441172719", 1)

        assert result["items"][0]["id"] == GOOGLE_VOLUME["id"]
        url, params = FakeSession.requests[0]
        assert url == "https://books.test/volumes"
        assert params == {"q": "isbn:9780441172719", "maxResults": "1", "key": "k"}

    @pytest.mark.asyncio
    async def test_search_raises_on_error_status(self, client):
        fake = lambda **kwargs: FakeSession(500, {})
        with patch.object(google_books.aiohttp, "ClientSession", side_effect=fake):
            with pytest.raises(GoogleBooksAPIError):
                await client.search("anything")

    @pytest.mark.asyncio
    async def test_search_by_isbn_cleans_isbn(self, client):
        client.search = AsyncMock(return_value={"items": [GOOGLE_VOLUME]})

        result = await client.search_by_isbn("978-0 441-17271-9")

        client.search.assert_called_once_with("isbn:9780441172719", 1)
        assert result == GOOGLE_VOLUME

    @pytest.mark.asyncio
    async def test_search_by_isbn_swallows_api_errors(self, client):
        client.search = AsyncMock(side_effect=GoogleBooksAPIError("boom"))
        assert await client.search_by_isbn("9780441172719") is None

    @pytest.mark.asyncio
    async def test_search_by_title_query(self, client):
        client.search = AsyncMock(return_value={"totalItems": 0})

        result = await client.search_by_title("Dune", "Herbert")

        client.search.assert_called_once_with("intitle:Dune inauthor:Herbert", 5)
        assert result == []

    @pytest.mark.asyncio
    async def test_enrich_falls_back_to_title(self, client):
        """ISBN查不到时按书名查询"""
        client.search_by_isbn = AsyncMock(return_value=None)
        client.search_by_title = AsyncMock(return_value=[GOOGLE_VOLUME])

        data = await client.enrich(title="Dune", author="Frank Herbert", isbn="000")

        client.search_by_title.assert_called_once_with("Dune", "Frank Herbert")
        assert data["title"] == "Dune"

    @pytest.mark.asyncio
    async def test_enrich_nothing_found(self, client):
        client.search_by_isbn = AsyncMock(return_value=None)
        client.search_by_title = AsyncMock(return_value=[])

        assert await client.enrich(title="Nope", isbn="1") is None
