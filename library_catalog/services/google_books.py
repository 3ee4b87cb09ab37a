"""
Google Books 书目查询模块 - 为新增书籍表单预填字段
"""
import asyncio
import logging
import re
from typing import Any, Dict, List, Optional

import aiohttp

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.googleapis.com/books/v1/volumes"


class GoogleBooksAPIError(Exception):
    """Google Books 接口异常"""
    pass


class GoogleBooksClient:
    """Google Books 查询客户端"""

    def __init__(self, base_url: str = DEFAULT_BASE_URL, api_key: Optional[str] = None,
                 timeout: float = 10.0):
        self.base_url = base_url
        self.api_key = api_key
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def search(self, query: str, max_results: int = 10) -> Dict[str, Any]:
        """按关键字查询 volumes 接口"""
        params = {"q": query, "maxResults": str(max_results)}
        if self.api_key:
            params["key"] = self.api_key

        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.get(self.base_url, params=params) as response:
                if response.status != 200:
                    raise GoogleBooksAPIError(f"Google Books request failed with status {response.status}")
                return await response.json(content_type=None)

    async def search_by_isbn(self, isbn: str) -> Optional[Dict[str, Any]]:
        """按ISBN查询，返回第一条结果"""
        clean_isbn = re.sub(r"[-\s]", "", isbn or "")
        if not clean_isbn:
            return None
        try:
            data = await self.search(f"isbn:{clean_isbn}", 1)
        except (GoogleBooksAPIError, aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"ISBN查询失败 {clean_isbn}: {e}")
            return None
        items = data.get("items") or []
        return items[0] if items else None

    async def search_by_title(self, title: str, author: Optional[str] = None) -> List[Dict[str, Any]]:
        """按书名（可选作者）查询"""
        query = f"intitle:{title}"
        if author:
            query += f" inauthor:{author}"
        try:
            data = await self.search(query, 5)
        except (GoogleBooksAPIError, aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"书名查询失败 '{title}': {e}")
            return []
        return data.get("items") or []

    async def enrich(self, title: Optional[str] = None, author: Optional[str] = None,
                     isbn: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """优先按ISBN查询，查不到再按书名+作者"""
        item = None
        if isbn:
            item = await self.search_by_isbn(isbn)
        if item is None and title:
            results = await self.search_by_title(title, author)
            item = results[0] if results else None
        if item is None:
            return None
        return self.to_book_data(item)

    @staticmethod
    def to_book_data(item: Dict[str, Any]) -> Dict[str, Any]:
        """把 volume 转成新增书籍表单字段"""
        info = item.get("volumeInfo") or {}

        identifiers = {
            entry.get("type"): entry.get("identifier")
            for entry in info.get("industryIdentifiers") or []
        }
        isbn = identifiers.get("ISBN_13") or identifiers.get("ISBN_10") or ""

        # 有些记录只有年份
        published_date = info.get("publishedDate") or ""
        if len(published_date) == 4:
            published_date = f"{published_date}-01-01"

        language = info.get("language") or "English"
        if language == "en":
            language = "English"

        thumbnail = (info.get("imageLinks") or {}).get("thumbnail") or ""

        return {
            "title": info.get("title") or "",
            "author": (info.get("authors") or [""])[0],
            "isbn": isbn,
            "publishedDate": published_date,
            "genre": (info.get("categories") or ["Fiction"])[0],
            "description": info.get("description") or "",
            "pages": info.get("pageCount") or 0,
            "language": language,
            "coverImage": thumbnail.replace("http://", "https://"),
            "price": 0,
            "inStock": True,
        }
