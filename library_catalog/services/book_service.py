"""
书籍业务服务层 - 服务端路由和 serverless 函数共用
"""
import logging
import random
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..exceptions import BookNotFoundError, BookValidationError, DuplicateBookError
from ..models.book import Book
from ..models.schemas import BookCreateRequest, BookUpdateRequest, describe_validation_error
from ..repositories.book_repository import BookRepository
from .catalog_query import DEFAULT_PAGE_SIZE, BookFilter, PageWindow
from .seed_data import SAMPLE_BOOKS
from .stats_service import round_one_decimal

logger = logging.getLogger(__name__)

# 新书初始评分区间
RATING_RANGE = (3.0, 5.0)


class BookService:
    """书籍服务类"""

    def __init__(self, book_repository: BookRepository, rng: Optional[random.Random] = None,
                 default_page_size: int = DEFAULT_PAGE_SIZE):
        self.book_repository = book_repository
        self.rng = rng or random.Random()
        self.default_page_size = default_page_size

    async def list_books(self, page: Optional[int] = None, limit: Optional[int] = None,
                         search: Optional[str] = None, genre: Optional[str] = None) -> Dict[str, Any]:
        """获取书籍列表（支持搜索、分类筛选和分页）"""
        window = PageWindow.build(page, limit, self.default_page_size)
        book_filter = BookFilter(search=search, genre=genre)

        total = await self.book_repository.count(book_filter)
        books = []
        if window.offset < total:
            # 超出剩余条数的 limit 按剩余条数查询
            fetch_limit = min(window.limit, total - window.offset)
            books = await self.book_repository.find(book_filter, window.offset, fetch_limit)

        result = {"books": [book.to_dict() for book in books]}
        result.update(window.describe(total))
        return result

    async def get_book(self, book_id: str) -> Book:
        """根据ID获取书籍"""
        book = await self.book_repository.get_by_id(self._parse_id(book_id))
        if not book:
            raise BookNotFoundError("Book not found")
        return book

    async def create_book(self, payload: Any) -> Book:
        """创建书籍"""
        request = self._validate(BookCreateRequest, payload)
        book_data = request.to_record()
        if book_data["rating"] is None:
            book_data["rating"] = self._random_rating()

        # 检查ISBN是否已存在
        if await self.book_repository.get_by_isbn(book_data["isbn"]):
            raise DuplicateBookError(f"Book with ISBN {book_data['isbn']} already exists")

        book = await self.book_repository.create(book_data)
        logger.info(f"创建书籍: {book.id} {book.title}")
        return book

    async def update_book(self, book_id: str, payload: Any) -> Book:
        """更新书籍，只修改请求中出现的字段"""
        book_key = self._parse_id(book_id)
        changes = self._validate(BookUpdateRequest, payload).changes()

        if not await self.book_repository.get_by_id(book_key):
            raise BookNotFoundError("Book not found")

        if "isbn" in changes:
            existing = await self.book_repository.get_by_isbn(changes["isbn"])
            if existing and existing.id != book_key:
                raise DuplicateBookError(f"Book with ISBN {changes['isbn']} already exists")

        book = await self.book_repository.update(book_key, changes)
        if not book:
            raise BookNotFoundError("Book not found")
        logger.info(f"更新书籍: {book.id} 字段: {sorted(changes)}")
        return book

    async def delete_book(self, book_id: str) -> None:
        """删除书籍"""
        success = await self.book_repository.delete(self._parse_id(book_id))
        if not success:
            raise BookNotFoundError("Book not found")
        logger.info(f"删除书籍: {book_id}")

    async def seed_books(self) -> Dict[str, Any]:
        """写入示例书籍，已存在的ISBN跳过"""
        existing = await self.book_repository.get_existing_isbns(b["isbn"] for b in SAMPLE_BOOKS)
        records = [
            BookCreateRequest.model_validate(sample).to_record()
            for sample in SAMPLE_BOOKS
            if sample["isbn"] not in existing
        ]
        if not records:
            return {"message": "All sample books already exist in database", "booksAdded": 0}

        books = await self.book_repository.create_many(records)
        logger.info(f"示例数据写入完成: {len(books)} 本")
        return {"message": f"Database seeded with {len(books)} new books", "booksAdded": len(books)}

    async def enrich_book(self, book_id: str, lookup_client) -> Book:
        """用外部书目数据补全封面"""
        book = await self.get_book(book_id)
        if book.cover_image:
            return book

        data = await lookup_client.enrich(title=book.title, author=book.author, isbn=book.isbn)
        cover_image = (data or {}).get("coverImage")
        if not cover_image:
            logger.info(f"未找到封面: {book.isbn}")
            return book
        return await self.book_repository.update(book.id, {"cover_image": cover_image})

    def _random_rating(self) -> float:
        return round_one_decimal(self.rng.uniform(*RATING_RANGE))

    @staticmethod
    def _validate(model, payload: Any):
        if not isinstance(payload, dict):
            raise BookValidationError("Request body must be a JSON object")
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise BookValidationError(describe_validation_error(e)) from e

    @staticmethod
    def _parse_id(book_id: Any) -> int:
        """ID 对外是不透明字符串，内部是自增整数"""
        text = str(book_id).strip()
        if not (text.isascii() and text.isdigit()) or len(text) > 18:
            raise BookNotFoundError("Book not found")
        return int(text)
