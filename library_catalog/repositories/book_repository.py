"""
书籍数据访问层
"""
import functools
import logging
from typing import Any, Dict, Iterable, List, Optional, Set

from sqlalchemy import delete, distinct, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import DuplicateBookError, StoreError
from ..models.book import Book, utcnow
from ..services.catalog_query import BookFilter

logger = logging.getLogger(__name__)


def store_operation(action: str):
    """把底层数据库异常转换为 StoreError"""
    def decorator(method):
        @functools.wraps(method)
        async def wrapper(self, *args, **kwargs):
            try:
                return await method(self, *args, **kwargs)
            except SQLAlchemyError as e:
                await self.session.rollback()
                logger.error(f"{action}失败: {e}")
                raise StoreError(f"Failed to {action}") from e
        return wrapper
    return decorator


def _apply_filter(query, book_filter: Optional[BookFilter]):
    if book_filter is None:
        return query
    conditions = book_filter.conditions()
    return query.where(*conditions) if conditions else query


class BookRepository:
    """书籍仓库类"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @store_operation("fetch books")
    async def find(self, book_filter: Optional[BookFilter] = None,
                   offset: int = 0, limit: Optional[int] = None) -> List[Book]:
        """按过滤条件查询，按创建时间倒序"""
        query = select(Book).order_by(Book.created_at.desc(), Book.id.desc())
        query = _apply_filter(query, book_filter)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    @store_operation("count books")
    async def count(self, book_filter: Optional[BookFilter] = None) -> int:
        """统计符合条件的记录数"""
        query = select(func.count()).select_from(Book)
        query = _apply_filter(query, book_filter)
        return (await self.session.execute(query)).scalar_one()

    @store_operation("count distinct values")
    async def count_distinct(self, field: str) -> int:
        """统计某字段的不同取值数量"""
        column = getattr(Book, field)
        query = select(func.count(distinct(column)))
        return (await self.session.execute(query)).scalar_one()

    @store_operation("compute average")
    async def average(self, field: str) -> Optional[float]:
        """计算某字段平均值，没有记录时返回 None"""
        column = getattr(Book, field)
        return (await self.session.execute(select(func.avg(column)))).scalar_one()

    @store_operation("fetch book")
    async def get_by_id(self, book_id: int) -> Optional[Book]:
        """根据ID获取书籍"""
        return await self.session.get(Book, book_id)

    @store_operation("fetch book")
    async def get_by_isbn(self, isbn: str) -> Optional[Book]:
        """根据ISBN获取书籍"""
        result = await self.session.execute(select(Book).where(Book.isbn == isbn))
        return result.scalar_one_or_none()

    @store_operation("fetch books")
    async def get_existing_isbns(self, isbns: Iterable[str]) -> Set[str]:
        """返回已存在的ISBN集合"""
        isbns = list(isbns)
        if not isbns:
            return set()
        result = await self.session.execute(select(Book.isbn).where(Book.isbn.in_(isbns)))
        return set(result.scalars().all())

    @store_operation("create book")
    async def create(self, book_data: Dict[str, Any]) -> Book:
        """创建书籍"""
        book = Book(**book_data)
        self.session.add(book)
        await self._commit(book_data.get("isbn"))
        return book

    @store_operation("create books")
    async def create_many(self, records: List[Dict[str, Any]]) -> List[Book]:
        """批量创建书籍（同一事务）"""
        books = [Book(**data) for data in records]
        self.session.add_all(books)
        await self._commit(", ".join(data.get("isbn", "") for data in records))
        return books

    @store_operation("update book")
    async def update(self, book_id: int, update_data: Dict[str, Any]) -> Optional[Book]:
        """更新书籍，只修改传入的字段"""
        book = await self.session.get(Book, book_id)
        if book is None:
            return None
        for key, value in update_data.items():
            setattr(book, key, value)
        book.updated_at = utcnow()
        await self._commit(update_data.get("isbn", book.isbn))
        return book

    @store_operation("delete book")
    async def delete(self, book_id: int) -> bool:
        """删除书籍"""
        result = await self.session.execute(delete(Book).where(Book.id == book_id))
        await self.session.commit()
        return result.rowcount > 0

    async def _commit(self, isbn: Optional[str]) -> None:
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(f"ISBN冲突: {isbn}")
            raise DuplicateBookError(f"Book with ISBN {isbn} already exists") from e
