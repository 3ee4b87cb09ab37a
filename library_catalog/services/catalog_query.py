"""
列表查询 - 过滤条件构建与分页窗口计算
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy import or_

from ..models.book import Book

DEFAULT_PAGE_SIZE = 12


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class BookFilter:
    """书籍过滤条件

    search 对标题、作者、简介做不区分大小写的子串匹配（三者取或），
    genre 精确匹配，两者同时给出时取与。都为空时匹配全部记录。
    """
    search: Optional[str] = None
    genre: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "search", _clean(self.search))
        object.__setattr__(self, "genre", _clean(self.genre))

    @property
    def is_empty(self) -> bool:
        return self.search is None and self.genre is None

    def conditions(self) -> List[Any]:
        """生成 SQLAlchemy 过滤条件"""
        clauses = []
        if self.search:
            clauses.append(or_(
                Book.title.icontains(self.search, autoescape=True),
                Book.author.icontains(self.search, autoescape=True),
                Book.description.icontains(self.search, autoescape=True),
            ))
        if self.genre:
            clauses.append(Book.genre == self.genre)
        return clauses


@dataclass(frozen=True)
class PageWindow:
    """分页窗口，page 从 1 开始"""
    page: int
    limit: int

    @classmethod
    def build(cls, page: Optional[int] = None, limit: Optional[int] = None,
              default_limit: int = DEFAULT_PAGE_SIZE) -> "PageWindow":
        """规范化分页参数：limit<=0 使用默认值，page<1 视为第1页"""
        if default_limit is None or default_limit <= 0:
            default_limit = DEFAULT_PAGE_SIZE
        if limit is None or limit <= 0:
            limit = default_limit
        if page is None or page < 1:
            page = 1
        return cls(page=page, limit=limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        return -(-total // self.limit)

    def describe(self, total: int) -> Dict[str, Any]:
        """分页元数据"""
        total_pages = self.total_pages(total)
        return {
            "totalBooks": total,
            "totalPages": total_pages,
            "currentPage": self.page,
            "hasMore": self.page < total_pages,
        }
