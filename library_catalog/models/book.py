"""
书籍模型
"""
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, Text

from ..database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """序列化为 ISO-8601 UTC 时间（毫秒精度，Z 结尾）"""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"


class Book(Base):
    """书籍模型"""
    __tablename__ = "books"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(500), nullable=False, index=True)
    author = Column(String(255), nullable=False, index=True)
    isbn = Column(String(32), nullable=False, unique=True)  # 唯一业务标识
    published_date = Column(String(10), nullable=False)
    genre = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)
    pages = Column(Integer, nullable=False)
    language = Column(String(50), nullable=False, default="English")
    in_stock = Column(Boolean, nullable=False, default=True)
    rating = Column(Float, nullable=False, default=0.0)
    cover_image = Column(String(1000), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": str(self.id),
            "title": self.title,
            "author": self.author,
            "isbn": self.isbn,
            "publishedDate": self.published_date,
            "genre": self.genre,
            "description": self.description,
            "price": self.price,
            "pages": self.pages,
            "language": self.language,
            "inStock": self.in_stock,
            "rating": self.rating,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }
        if self.cover_image:
            data["coverImage"] = self.cover_image
        return data

    def __repr__(self):
        return f"Book(id={self.id}, isbn='{self.isbn}', title='{self.title}')"
