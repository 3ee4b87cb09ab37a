"""
书籍请求模型 - 创建/更新时的字段校验与类型转换
"""
from datetime import date
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

DEFAULT_LANGUAGE = "English"

# 界面提供的固定分类（后端不强制）
GENRES = [
    "Classic Literature",
    "Science Fiction",
    "Fantasy",
    "Romance",
    "Mystery",
    "Thriller",
    "Horror",
    "Non-Fiction",
    "Biography",
    "History",
    "Business",
    "Self-Help",
    "Children's Books",
    "Young Adult",
    "Coming of Age",
    "Dystopian Fiction",
    "Adventure",
    "Contemporary Fiction",
    "Historical Fiction",
    "Literary Fiction",
]

# 更新时不允许置空的字段
_REQUIRED_FIELDS = (
    "title", "author", "isbn", "published_date", "genre",
    "description", "price", "pages", "language", "rating",
)


def coerce_in_stock(value: Any) -> bool:
    """只有布尔值 true 或字符串 "true" 视为有货"""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


class _BookPayload(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
    )

    @field_validator("in_stock", mode="before", check_fields=False)
    @classmethod
    def _coerce_in_stock(cls, value):
        return coerce_in_stock(value)

    @field_validator("language", check_fields=False)
    @classmethod
    def _default_language(cls, value):
        if value is None:
            return value
        return value or DEFAULT_LANGUAGE

    @field_validator("cover_image", check_fields=False)
    @classmethod
    def _blank_cover_is_absent(cls, value):
        return value or None


class BookCreateRequest(_BookPayload):
    """创建书籍请求"""
    title: str = Field(min_length=1)
    author: str = Field(min_length=1)
    isbn: str = Field(min_length=1)
    published_date: date = Field(alias="publishedDate")
    genre: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: float = Field(ge=0)
    pages: int = Field(ge=1)
    language: str = DEFAULT_LANGUAGE
    in_stock: bool = Field(default=True, alias="inStock")
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    cover_image: Optional[str] = Field(default=None, alias="coverImage")

    def to_record(self) -> Dict[str, Any]:
        """转换为存储层字段"""
        data = self.model_dump()
        data["published_date"] = self.published_date.isoformat()
        return data


class BookUpdateRequest(_BookPayload):
    """更新书籍请求 - 只有请求中出现的字段才会被修改"""
    title: Optional[str] = Field(default=None, min_length=1)
    author: Optional[str] = Field(default=None, min_length=1)
    isbn: Optional[str] = Field(default=None, min_length=1)
    published_date: Optional[date] = Field(default=None, alias="publishedDate")
    genre: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    price: Optional[float] = Field(default=None, ge=0)
    pages: Optional[int] = Field(default=None, ge=1)
    language: Optional[str] = None
    in_stock: Optional[bool] = Field(default=None, alias="inStock")
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    cover_image: Optional[str] = Field(default=None, alias="coverImage")

    @model_validator(mode="after")
    def _reject_null_required(self):
        for name in _REQUIRED_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                alias = type(self).model_fields[name].alias or name
                raise ValueError(f"{alias} cannot be null")
        return self

    def changes(self) -> Dict[str, Any]:
        """按字段是否出现（而非真假值）收集修改"""
        data = self.model_dump(include=self.model_fields_set)
        if "published_date" in data:
            data["published_date"] = data["published_date"].isoformat()
        return data


def describe_validation_error(exc: ValidationError) -> str:
    """把 pydantic 的错误列表压成一行可读消息"""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"]) or "body"
        parts.append(f"{location}: {error['msg']}")
    return "Invalid book data - " + "; ".join(parts)
