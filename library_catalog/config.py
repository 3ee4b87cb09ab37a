#!/usr/bin/env python3
"""
应用配置 - 从环境变量和 .env 文件读取
"""
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass
class Settings:
    # API设置
    api_host: str = field(default_factory=lambda: os.getenv("API_HOST", "127.0.0.1"))
    api_port: int = field(default_factory=lambda: int(os.getenv("API_PORT", "8000")))
    cors_origins: List[str] = field(default_factory=lambda: _env_list("CORS_ORIGINS", "*"))
    ping_message: str = field(default_factory=lambda: os.getenv("PING_MESSAGE", "ping"))

    # 数据库设置
    database_url: str = field(
        default_factory=lambda: os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./data/library.db")
    )

    # 分页设置
    default_page_size: int = field(default_factory=lambda: int(os.getenv("DEFAULT_PAGE_SIZE", "12")))

    # 日志设置
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    # Google Books 设置
    google_books_api_key: Optional[str] = field(default_factory=lambda: os.getenv("GOOGLE_BOOKS_API_KEY"))
    google_books_base_url: str = field(
        default_factory=lambda: os.getenv("GOOGLE_BOOKS_BASE_URL", "https://www.googleapis.com/books/v1/volumes")
    )
    google_books_timeout: float = field(default_factory=lambda: float(os.getenv("GOOGLE_BOOKS_TIMEOUT", "10")))
    enable_google_books: bool = field(default_factory=lambda: _env_bool("ENABLE_GOOGLE_BOOKS", "True"))


settings = Settings()
