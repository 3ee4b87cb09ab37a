"""
数据库配置
"""
import logging
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

logger = logging.getLogger(__name__)

# 创建基础模型类
Base = declarative_base()


def _ensure_sqlite_dir(database_url: str) -> None:
    """SQLite文件库需要目录先存在"""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return
    if url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_connection, connection_record):
    """SQLite 自带的 lower() 只处理 ASCII 字母，替换为 Python 的实现"""
    dbapi_connection.create_function("lower", 1, _unicode_lower)


def create_engine(database_url: str, serverless: bool = False) -> AsyncEngine:
    """创建异步数据库引擎

    serverless 模式下每次调用都在新的事件循环里执行，不能复用连接池。
    """
    _ensure_sqlite_dir(database_url)
    if serverless:
        engine = create_async_engine(database_url, poolclass=NullPool)
    else:
        engine = create_async_engine(database_url)
    if engine.url.get_backend_name() == "sqlite":
        event.listen(engine.sync_engine, "connect", _register_sqlite_functions)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """创建会话工厂"""
    return async_sessionmaker(engine, expire_on_commit=False)


async def init_database(engine: AsyncEngine) -> None:
    """初始化数据库，创建所有表"""
    # 注册模型到 Base.metadata
    from .models import book  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"数据库初始化完成: {engine.url}")
