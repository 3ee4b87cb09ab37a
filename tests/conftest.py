"""
pytest配置文件，定义全局fixtures和测试配置
"""
import random
from typing import AsyncGenerator, Generator

import pytest
from fastapi.testclient import TestClient

from library_catalog.config import Settings
from library_catalog.database import create_engine, create_session_factory, init_database
from library_catalog.main import create_app
from library_catalog.repositories.book_repository import BookRepository


@pytest.fixture
def temp_db_path(tmp_path) -> str:
    """临时数据库文件路径"""
    return str(tmp_path / "catalog.db")


@pytest.fixture
def test_settings(temp_db_path: str) -> Settings:
    """测试配置：独立数据库，关闭外部查询"""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{temp_db_path}",
        default_page_size=12,
        enable_google_books=False,
        log_level="WARNING",
    )


@pytest.fixture
async def session_factory(test_settings: Settings) -> AsyncGenerator:
    """已建表的会话工厂"""
    engine = create_engine(test_settings.database_url)
    await init_database(engine)
    yield create_session_factory(engine)
    await engine.dispose()


@pytest.fixture
async def session(session_factory):
    async with session_factory() as db_session:
        yield db_session


@pytest.fixture
def book_repository(session) -> BookRepository:
    return BookRepository(session)


@pytest.fixture
def app(test_settings: Settings):
    """FastAPI应用（固定随机种子）"""
    return create_app(test_settings, rng=random.Random(42))


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """创建FastAPI测试客户端"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded_client(client: TestClient) -> TestClient:
    """写入6本示例书籍后的客户端"""
    response = client.post("/api/seed")
    assert response.status_code == 200
    assert response.json()["booksAdded"] == 6
    return client


def pytest_configure(config):
    """配置pytest标记"""
    config.addinivalue_line(
        "markers", "unit: 单元测试"
    )
    config.addinivalue_line(
        "markers", "integration: 集成测试"
    )
    config.addinivalue_line(
        "markers", "e2e: 端到端测试"
    )
