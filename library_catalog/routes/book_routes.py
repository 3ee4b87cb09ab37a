#!/usr/bin/env python3
"""
书籍管理路由
"""
from typing import Any, Optional
import logging

from fastapi import APIRouter, Body, Depends, Query, Request

from ..exceptions import BookNotFoundError, BookValidationError, LookupUnavailableError
from ..repositories.book_repository import BookRepository
from ..services.book_service import BookService
from ..services.stats_service import StatsService

logger = logging.getLogger(__name__)

# 创建路由
book_router = APIRouter(prefix="/api", tags=["books"])


async def get_session(request: Request):
    """每个请求一个数据库会话"""
    async with request.app.state.session_factory() as session:
        yield session


def get_book_service(request: Request, session=Depends(get_session)) -> BookService:
    return BookService(
        BookRepository(session),
        rng=request.app.state.rng,
        default_page_size=request.app.state.settings.default_page_size,
    )


def get_stats_service(session=Depends(get_session)) -> StatsService:
    return StatsService(BookRepository(session))


def get_lookup_client(request: Request):
    client = request.app.state.lookup_client
    if client is None:
        raise LookupUnavailableError("Book lookup is disabled")
    return client


@book_router.get("/ping")
async def ping(request: Request):
    return {"message": request.app.state.settings.ping_message}


@book_router.get("/books")
async def get_books(
    page: Optional[int] = Query(None, description="页码，从1开始"),
    limit: Optional[int] = Query(None, description="每页数量，<=0 时使用默认值"),
    search: Optional[str] = Query(None, description="搜索书名、作者或简介"),
    genre: Optional[str] = Query(None, description="分类精确匹配"),
    service: BookService = Depends(get_book_service),
):
    """获取书籍列表（支持搜索、筛选和分页）"""
    return await service.list_books(page=page, limit=limit, search=search, genre=genre)


@book_router.get("/books/{book_id}")
async def get_book(book_id: str, service: BookService = Depends(get_book_service)):
    """获取单本书籍"""
    book = await service.get_book(book_id)
    return book.to_dict()


@book_router.post("/books", status_code=201)
async def create_book(payload: Any = Body(None), service: BookService = Depends(get_book_service)):
    """创建书籍"""
    book = await service.create_book(payload)
    return book.to_dict()


@book_router.put("/books/{book_id}")
async def update_book(book_id: str, payload: Any = Body(None),
                      service: BookService = Depends(get_book_service)):
    """更新书籍"""
    book = await service.update_book(book_id, payload)
    return book.to_dict()


@book_router.delete("/books/{book_id}")
async def delete_book(book_id: str, service: BookService = Depends(get_book_service)):
    """删除书籍"""
    await service.delete_book(book_id)
    return {"message": "Book deleted successfully"}


@book_router.post("/books/{book_id}/enrich")
async def enrich_book(book_id: str, service: BookService = Depends(get_book_service),
                      lookup_client=Depends(get_lookup_client)):
    """从 Google Books 补全封面"""
    book = await service.enrich_book(book_id, lookup_client)
    return book.to_dict()


@book_router.get("/stats")
async def get_stats(service: StatsService = Depends(get_stats_service)):
    """馆藏统计"""
    return await service.get_stats()


@book_router.post("/seed")
async def seed_database(service: BookService = Depends(get_book_service)):
    """写入示例数据"""
    return await service.seed_books()


@book_router.get("/lookup")
async def lookup_book(
    title: Optional[str] = Query(None),
    author: Optional[str] = Query(None),
    isbn: Optional[str] = Query(None),
    lookup_client=Depends(get_lookup_client),
):
    """按书名/作者/ISBN查询外部书目，用于预填表单"""
    title = (title or "").strip() or None
    isbn = (isbn or "").strip() or None
    if not (title or isbn):
        raise BookValidationError("Provide a title or an isbn to look up")
    data = await lookup_client.enrich(title=title, author=author, isbn=isbn)
    if data is None:
        raise BookNotFoundError("No matching book found")
    return data
