#!/usr/bin/env python3
"""
主应用入口
"""
import logging
import random
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from .config import Settings, settings as default_settings
from .database import create_engine, create_session_factory, init_database
from .exceptions import CatalogException, error_payload
from .routes.book_routes import book_router
from .services.google_books import GoogleBooksClient

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_app(settings: Optional[Settings] = None, rng: Optional[random.Random] = None) -> FastAPI:
    """创建FastAPI应用"""
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(
        title="图书馆藏管理系统",
        description="书籍目录的增删改查、搜索分页与统计",
        version="1.0.0"
    )

    engine = create_engine(settings.database_url)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.rng = rng or random.Random()
    app.state.lookup_client = None
    if settings.enable_google_books:
        app.state.lookup_client = GoogleBooksClient(
            base_url=settings.google_books_base_url,
            api_key=settings.google_books_api_key,
            timeout=settings.google_books_timeout,
        )

    # 配置CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 注册路由
    app.include_router(book_router)

    @app.exception_handler(CatalogException)
    async def catalog_exception_handler(request: Request, exc: CatalogException):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} 失败: {exc.message}")
        else:
            logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=error_payload(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        parts = []
        for error in exc.errors():
            location = ".".join(str(item) for item in error["loc"])
            parts.append(f"{location}: {error['msg']}")
        return JSONResponse(status_code=400, content={"error": "Invalid request - " + "; ".join(parts)})

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"{request.method} {request.url.path} 未处理异常: {exc}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.on_event("startup")
    async def startup_event():
        """应用启动事件"""
        logger.info("应用启动中...")
        await init_database(app.state.engine)
        logger.info("数据库连接就绪")

    @app.on_event("shutdown")
    async def shutdown_event():
        """应用关闭事件"""
        logger.info("应用关闭中...")
        await app.state.engine.dispose()

    @app.get("/health")
    async def health_check():
        """健康检查接口"""
        return {"status": "healthy", "database": "connected"}

    return app


def run_server(host: Optional[str] = None, port: Optional[int] = None):
    """运行服务器"""
    uvicorn.run(create_app(), host=host or default_settings.api_host, port=port or default_settings.api_port)


if __name__ == "__main__":
    run_server()
