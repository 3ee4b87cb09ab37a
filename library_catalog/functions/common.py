"""
Serverless 函数公共部分 - 事件解析、响应格式、异常映射

事件格式兼容 Netlify Functions / AWS Lambda 代理集成：
httpMethod、path、queryStringParameters、body。
"""
import asyncio
import base64
import json
import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, Optional

from ..config import Settings, settings as default_settings
from ..database import create_engine, create_session_factory, init_database
from ..exceptions import BookValidationError, CatalogException, error_payload
from ..repositories.book_repository import BookRepository
from ..services.book_service import BookService
from ..services.stats_service import StatsService

logger = logging.getLogger(__name__)


def cors_headers(methods: Iterable[str]) -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Allow-Methods": ", ".join(list(methods) + ["OPTIONS"]),
        "Content-Type": "application/json",
    }


def json_response(status_code: int, body: Any, headers: Dict[str, str]) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": headers,
        "body": "" if body is None else json.dumps(body),
    }


def parse_body(event: Dict[str, Any]) -> Any:
    """解析JSON请求体"""
    raw = event.get("body")
    if raw is None or raw == "":
        return None
    if event.get("isBase64Encoded"):
        raw = base64.b64decode(raw).decode("utf-8")
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        raise BookValidationError("Request body is not valid JSON") from e


def int_param(params: Dict[str, Any], name: str) -> Optional[int]:
    """查询参数转整数，空值返回 None"""
    value = params.get(name)
    if value is None or str(value).strip() == "":
        return None
    try:
        return int(str(value).strip())
    except ValueError as e:
        raise BookValidationError(f"{name} must be an integer") from e


def path_segments_after(path: str, marker: str) -> list:
    """返回路径中 marker 之后的各段，例如 /api/books/12 -> ['12']"""
    parts = [part for part in (path or "").split("/") if part]
    if marker not in parts:
        return []
    return parts[parts.index(marker) + 1:]


class Services:
    """一次调用内共用同一个会话的服务集合"""

    def __init__(self, session, settings: Settings):
        repository = BookRepository(session)
        self.books = BookService(repository, default_page_size=settings.default_page_size)
        self.stats = StatsService(repository)


class FunctionRuntime:
    """函数实例级别的数据库引擎，冷启动时创建，表结构只初始化一次"""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self.engine = create_engine(self.settings.database_url, serverless=True)
        self.session_factory = create_session_factory(self.engine)
        self._initialized = False

    async def run(self, operation: Callable[[Services], Awaitable[Any]]) -> Any:
        if not self._initialized:
            await init_database(self.engine)
            self._initialized = True
        async with self.session_factory() as session:
            return await operation(Services(session, self.settings))


# 第一次调用时创建
runtime: Optional[FunctionRuntime] = None


def get_runtime() -> FunctionRuntime:
    global runtime
    if runtime is None:
        runtime = FunctionRuntime()
    return runtime


def configure(settings: Settings) -> FunctionRuntime:
    """替换运行时配置（测试或自定义部署使用）"""
    global runtime
    runtime = FunctionRuntime(settings)
    return runtime


def invoke(event: Dict[str, Any], methods: Iterable[str],
           dispatch: Callable[[str, Dict[str, Any]], Awaitable[Dict[str, Any]]]) -> Dict[str, Any]:
    """执行一次函数调用：处理预检、方法校验和异常映射"""
    methods = list(methods)
    headers = cors_headers(methods)
    method = (event.get("httpMethod") or "GET").upper()

    if method == "OPTIONS":
        return json_response(200, None, headers)
    if method not in methods:
        return json_response(405, {"error": "Method not allowed"}, headers)

    try:
        status_code, body = asyncio.run(dispatch(method, event))
        return json_response(status_code, body, headers)
    except CatalogException as e:
        if e.status_code >= 500:
            logger.error(f"函数调用失败 {method} {event.get('path')}: {e.message}")
        return json_response(e.status_code, error_payload(e), headers)
    except Exception as e:
        logger.exception(f"函数调用异常 {method} {event.get('path')}: {e}")
        return json_response(500, {"error": "Internal server error"}, headers)
