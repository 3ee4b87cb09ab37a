"""
业务异常定义
"""


class CatalogException(Exception):
    """基础异常类"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BookNotFoundError(CatalogException):
    """书籍未找到异常"""
    status_code = 404


class BookValidationError(CatalogException):
    """书籍数据校验异常"""
    status_code = 400


class DuplicateBookError(CatalogException):
    """重复ISBN异常"""
    status_code = 400


class StoreError(CatalogException):
    """存储层异常"""
    status_code = 500


class LookupUnavailableError(CatalogException):
    """外部书目查询不可用"""
    status_code = 503


def error_payload(exc: CatalogException) -> dict:
    return {"error": exc.message}
