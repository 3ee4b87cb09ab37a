"""
books 函数 - /api/books 的 serverless 版本
"""
from typing import Any, Dict, Tuple

from . import common

METHODS = ("GET", "POST", "PUT", "DELETE")


async def _dispatch(method: str, event: Dict[str, Any]) -> Tuple[int, Any]:
    segments = common.path_segments_after(event.get("path", ""), "books")
    book_id = segments[0] if segments else None
    params = event.get("queryStringParameters") or {}

    if method == "GET" and book_id:
        book = await common.get_runtime().run(lambda s: s.books.get_book(book_id))
        return 200, book.to_dict()

    if method == "GET":
        result = await common.get_runtime().run(lambda s: s.books.list_books(
            page=common.int_param(params, "page"),
            limit=common.int_param(params, "limit"),
            search=params.get("search"),
            genre=params.get("genre"),
        ))
        return 200, result

    if method == "POST":
        payload = common.parse_body(event)

        async def create(s):
            return (await s.books.create_book(payload)).to_dict()
        return 201, await common.get_runtime().run(create)

    if not book_id:
        return 400, {"error": "Book ID required"}

    if method == "PUT":
        payload = common.parse_body(event)

        async def update(s):
            return (await s.books.update_book(book_id, payload)).to_dict()
        return 200, await common.get_runtime().run(update)

    await common.get_runtime().run(lambda s: s.books.delete_book(book_id))
    return 200, {"message": "Book deleted successfully"}


def handler(event, context=None):
    return common.invoke(event, METHODS, _dispatch)
