"""
seed 函数 - /api/seed 的 serverless 版本
"""
from . import common


async def _dispatch(method, event):
    return 200, await common.get_runtime().run(lambda s: s.books.seed_books())


def handler(event, context=None):
    return common.invoke(event, ("POST",), _dispatch)
