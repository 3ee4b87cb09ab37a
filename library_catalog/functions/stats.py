"""
stats 函数 - /api/stats 的 serverless 版本
"""
from . import common


async def _dispatch(method, event):
    return 200, await common.get_runtime().run(lambda s: s.stats.get_stats())


def handler(event, context=None):
    return common.invoke(event, ("GET",), _dispatch)
