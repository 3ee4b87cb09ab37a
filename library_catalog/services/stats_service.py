#!/usr/bin/env python3
"""
统计服务模块 - 负责馆藏汇总数据
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Optional
import logging

from ..repositories.book_repository import BookRepository

logger = logging.getLogger(__name__)


def round_one_decimal(value: Optional[float]) -> float:
    """四舍五入保留一位小数（0.05 向上进位，不用银行家舍入）"""
    if value is None:
        return 0.0
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class StatsService:
    """馆藏统计服务，统计范围始终是全部记录而不是当前页"""

    def __init__(self, book_repository: BookRepository):
        self.book_repository = book_repository

    async def get_stats(self) -> Dict:
        """获取统计数据"""
        total_books = await self.book_repository.count()
        if total_books == 0:
            return {
                "totalBooks": 0,
                "totalAuthors": 0,
                "totalGenres": 0,
                "averageRating": 0,
            }

        total_authors = await self.book_repository.count_distinct("author")
        total_genres = await self.book_repository.count_distinct("genre")
        average_rating = await self.book_repository.average("rating")

        stats = {
            "totalBooks": total_books,
            "totalAuthors": total_authors,
            "totalGenres": total_genres,
            "averageRating": round_one_decimal(average_rating),
        }
        logger.debug(f"统计数据: {stats}")
        return stats
