"""
测试fixtures包
"""
from .sample_data import (
    SEED_RATINGS,
    GOOGLE_VOLUME,
    build_book_payload,
)

__all__ = [
    "SEED_RATINGS",
    "GOOGLE_VOLUME",
    "build_book_payload",
]
