#!/usr/bin/env python3
"""
启动脚本 - 图书馆藏管理系统（开发模式）
使用方法: python run.py
"""

import logging
import uvicorn

from library_catalog.config import settings

# 配置详细日志
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler('debug.log', encoding='utf-8')
    ]
)

# 设置特定模块的日志级别
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("uvicorn.error").setLevel(logging.INFO)
logging.getLogger("aiosqlite").setLevel(logging.INFO)

if __name__ == "__main__":
    logging.info("=" * 60)
    logging.info("启动图书馆藏管理系统")
    logging.info(f"数据库: {settings.database_url}")
    logging.info("=" * 60)

    uvicorn.run(
        "library_catalog.main:create_app",
        factory=True,
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        reload_dirs=["library_catalog"],
        log_level="debug"
    )
