"""数据库连接管理"""

import logging
from typing import Awaitable, Callable, Optional

from sqlalchemy.exc import ArgumentError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from pos_admin.core.config import settings
from pos_admin.core.exceptions import StoreError

logger = logging.getLogger(__name__)

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker[AsyncSession]] = None


def create_engine(url: str, echo: bool = False) -> AsyncEngine:
    """根据 DATABASE_URL 创建异步引擎（此时不会真正建立连接）"""
    if not url:
        raise StoreError("DATABASE_URL 未配置，无法连接数据库")
    try:
        # 一次性脚本只需要单个连接
        if url.startswith("sqlite"):
            return create_async_engine(url, echo=echo)
        return create_async_engine(url, echo=echo, pool_size=1, max_overflow=0, pool_pre_ping=True)
    except (ArgumentError, ImportError) as e:
        raise StoreError(f"无效的数据库地址: {e}") from e


def get_engine() -> AsyncEngine:
    """获取全局引擎，首次调用时创建"""
    global _engine
    if _engine is None:
        _engine = create_engine(settings.DATABASE_URL, echo=settings.APP_DEBUG)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """获取全局会话工厂"""
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _session_factory


async def dispose_engine() -> None:
    """断开数据库连接（关闭连接池中的所有连接）"""
    global _engine, _session_factory
    if _engine is None:
        return
    await _engine.dispose()
    logger.debug("数据库连接已释放")
    _engine = None
    _session_factory = None


async def safe_release(release: Callable[[], Awaitable[None]]) -> bool:
    """执行释放函数，失败时记录错误并返回 False"""
    try:
        await release()
    except Exception as e:
        logger.error("❌ 释放数据库连接失败: %s", e)
        return False
    return True
