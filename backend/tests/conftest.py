"""
Pytest 配置文件
提供内存数据库、会话工厂等测试 fixtures
"""
import sys
from pathlib import Path

# 添加 backend 目录到 Python 路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
import pytest_asyncio
from unittest.mock import AsyncMock
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from pos_admin.models import Base, User

ADMIN_EMAIL = "admin@supermarket.com"
CASHIER_EMAIL = "cashier@supermarket.com"


@pytest_asyncio.fixture
async def engine():
    """内存 SQLite 引擎（StaticPool 保证所有会话共用同一个连接）"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def seeded_users(session_factory):
    """与 seed 数据一致的两个账号，管理员密码为旧值 oldhash"""
    async with session_factory() as session:
        session.add_all([
            User(email=ADMIN_EMAIL, password="oldhash", name="Admin User", role="ADMIN"),
            User(email=CASHIER_EMAIL, password="cashier-oldhash", name="Cashier User", role="CASHIER"),
        ])
        await session.commit()


@pytest.fixture
def release():
    """替代 engine.dispose 的释放函数，用于统计调用次数"""
    return AsyncMock()


@pytest.fixture
def get_password(session_factory):
    """读取指定邮箱当前存储的密码"""
    async def _get(email: str):
        async with session_factory() as session:
            result = await session.execute(select(User.password).where(User.email == email))
            return result.scalar_one_or_none()
    return _get


def pytest_configure(config):
    """Pytest配置"""
    config.addinivalue_line(
        "markers", "integration: 标记为集成测试 (需要真实数据库)"
    )
    config.addinivalue_line(
        "markers", "unit: 标记为单元测试 (使用内存数据库或Mock)"
    )
