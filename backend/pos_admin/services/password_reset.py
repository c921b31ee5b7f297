"""
管理员密码重置

流程: 连接数据库 → 按邮箱查找用户 → bcrypt 哈希新密码 → 按邮箱更新 → 输出结果 → 释放连接

- 只修改已存在用户的 password 字段，从不创建用户
- 每次运行恰好一次读（存在性检查）和一次写（更新密码）
- 无论成功、用户不存在还是异常，数据库连接都会且只会释放一次
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pos_admin.core.config import settings
from pos_admin.core.database import dispose_engine, get_session_factory, safe_release
from pos_admin.core.exceptions import HashingError, PasswordResetError, StoreError, UserNotFoundError
from pos_admin.core.security import hash_password
from pos_admin.models.user import User

logger = logging.getLogger(__name__)


@dataclass
class ResetResult:
    email: str
    password: str
    hashed_password: str


async def find_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    """按唯一邮箱查找用户，不存在返回 None"""
    try:
        result = await session.execute(select(User).where(User.email == email))
    except (SQLAlchemyError, OSError) as e:
        raise StoreError(f"查询用户失败: {e}") from e
    return result.scalar_one_or_none()


async def update_user_password(session: AsyncSession, email: str, hashed_password: str) -> int:
    """按唯一邮箱更新密码并提交，返回受影响行数"""
    try:
        result = await session.execute(
            update(User)
            .where(User.email == email)
            .values(password=hashed_password, updated_at=datetime.now(timezone.utc))
        )
        await session.commit()
    except (SQLAlchemyError, OSError) as e:
        raise StoreError(f"更新密码失败: {e}") from e
    if result.rowcount == 0:
        # 查询与更新之间记录被删除
        raise StoreError(f"更新密码失败: 用户 {email} 已不存在")
    return result.rowcount


class PasswordResetTool:
    """重置指定账号的密码，默认目标为 seed 数据中的管理员"""

    def __init__(
        self,
        email: Optional[str] = None,
        password: Optional[str] = None,
        rounds: Optional[int] = None,
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
        release: Optional[Callable[[], Awaitable[None]]] = None,
    ):
        self.email = email if email is not None else settings.RESET_TARGET_EMAIL
        self.password = password if password is not None else settings.RESET_NEW_PASSWORD
        self.rounds = rounds if rounds is not None else settings.BCRYPT_ROUNDS
        self._session_factory = session_factory
        self._release = release or dispose_engine

    def _hash(self) -> str:
        try:
            return hash_password(self.password, rounds=self.rounds)
        except Exception as e:
            raise HashingError(f"密码哈希失败: {e}") from e

    async def reset(self) -> ResetResult:
        """执行查找 + 哈希 + 更新，失败时抛出 PasswordResetError 子类，不负责释放连接"""
        session_factory = self._session_factory or get_session_factory()
        async with session_factory() as session:
            user = await find_user_by_email(session, self.email)
            if user is None:
                raise UserNotFoundError(self.email)

            hashed = self._hash()
            await update_user_password(session, self.email, hashed)

        return ResetResult(email=self.email, password=self.password, hashed_password=hashed)

    async def run(self) -> int:
        """运行一次重置，返回进程退出码（0 成功，非 0 失败）"""
        logger.info("🔐 正在重置 %s 的密码...", self.email)
        try:
            result = await self.reset()
        except PasswordResetError as e:
            logger.error("❌ %s", e.message)
            code = e.exit_code
        except Exception as e:
            logger.error("❌ 重置密码失败: %s", e)
            code = 1
        else:
            # 密码已提交，即使随后释放连接失败也要输出结果
            logger.info("✅ 密码重置成功: %s", result.email)
            logger.info("📧 邮箱: %s", result.email)
            # 明文输出沿用原脚本行为，方便运维人员登录
            logger.info("🔑 新密码: %s", result.password)
            logger.warning("⚠️  请登录后立即修改此密码!")
            code = 0
        finally:
            released = await safe_release(self._release)

        return code if released else 1
