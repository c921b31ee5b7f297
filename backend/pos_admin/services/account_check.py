"""管理员账号检查：验证数据库连通性及密码是否可用（只读）"""

import logging
from typing import Awaitable, Callable, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pos_admin.core.config import settings
from pos_admin.core.database import dispose_engine, get_session_factory, safe_release
from pos_admin.core.exceptions import PasswordResetError, StoreError, UserNotFoundError
from pos_admin.core.security import is_known_hash, verify_password
from pos_admin.models.user import User
from pos_admin.services.password_reset import find_user_by_email

logger = logging.getLogger(__name__)


async def count_users(session: AsyncSession) -> int:
    """统计用户数量"""
    try:
        result = await session.execute(select(func.count(User.id)))
    except (SQLAlchemyError, OSError) as e:
        raise StoreError(f"连接数据库失败: {e}") from e
    return result.scalar_one()


class AccountCheckTool:
    """检查目标账号存在且密码与配置一致"""

    def __init__(
        self,
        email: Optional[str] = None,
        password: Optional[str] = None,
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
        release: Optional[Callable[[], Awaitable[None]]] = None,
    ):
        self.email = email if email is not None else settings.RESET_TARGET_EMAIL
        self.password = password if password is not None else settings.RESET_NEW_PASSWORD
        self._session_factory = session_factory
        self._release = release or dispose_engine

    async def check(self) -> bool:
        session_factory = self._session_factory or get_session_factory()
        async with session_factory() as session:
            total = await count_users(session)
            logger.info("数据库连接成功，用户数: %d", total)

            user = await find_user_by_email(session, self.email)
            if user is None:
                raise UserNotFoundError(self.email)

        if not is_known_hash(user.password):
            logger.warning("⚠️  %s 的密码不是可识别的 bcrypt 哈希", self.email)
            return False
        return verify_password(self.password, user.password)

    async def run(self) -> int:
        logger.info("🔍 检查账号 %s ...", self.email)
        try:
            ok = await self.check()
        except PasswordResetError as e:
            logger.error("❌ %s", e.message)
            code = e.exit_code
        except Exception as e:
            logger.error("❌ 检查失败: %s", e)
            code = 1
        else:
            if ok:
                logger.info("✅ %s 可使用配置的密码登录", self.email)
                code = 0
            else:
                logger.warning("⚠️  %s 的密码与配置不一致", self.email)
                code = 1
        finally:
            released = await safe_release(self._release)

        return code if released else 1
