"""命令行入口：pos-reset-admin / pos-check-admin"""

import asyncio
import logging
import sys

from pos_admin.core.config import settings
from pos_admin.services.account_check import AccountCheckTool
from pos_admin.services.password_reset import PasswordResetTool


def setup_logging() -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.APP_DEBUG else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    # SQL 输出由 APP_DEBUG 控制的 echo 负责
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


def reset_admin_password() -> None:
    """重置管理员密码，按结果设置退出码"""
    setup_logging()
    sys.exit(asyncio.run(PasswordResetTool().run()))


def check_admin() -> None:
    """检查管理员账号是否可用配置的密码登录"""
    setup_logging()
    sys.exit(asyncio.run(AccountCheckTool().run()))
