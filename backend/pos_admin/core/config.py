"""
POS 管理工具配置

加载优先级（高 → 低）：
  1. 系统环境变量
  2. .env 文件（自动搜索：backend/.env → 项目根/.env）
  3. 下方 Settings 类中的默认值

⚠️  数据库地址不硬编码，必须由 .env 或环境变量提供。
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


def _find_env_file() -> Optional[str]:
    """
    按优先级搜索 .env 文件：
      1. backend/.env       — 相对于 config.py 向上三级
      2. 项目根/.env        — 相对于 config.py 向上四级
    """
    candidates = [
        Path(__file__).resolve().parent.parent.parent / ".env",         # backend/.env
        Path(__file__).resolve().parent.parent.parent.parent / ".env",  # 项目根/.env
    ]
    for p in candidates:
        if p.exists():
            logger.debug("📂 加载配置文件: %s", p)
            return str(p)
    return None


class Settings(BaseSettings):
    # ── 数据库（必须由 .env 提供） ──
    DATABASE_URL: str = ""

    # ── 调试 ──
    APP_DEBUG: bool = False

    # ── 管理员密码重置（默认值沿用 seed 数据中的管理员账号） ──
    RESET_TARGET_EMAIL: str = "admin@supermarket.com"
    RESET_NEW_PASSWORD: str = "password123"
    BCRYPT_ROUNDS: int = Field(default=10, ge=4, le=31)

    model_config = {
        "env_file": _find_env_file(),
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()


def _mask(val: str, show: int = 10) -> str:
    """对敏感值脱敏"""
    if not val:
        return "(未设置)"
    return val[:show] + "***" if len(val) > show else val


logger.debug(
    "配置加载完毕  DATABASE_URL=%s  RESET_TARGET_EMAIL=%s  BCRYPT_ROUNDS=%s",
    _mask(settings.DATABASE_URL, show=20),
    settings.RESET_TARGET_EMAIL,
    settings.BCRYPT_ROUNDS,
)
