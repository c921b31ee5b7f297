"""密码哈希工具"""

from typing import Optional

from passlib.context import CryptContext

from pos_admin.core.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """哈希密码，rounds 为空时使用配置的 BCRYPT_ROUNDS"""
    if rounds is None or rounds == settings.BCRYPT_ROUNDS:
        return pwd_context.hash(password)
    return pwd_context.copy(bcrypt__rounds=rounds).hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """验证密码"""
    return pwd_context.verify(plain_password, hashed_password)


def is_known_hash(hashed_password: Optional[str]) -> bool:
    """判断存储值是否为可识别的 bcrypt 哈希（旧数据可能是明文或其他格式）"""
    if not hashed_password:
        return False
    return pwd_context.identify(hashed_password) is not None
