"""ORM 模型"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


from pos_admin.models.user import User  # noqa: E402

__all__ = ["Base", "User"]
