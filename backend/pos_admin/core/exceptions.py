"""管理员密码重置异常定义"""


class PasswordResetError(Exception):
    """密码重置基础异常，所有子类都会终止本次运行"""

    def __init__(self, message: str, code: str = "reset_error", exit_code: int = 1):
        self.message = message
        self.code = code
        self.exit_code = exit_code
        super().__init__(self.message)


class UserNotFoundError(PasswordResetError):
    """目标账号不存在"""
    def __init__(self, email: str):
        self.email = email
        super().__init__(f"邮箱为 {email} 的用户不存在", code="user_not_found")


class StoreError(PasswordResetError):
    """数据库连接 / 查询 / 更新失败"""
    def __init__(self, message: str = "数据库操作失败"):
        super().__init__(message, code="store_error")


class HashingError(PasswordResetError):
    """密码哈希失败"""
    def __init__(self, message: str = "密码哈希失败"):
        super().__init__(message, code="hashing_error")
