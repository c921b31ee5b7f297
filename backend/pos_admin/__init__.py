"""POS 后台管理员账号维护工具"""

__version__ = "1.0.0"
