"""
重置 POS 管理员密码

使用方法:
    python reset_admin_password.py

目标账号与新密码通过 .env 或环境变量配置:
    RESET_TARGET_EMAIL (默认 admin@supermarket.com)
    RESET_NEW_PASSWORD (默认 password123)
"""

from pos_admin.cli import reset_admin_password

if __name__ == "__main__":
    reset_admin_password()
