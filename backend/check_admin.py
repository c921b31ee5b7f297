"""检查数据库连通性以及管理员账号能否用配置的密码登录"""

from pos_admin.cli import check_admin

if __name__ == "__main__":
    check_admin()
