"""
数据库初始化脚本 - 创建表并写入示例用户与举报
"""
from reportdesk.core.db import Base, SessionLocal, engine
from reportdesk.models.enums import ReportType, Role
from reportdesk.models.report import Report
from reportdesk.models.user import User


def init_tables():
    """创建所有表"""
    Base.metadata.create_all(bind=engine)
    print("✅ tables created")


def insert_sample_data():
    """插入示例数据（已有用户时跳过）"""
    db = SessionLocal()
    try:
        if db.query(User).first():
            print("📝 sample data already present, skipping")
            return

        admin = User(email="admin@servihub.com", role=Role.ADMIN, name="Admin User")
        user_one = User(email="user1@servihub.com", name="User One")
        user_two = User(email="user2@servihub.com", name="User Two")
        db.add_all([admin, user_one, user_two])
        db.flush()

        db.add_all([
            Report(type=ReportType.REVIEW, target_id=101, reason="Spam content", submitted_by=user_one.id),
            Report(type=ReportType.OTHER, target_id=105, reason="Harassment", submitted_by=user_two.id),
            Report(type=ReportType.BUSINESS, target_id=105, reason="Business Trip", submitted_by=user_one.id),
        ])
        db.commit()
        print("✅ sample users and reports inserted")
    except Exception as e:
        db.rollback()
        print(f"❌ seeding failed: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    init_tables()
    insert_sample_data()
