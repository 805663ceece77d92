# models/user.py
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, CHAR
from app.core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    # 基本欄位
    user_id = Column(CHAR(36), primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    # Gravatar 頭像 URL (Profile 查詢時一併帶出)
    avatar = Column(String(500))
    date = Column(DateTime(timezone=True), default=_utcnow)

    # Profile 與 Post 只以 user_id 參照 User，刪除帳號時由 ProfileService 一併清除
