# app/models/post.py
from sqlalchemy import Column, String, TEXT, ForeignKey, DateTime, CHAR
from app.core.database import Base
from app.models.user import _utcnow

class Post(Base):
    __tablename__ = "posts"
    post_id = Column(CHAR(36), primary_key=True)
    # 作者；刪除帳號時依此欄位批次刪除
    user_id = Column(CHAR(36), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column(TEXT, nullable=False)
    name = Column(String(100))
    avatar = Column(String(500))
    date = Column(DateTime(timezone=True), default=_utcnow)
