# app/models/profile.py
from sqlalchemy import Column, String, TEXT, ForeignKey, JSON, DateTime, CHAR
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.user import _utcnow

class Profile(Base):
    __tablename__ = "profiles"
    profile_id = Column(CHAR(36), primary_key=True)
    # 一個 User 只會有一份 Profile (upsert 以此欄位為鍵)
    user_id = Column(CHAR(36), ForeignKey("users.user_id", ondelete="CASCADE"), unique=True, nullable=False, index=True)
    company = Column(String(255))
    website = Column(String(500))
    location = Column(String(255))
    bio = Column(TEXT)
    status = Column(String(255), nullable=False)
    githubusername = Column(String(100))

    # 已切割、去空白的技能清單 e.g. ["node", "css"]
    skills = Column(JSON, nullable=False, default=list)
    # {"youtube": ..., "twitter": ..., ...}
    social = Column(JSON, default=dict)
    # 經歷 / 學歷：最新的在最前面，每筆都有系統產生的 "id"
    experience = Column(JSON, nullable=False, default=list)
    education = Column(JSON, nullable=False, default=list)

    date = Column(DateTime(timezone=True), default=_utcnow)

    # 查詢 Profile 時一併帶出擁有者的 name / avatar
    user = relationship("User", lazy="joined")
