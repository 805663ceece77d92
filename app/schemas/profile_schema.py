# app/schemas/profile_schema.py
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from app.schemas.user_schema import UserBrief


def _blank_to_none(value):
    # 表單常把未填的日期送成 ""，交給必填檢查處理而不是型別錯誤
    if isinstance(value, str) and not value.strip():
        return None
    return value


# --- 建立 / 更新 Profile ---
class ProfileUpsert(BaseModel):
    """
    所有欄位在型別上皆為選填；
    status / skills 的必填檢查由 app.utils.validators 統一處理 (400 + 欄位錯誤列表)
    """
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: Optional[str] = None
    githubusername: Optional[str] = None
    # 逗號分隔的字串 e.g. "node, css"
    skills: Optional[str] = None
    # 社群連結
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    linkedin: Optional[str] = None


class SocialLinks(BaseModel):
    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    linkedin: Optional[str] = None


# --- 經歷 (Experience) ---
class ExperienceCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    # "from" 是 Python 保留字，以 alias 對應 JSON 欄位
    from_: Optional[date] = Field(None, alias="from")
    to: Optional[date] = None
    current: bool = False
    description: Optional[str] = None

    @field_validator("from_", "to", mode="before")
    @classmethod
    def blank_dates_to_none(cls, value):
        return _blank_to_none(value)


class ExperienceOut(ExperienceCreate):
    id: str


# --- 學歷 (Education) ---
class EducationCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    school: Optional[str] = None
    degree: Optional[str] = None
    fieldofstudy: Optional[str] = None
    from_: Optional[date] = Field(None, alias="from")
    to: Optional[date] = None
    current: bool = False
    description: Optional[str] = None

    @field_validator("from_", "to", mode="before")
    @classmethod
    def blank_dates_to_none(cls, value):
        return _blank_to_none(value)


class EducationOut(EducationCreate):
    id: str


# --- 回應 ---
class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    profile_id: str
    user_id: str
    user: Optional[UserBrief] = None # 擁有者 name / avatar
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: str
    githubusername: Optional[str] = None
    skills: List[str] = []
    social: Optional[SocialLinks] = None
    experience: List[ExperienceOut] = []
    education: List[EducationOut] = []
    date: Optional[datetime] = None


class MessageOut(BaseModel):
    msg: str
