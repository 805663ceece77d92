# app/schemas/user_schema.py
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, ConfigDict
from typing import Optional

# Token 回應的格式
class Token(BaseModel):
    access_token: str
    token_type: str

# Token 內的資料
class TokenData(BaseModel):
    user_id: str


# 註冊請求 Body
class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)

# 註冊/查詢使用者的安全回應 (不含密碼)
class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    name: str
    email: EmailStr
    avatar: Optional[str] = None
    date: Optional[datetime] = None

# Profile 查詢時帶出的擁有者資訊 (只有 name / avatar)
class UserBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    name: str
    avatar: Optional[str] = None
