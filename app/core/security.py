# app/core/security.py
# 負責密碼雜湊與 JWT 權杖的產生與驗證
from datetime import datetime, timedelta, timezone
from passlib.context import CryptContext
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import settings
from app.core.database import get_db
from app.schemas.user_schema import TokenData
from app.repositories.user_repo import UserRepository
from app.models.user import User

# 1. 密碼雜湊設定 (Bcrypt)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# 2. 定義 Token 從哪裡來 (Authorization Header)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """驗證明文密碼是否與雜湊值相符"""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """產生密碼的雜湊值"""
    return pwd_context.hash(password)

# 3. JWT 權杖產生與驗證
def create_access_token(data: dict) -> str:
    """
    根據傳入的 data (e.g., user_id) 產生 JWT access token
    """
    to_encode = data.copy() # 避免修改原始資料
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})

    encoded_jwt = jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM
    )
    return encoded_jwt

def verify_access_token(token: str) -> TokenData | None:
    """
    驗證 JWT，回傳 TokenData 或 None
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError:
        return None

    user_id = payload.get("user_id")
    if user_id is None:
        return None

    return TokenData(user_id=user_id)

def get_current_user_id(token: str = Depends(oauth2_scheme)) -> str:
    """
    FastAPI 依賴項：只驗證 Token，回傳其中的 user_id (不查詢資料庫)
    """
    token_data = verify_access_token(token)
    if token_data is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token is not valid",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token_data.user_id

async def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    FastAPI 依賴項：驗證 Token 並回傳 User Model
    未通過驗證的請求在進入 handler 之前就會被擋下 (401)
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Token is not valid",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token_data = verify_access_token(token)
    if token_data is None:
        raise credentials_exception

    user_repo = UserRepository(db)
    user = await user_repo.get_user_by_id(user_id=token_data.user_id)

    if user is None:
        raise credentials_exception

    return user
