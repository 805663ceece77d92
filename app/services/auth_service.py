import hashlib
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.user_repo import UserRepository
from app.core.security import verify_password, create_access_token, get_password_hash
from app.models.user import User
from fastapi import HTTPException, status
from app.schemas.user_schema import UserCreate
import uuid


def gravatar_url(email: str, size: int = 200) -> str:
    """依 email 產生 Gravatar 頭像 (pg 分級，找不到時用預設人像)"""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"https://www.gravatar.com/avatar/{digest}?s={size}&r=pg&d=mm"


class AuthService:
    def __init__(self, db: AsyncSession):
        self.user_repo = UserRepository(db)

    async def authenticate_user(self, email: str, password: str) -> User | None:
        """
        驗證使用者帳號密碼。
        成功回傳 User 物件，失敗回傳 None。
        """
        user = await self.user_repo.get_user_by_email(email)

        # 1. 檢查使用者是否存在
        if not user:
            return None

        # 2. 檢查密碼是否正確
        if not verify_password(plain_password=password, hashed_password=user.password_hash):
            return None

        return user

    async def register_user(self, user_create: UserCreate) -> User:
        """
        處理使用者註冊
        """
        # 1. 檢查 Email 是否已被註冊
        existing_user = await self.user_repo.get_user_by_email(user_create.email)
        if existing_user:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User already exists",
            )

        # 2. 建立 User ORM 模型 (密碼只存雜湊值)
        new_user = User(
            user_id=str(uuid.uuid4()),
            name=user_create.name,
            email=user_create.email,
            password_hash=get_password_hash(user_create.password),
            avatar=gravatar_url(user_create.email),
        )

        # 3. 呼叫 Repository 儲存到資料庫
        return await self.user_repo.create_user(new_user)

    def create_login_token(self, user: User) -> str:
        """
        為指定使用者建立 access token
        """
        return create_access_token(
            data={
                "sub": user.email,
                "user_id": str(user.user_id),
            }
        )
