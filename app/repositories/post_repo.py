# app/repositories/post_repo.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete
from app.models.post import Post

class PostRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def delete_by_user(self, user_id: str) -> int:
        """批次刪除某使用者的所有貼文 (不 commit)，回傳刪除筆數"""
        result = await self.db.execute(delete(Post).where(Post.user_id == user_id))
        return result.rowcount
