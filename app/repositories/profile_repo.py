# app/repositories/profile_repo.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import joinedload
from app.models.profile import Profile
from app.models.user import _utcnow
from typing import Any, Dict, List
import uuid


class ProfileRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    # (重要) 所有讀取都 Eager Load 擁有者 (name / avatar)，
    # 並以 populate_existing 覆蓋 Session 中可能已過期的物件
    def _select(self):
        return (
            select(Profile)
            .options(joinedload(Profile.user))
            .execution_options(populate_existing=True)
        )

    async def get_by_user_id(self, user_id: str) -> Profile | None:
        stmt = self._select().where(Profile.user_id == user_id)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def list_all(self) -> List[Profile]:
        stmt = self._select().order_by(Profile.date.desc())
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def create(self, user_id: str, fields: Dict[str, Any]) -> Profile:
        new_profile = Profile(
            **fields,
            profile_id=str(uuid.uuid4()),
            user_id=user_id,
            experience=[],
            education=[],
        )
        self.db.add(new_profile)
        await self.db.commit()
        return await self.get_by_user_id(user_id)

    async def upsert(self, user_id: str, fields: Dict[str, Any]) -> Profile:
        """
        以 user_id 為鍵的單一 INSERT ... ON CONFLICT/DUPLICATE KEY UPDATE，
        存在就更新 fields，不存在就建立
        """
        values = {
            "profile_id": str(uuid.uuid4()),
            "user_id": user_id,
            "experience": [],
            "education": [],
            "date": _utcnow(),
            **fields,
        }

        dialect = self.db.get_bind().dialect.name
        if dialect in ("mysql", "mariadb"):
            stmt = mysql_insert(Profile).values(**values)
            stmt = stmt.on_duplicate_key_update(**fields)
        else:
            insert = postgresql_insert if dialect == "postgresql" else sqlite_insert
            stmt = insert(Profile).values(**values)
            stmt = stmt.on_conflict_do_update(index_elements=[Profile.user_id], set_=fields)

        await self.db.execute(stmt)
        await self.db.commit()
        return await self.get_by_user_id(user_id)

    async def save_entries(self, profile: Profile, section: str, entries: List[Dict[str, Any]]) -> Profile:
        """
        覆寫 experience / education 整個列表 (讀取-修改-寫回)
        JSON 欄位必須指派新的 list，SQLAlchemy 才會偵測到變更
        """
        setattr(profile, section, entries)
        await self.db.commit()
        return await self.get_by_user_id(profile.user_id)

    async def delete_by_user_id(self, user_id: str) -> None:
        # 不 commit：由呼叫端決定交易邊界
        await self.db.execute(delete(Profile).where(Profile.user_id == user_id))
