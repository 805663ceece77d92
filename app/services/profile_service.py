# app/services/profile_service.py
import logging
import uuid
from typing import Any, Dict, List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status
from app.models.profile import Profile
from app.repositories.profile_repo import ProfileRepository
from app.repositories.post_repo import PostRepository
from app.repositories.user_repo import UserRepository
from app.schemas.profile_schema import ProfileUpsert, ExperienceCreate, EducationCreate

logger = logging.getLogger(__name__)

# 直接對應到 Profile 欄位的輸入欄位
PROFILE_FIELDS = ("company", "website", "location", "bio", "status", "githubusername")
SOCIAL_FIELDS = ("youtube", "twitter", "facebook", "instagram", "linkedin")

NO_PROFILE_MSG = "There is no profile for this user"
PROFILE_NOT_FOUND_MSG = "Profile not found"


def split_skills(raw: str) -> List[str]:
    """
    "node, css " -> ["node", "css"]
    """
    return [skill.strip() for skill in raw.split(",") if skill.strip()]


def build_profile_fields(profile_data: ProfileUpsert) -> Dict[str, Any]:
    """將請求 Body 轉成要寫入的欄位；沒有傳入的欄位不會覆蓋既有值"""
    fields = profile_data.model_dump(include=set(PROFILE_FIELDS), exclude_unset=True)

    social = {}
    for name in SOCIAL_FIELDS:
        value = getattr(profile_data, name)
        if value is not None:
            social[name] = value
    fields["social"] = social
    fields["skills"] = split_skills(profile_data.skills)
    return fields


def normalize_user_id(user_id: str) -> str | None:
    """
    轉成資料庫中的格式 (小寫、含連字號)；格式錯誤回傳 None
    e.g. "0F8FAD5BD9CB469FA16570867728950E" -> "0f8fad5b-d9cb-469f-a165-70867728950e"
    """
    try:
        return str(uuid.UUID(user_id))
    except ValueError:
        return None


class ProfileService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = ProfileRepository(db)
        self.post_repo = PostRepository(db)
        self.user_repo = UserRepository(db)

    async def get_my_profile(self, user_id: str) -> Profile:
        profile = await self.repo.get_by_user_id(user_id)
        if not profile:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, NO_PROFILE_MSG)
        return profile

    async def upsert_my_profile(self, user_id: str, profile_data: ProfileUpsert) -> Profile:
        """
        建立或更新 Profile。
        已存在 -> upsert (若期間被刪除則重新建立)
        不存在 -> 建立；同時有另一個請求先建立時 (unique 衝突) 改走 upsert
        """
        fields = build_profile_fields(profile_data)

        existing_profile = await self.repo.get_by_user_id(user_id)
        if existing_profile:
            return await self.repo.upsert(user_id, fields)

        try:
            return await self.repo.create(user_id, fields)
        except IntegrityError:
            await self.db.rollback()
            logger.info(f"Profile for user {user_id} created concurrently, updating instead")
            return await self.repo.upsert(user_id, fields)

    async def list_profiles(self) -> List[Profile]:
        return await self.repo.list_all()

    async def get_profile_by_user_id(self, user_id: str) -> Profile:
        """公開查詢；格式錯誤的 ID 與查無資料一樣回 400"""
        normalized_id = normalize_user_id(user_id)
        if normalized_id is None:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, PROFILE_NOT_FOUND_MSG)

        profile = await self.repo.get_by_user_id(normalized_id)
        if not profile:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, PROFILE_NOT_FOUND_MSG)
        return profile

    async def delete_account(self, user_id: str) -> None:
        """
        刪除使用者的貼文、Profile 與帳號，三者在同一個交易內完成
        """
        try:
            deleted_posts = await self.post_repo.delete_by_user(user_id)
            await self.repo.delete_by_user_id(user_id)
            await self.user_repo.delete_user(user_id)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        logger.info(f"User {user_id} deleted with profile and {deleted_posts} posts")

    # --- 經歷 / 學歷 ---
    async def _add_entry(self, user_id: str, section: str, entry_data) -> Profile:
        profile = await self.get_my_profile(user_id)

        entry = entry_data.model_dump(mode="json", by_alias=True)
        entry["id"] = str(uuid.uuid4())

        # 最新的一筆放在最前面
        entries = [entry] + list(getattr(profile, section) or [])
        return await self.repo.save_entries(profile, section, entries)

    async def _remove_entry(self, user_id: str, section: str, entry_id: str, not_found_msg: str) -> Profile:
        profile = await self.get_my_profile(user_id)

        entries = list(getattr(profile, section) or [])
        remove_index = next(
            (index for index, entry in enumerate(entries) if entry.get("id") == entry_id),
            None,
        )
        if remove_index is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, not_found_msg)

        del entries[remove_index]
        return await self.repo.save_entries(profile, section, entries)

    async def add_experience(self, user_id: str, experience_data: ExperienceCreate) -> Profile:
        return await self._add_entry(user_id, "experience", experience_data)

    async def remove_experience(self, user_id: str, exp_id: str) -> Profile:
        return await self._remove_entry(user_id, "experience", exp_id, "Experience not found")

    async def add_education(self, user_id: str, education_data: EducationCreate) -> Profile:
        return await self._add_entry(user_id, "education", education_data)

    async def remove_education(self, user_id: str, edu_id: str) -> Profile:
        return await self._remove_entry(user_id, "education", edu_id, "Education not found")
