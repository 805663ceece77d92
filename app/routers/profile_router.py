# app/routers/profile_router.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.security import get_current_user_id
from app.services.profile_service import ProfileService
from app.services.github_service import GitHubService, get_github_service
from app.schemas.profile_schema import (
    ProfileUpsert, ProfileOut, ExperienceCreate, EducationCreate, MessageOut
)
from app.utils.validators import (
    ensure_valid, PROFILE_CHECKS, EXPERIENCE_CHECKS, EDUCATION_CHECKS
)
from typing import Any, List

import logging

logger = logging.getLogger(__name__)

# (注意) 部分 API 為公開查詢，因此不在 router 層級加上 get_current_user_id
router = APIRouter(
    prefix="/api/profile",
    tags=["Profile"],
)


@router.get("/me", response_model=ProfileOut)
async def get_my_profile(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    獲取當前登入者的 Profile (含 name / avatar)。
    尚未建立時回傳 400。
    """
    service = ProfileService(db)
    return await service.get_my_profile(user_id)


@router.post("", response_model=ProfileOut)
async def upsert_my_profile(
    profile_data: ProfileUpsert,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    建立或更新當前登入者的 Profile。

    - `status`、`skills` 必填
    - `skills` 為逗號分隔字串，例如 `"node, css"`
    """
    # 必填檢查先於任何資料庫存取
    ensure_valid(profile_data, PROFILE_CHECKS)

    service = ProfileService(db)
    return await service.upsert_my_profile(user_id, profile_data)


@router.get("", response_model=List[ProfileOut])
async def list_profiles(db: AsyncSession = Depends(get_db)):
    """
    (公開) 列出所有 Profile
    """
    service = ProfileService(db)
    return await service.list_profiles()


@router.get("/user/{user_id}", response_model=ProfileOut)
async def get_profile_by_user_id(
    user_id: str,
    db: AsyncSession = Depends(get_db)
):
    """
    (公開) 依 User ID 取得 Profile
    """
    service = ProfileService(db)
    return await service.get_profile_by_user_id(user_id)


@router.delete("", response_model=MessageOut)
async def delete_my_account(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    刪除帳號：貼文、Profile、使用者一併刪除
    """
    service = ProfileService(db)
    await service.delete_account(user_id)
    return {"msg": "User deleted"}


# --- 經歷 ---
@router.put("/experience", response_model=ProfileOut)
async def add_experience(
    experience_data: ExperienceCreate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    新增一筆經歷 (放在最前面)。`title`、`company`、`from` 必填
    """
    ensure_valid(experience_data, EXPERIENCE_CHECKS)

    service = ProfileService(db)
    return await service.add_experience(user_id, experience_data)


@router.delete("/experience/{exp_id}", response_model=ProfileOut)
async def remove_experience(
    exp_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    service = ProfileService(db)
    return await service.remove_experience(user_id, exp_id)


# --- 學歷 ---
@router.put("/education", response_model=ProfileOut)
async def add_education(
    education_data: EducationCreate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    新增一筆學歷 (放在最前面)。`school`、`degree`、`fieldofstudy`、`from` 必填
    """
    ensure_valid(education_data, EDUCATION_CHECKS)

    service = ProfileService(db)
    return await service.add_education(user_id, education_data)


@router.delete("/education/{edu_id}", response_model=ProfileOut)
async def remove_education(
    edu_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    service = ProfileService(db)
    return await service.remove_education(user_id, edu_id)


# --- GitHub ---
@router.get("/github/{username}", response_model=List[Any])
async def get_github_repos(
    username: str,
    github: GitHubService = Depends(get_github_service)
):
    """
    (公開) 取得 GitHub 使用者最近建立的 repo，原樣轉發 GitHub 的回應
    """
    return await github.get_recent_repos(username)
