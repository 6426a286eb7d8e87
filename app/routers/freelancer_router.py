# app/routers/freelancer_router.py
import logging
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from app.core.config import settings
from app.core.database import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.services.freelancer_profile_service import FreelancerProfileService
from app.services.hire_service import HireService
from app.schemas.freelancer_schema import (
    CreateFreelancerProfileReq, UpdateFreelancerProfileReq,
    FreelancerProfileResp, GetFreelancerProfilesReq, GetFreelancerProfilesResp,
    HireFreelancerReq, HireFreelancerResp
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/freelancer",
    tags=["Freelancer"],
)

@router.post("/profile", status_code=status.HTTP_204_NO_CONTENT)
async def create_freelancer_profile(
    req: CreateFreelancerProfileReq,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    建立當前登入者的工作者 Profile (每位使用者只能有一份)
    """
    req.login_user_id = current_user.user_id
    await FreelancerProfileService(db).create_freelancer_profile(req)

@router.put("/profile", status_code=status.HTTP_204_NO_CONTENT)
async def update_freelancer_profile(
    req: UpdateFreelancerProfileReq,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    整筆更新當前登入者的工作者 Profile
    """
    req.login_user_id = current_user.user_id
    await FreelancerProfileService(db).update_freelancer_profile(req)

@router.get("/profile", response_model=FreelancerProfileResp)
async def get_freelancer_profile(
    user_id: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db)
):
    """獲取指定使用者的工作者 Profile (公開)"""
    return await FreelancerProfileService(db).get_freelancer_profile(user_id)

@router.get("/profiles", response_model=GetFreelancerProfilesResp)
async def get_freelancer_profiles(
    db: AsyncSession = Depends(get_db),
    page: int = 0,
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=0),
    skills: Optional[str] = None,
    location: Optional[str] = None,
    min_rate: float = Query(0, ge=0),
    max_rate: float = Query(0, ge=0),
    currency: Optional[str] = None,
):
    """
    搜尋可接案的工作者 (公開)

    - page <= 0 時不分頁，回傳全部
    - 每頁筆數上限為 MAX_PAGE_SIZE
    """
    req = GetFreelancerProfilesReq(
        page=page,
        page_size=min(page_size, settings.MAX_PAGE_SIZE),
        skills=skills,
        location=location,
        min_rate=min_rate,
        max_rate=max_rate,
        currency=currency,
    )
    return await FreelancerProfileService(db).get_freelancer_profiles(req)

@router.post("/hire", response_model=HireFreelancerResp)
async def hire_freelancer(
    req: HireFreelancerReq,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    寄送聯絡信給工作者 (背景寄送，不等待結果)
    """
    req.login_user_id = current_user.user_id
    return await HireService(db).hire_freelancer(req)
