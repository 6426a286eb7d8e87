# app/services/freelancer_profile_service.py
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from app.models.freelancer_profile import FreelancerProfile
from app.repositories.freelancer_profile_repo import FreelancerProfileRepository
from app.schemas.freelancer_schema import (
    CreateFreelancerProfileReq, UpdateFreelancerProfileReq,
    FreelancerProfileResp, GetFreelancerProfilesReq, GetFreelancerProfilesResp
)
from app.utils.html_render import render_plain_text_html

class FreelancerProfileService:
    def __init__(self, db: AsyncSession):
        self.repo = FreelancerProfileRepository(db)

    async def create_freelancer_profile(self, req: CreateFreelancerProfileReq) -> None:
        """建立登入者的工作者 Profile (每人一份)"""
        existing = await self.repo.get_freelancer_profile_by_user_id(req.login_user_id)
        if existing:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "工作者 Profile 已存在")

        profile = FreelancerProfile(
            **req.model_dump(),
            user_id=req.login_user_id,
            bio_html=render_plain_text_html(req.bio),
        )
        # 併發時仍可能撞到唯一鍵，由 Repo 轉成相同的 400
        await self.repo.create_freelancer_profile(profile)

    async def update_freelancer_profile(self, req: UpdateFreelancerProfileReq) -> None:
        """
        業務邏輯：整筆覆蓋登入者的 Profile
        """
        profile = await self.repo.get_freelancer_profile_by_user_id(req.login_user_id)
        if not profile:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "工作者 Profile 不存在")

        for key, value in req.model_dump().items():
            setattr(profile, key, value)
        profile.bio_html = render_plain_text_html(req.bio)

        await self.repo.update_freelancer_profile(profile)

    async def get_freelancer_profile(self, user_id: str) -> FreelancerProfileResp:
        """獲取指定 User ID 的工作者 Profile (公開用)"""
        profile = await self.repo.get_freelancer_profile_by_user_id(user_id)
        if not profile:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "工作者 Profile 不存在")
        return FreelancerProfileResp.model_validate(profile)

    async def get_freelancer_profiles(self, req: GetFreelancerProfilesReq) -> GetFreelancerProfilesResp:
        profiles, total = await self.repo.list_freelancer_profiles(req)
        return GetFreelancerProfilesResp(
            count=total,
            list=[FreelancerProfileResp.model_validate(p) for p in profiles],
        )
