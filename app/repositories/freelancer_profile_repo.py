# app/repositories/freelancer_profile_repo.py
import logging
from typing import List, Tuple

from sqlalchemy import String, delete, func, type_coerce
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.database import db_errors
from app.models.freelancer_profile import FreelancerProfile
from app.schemas.freelancer_schema import GetFreelancerProfilesReq

logger = logging.getLogger(__name__)


class FreelancerProfileRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_freelancer_profile_by_user_id(self, user_id: str) -> FreelancerProfile | None:
        stmt = select(FreelancerProfile).where(FreelancerProfile.user_id == user_id)
        async with db_errors(self.db):
            result = await self.db.execute(stmt)
            return result.scalars().first()

    async def create_freelancer_profile(self, profile: FreelancerProfile) -> FreelancerProfile:
        """新增工作者 Profile (user_id 唯一鍵衝突 -> 400)"""
        async with db_errors(self.db, conflict_detail="工作者 Profile 已存在"):
            self.db.add(profile)
            await self.db.commit()
            await self.db.refresh(profile)
        return profile

    async def update_freelancer_profile(self, profile: FreelancerProfile) -> FreelancerProfile:
        """儲存對現有 Profile 物件的變更"""
        async with db_errors(self.db):
            await self.db.commit()
            await self.db.refresh(profile)
        return profile

    async def delete_freelancer_profile(self, user_id: str) -> None:
        stmt = delete(FreelancerProfile).where(FreelancerProfile.user_id == user_id)
        async with db_errors(self.db):
            await self.db.execute(stmt)
            await self.db.commit()

    async def list_freelancer_profiles(
        self, req: GetFreelancerProfilesReq
    ) -> Tuple[List[FreelancerProfile], int]:
        """
        依條件搜尋「可接案」的工作者，回傳 (當頁資料, 總筆數)
        1. 技能 (skills): 對 JSON 文字做模糊比對
        2. 地區 (location): 模糊比對
        3. 時薪 (min_rate / max_rate): 大於 0 才套用，包含邊界
        4. 幣別 (currency): 精確比對
        """
        conditions = [FreelancerProfile.is_available == True]

        if req.skills:
            logger.info(f"Applying skills filter: {req.skills}")
            conditions.append(type_coerce(FreelancerProfile.skills, String).ilike(f"%{req.skills}%"))
        if req.location:
            logger.info(f"Applying location filter: {req.location}")
            conditions.append(FreelancerProfile.location.ilike(f"%{req.location}%"))
        if req.min_rate > 0:
            conditions.append(FreelancerProfile.hourly_rate >= req.min_rate)
        if req.max_rate > 0:
            conditions.append(FreelancerProfile.hourly_rate <= req.max_rate)
        if req.currency:
            conditions.append(FreelancerProfile.currency == req.currency)

        count_stmt = select(func.count()).select_from(FreelancerProfile).where(*conditions)
        stmt = (
            select(FreelancerProfile)
            .where(*conditions)
            .order_by(FreelancerProfile.created_at.desc(), FreelancerProfile.id)
        )

        # page <= 0 表示不分頁
        if req.page > 0 and req.page_size > 0:
            stmt = stmt.limit(req.page_size).offset((req.page - 1) * req.page_size)

        async with db_errors(self.db):
            total = (await self.db.execute(count_stmt)).scalar_one()
            result = await self.db.execute(stmt)
            profiles = result.scalars().all()
        return profiles, total
