# app/repositories/job_posting_repo.py

import logging
from typing import List, Tuple

from sqlalchemy import String, delete, func, type_coerce, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.database import db_errors
from app.models.job_posting import JobPosting
from app.schemas.job_schema import GetJobPostingsReq

logger = logging.getLogger(__name__)


class JobPostingRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_job_posting(self, posting: JobPosting) -> JobPosting:
        async with db_errors(self.db):
            self.db.add(posting)
            await self.db.commit()
            await self.db.refresh(posting)
        return posting

    async def update_job_posting(self, posting: JobPosting) -> JobPosting:
        """
        (U) 儲存對現有 JobPosting 物件的變更
        """
        async with db_errors(self.db):
            await self.db.commit()
            await self.db.refresh(posting)
        return posting

    async def get_job_posting_by_id(self, posting_id: str) -> JobPosting | None:
        stmt = select(JobPosting).where(JobPosting.id == posting_id)
        async with db_errors(self.db):
            result = await self.db.execute(stmt)
            return result.scalars().first()

    async def list_job_postings(self, req: GetJobPostingsReq) -> Tuple[List[JobPosting], int]:
        """
        依條件複合式搜尋「上架中」的職缺，回傳 (當頁資料, 總筆數)
        """
        conditions = [JobPosting.is_active == True]

        if req.skills:
            logger.info(f"Applying skills filter: {req.skills}")
            conditions.append(type_coerce(JobPosting.skills, String).ilike(f"%{req.skills}%"))
        if req.location:
            logger.info(f"Applying location filter: {req.location}")
            conditions.append(JobPosting.location.ilike(f"%{req.location}%"))
        if req.min_budget > 0:
            conditions.append(JobPosting.budget >= req.min_budget)
        if req.max_budget > 0:
            conditions.append(JobPosting.budget <= req.max_budget)
        if req.currency:
            conditions.append(JobPosting.currency == req.currency)
        if req.status:
            logger.info(f"Applying status filter: {req.status.value}")
            conditions.append(JobPosting.status == req.status)

        count_stmt = select(func.count()).select_from(JobPosting).where(*conditions)
        stmt = select(JobPosting).where(*conditions).order_by(JobPosting.created_at.desc(), JobPosting.id)

        # page <= 0 表示不分頁
        if req.page > 0 and req.page_size > 0:
            stmt = stmt.limit(req.page_size).offset((req.page - 1) * req.page_size)

        async with db_errors(self.db):
            total = (await self.db.execute(count_stmt)).scalar_one()
            result = await self.db.execute(stmt)
            postings = result.scalars().all()
        return postings, total

    # 查看特定使用者刊登的所有職缺
    async def list_job_postings_by_user_id(self, user_id: str) -> List[JobPosting]:
        stmt = select(JobPosting).where(JobPosting.user_id == user_id).order_by(JobPosting.created_at.desc(), JobPosting.id)
        async with db_errors(self.db):
            result = await self.db.execute(stmt)
            return result.scalars().all()

    async def delete_job_posting(self, posting_id: str) -> None:
        """刪除職缺 (不連帶刪除應徵紀錄)"""
        stmt = delete(JobPosting).where(JobPosting.id == posting_id)
        async with db_errors(self.db):
            await self.db.execute(stmt)
            await self.db.commit()

    async def increment_views_count(self, posting_id: str) -> None:
        """UPDATE ... SET views_count = views_count + 1 (在 DB 端累加)"""
        stmt = (
            update(JobPosting)
            .where(JobPosting.id == posting_id)
            .values(views_count=JobPosting.views_count + 1)
            .execution_options(synchronize_session=False)
        )
        async with db_errors(self.db):
            await self.db.execute(stmt)
            await self.db.commit()

    async def increment_application_count(self, posting_id: str) -> None:
        stmt = (
            update(JobPosting)
            .where(JobPosting.id == posting_id)
            .values(application_count=JobPosting.application_count + 1)
            .execution_options(synchronize_session=False)
        )
        async with db_errors(self.db):
            await self.db.execute(stmt)
            await self.db.commit()
