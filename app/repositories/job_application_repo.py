# app/repositories/job_application_repo.py

from sqlalchemy import delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from typing import List, Optional, Tuple

from app.core.database import db_errors
from app.models.job_application import JobApplication
from app.schemas.job_schema import GetJobApplicationsReq

class JobApplicationRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_job_application_by_id(self, application_id: str) -> Optional[JobApplication]:
        stmt = select(JobApplication).where(JobApplication.id == application_id)
        async with db_errors(self.db):
            result = await self.db.execute(stmt)
            return result.scalars().first()

    async def list_job_applications(self, req: GetJobApplicationsReq) -> Tuple[List[JobApplication], int]:
        """
        依 job_id / applicant_id / status 篩選應徵紀錄，回傳 (當頁資料, 總筆數)
        """
        conditions = []
        if req.job_id:
            conditions.append(JobApplication.job_id == req.job_id)
        if req.applicant_id:
            conditions.append(JobApplication.applicant_id == req.applicant_id)
        if req.status:
            conditions.append(JobApplication.status == req.status)

        count_stmt = select(func.count()).select_from(JobApplication).where(*conditions)
        stmt = select(JobApplication).where(*conditions).order_by(JobApplication.created_at.desc(), JobApplication.id)

        if req.page > 0 and req.page_size > 0:
            stmt = stmt.limit(req.page_size).offset((req.page - 1) * req.page_size)

        async with db_errors(self.db):
            total = (await self.db.execute(count_stmt)).scalar_one()
            result = await self.db.execute(stmt)
            applications = result.scalars().all()
        return applications, total

    async def get_job_applications_by_job_id(self, job_id: str) -> List[JobApplication]:
        """
        獲取特定職缺的所有應徵 (刊登者檢視用)
        """
        stmt = select(JobApplication).where(JobApplication.job_id == job_id).order_by(JobApplication.created_at.desc(), JobApplication.id)
        async with db_errors(self.db):
            result = await self.db.execute(stmt)
            return result.scalars().all()

    async def get_job_applications_by_applicant_id(self, applicant_id: str) -> List[JobApplication]:
        """
        獲取特定應徵者的所有應徵紀錄
        """
        stmt = select(JobApplication).where(JobApplication.applicant_id == applicant_id).order_by(JobApplication.created_at.desc(), JobApplication.id)
        async with db_errors(self.db):
            result = await self.db.execute(stmt)
            return result.scalars().all()

    async def create_job_application(self, application: JobApplication) -> JobApplication:
        """
        新增應徵 ((job_id, applicant_id) 唯一鍵衝突 -> 400)
        """
        async with db_errors(self.db, conflict_detail="你已經應徵過此職缺"):
            self.db.add(application)
            await self.db.commit()
            await self.db.refresh(application)
        return application

    async def update_job_application(self, application: JobApplication) -> JobApplication:
        """
        更新應徵 (主要用於更新 status)
        """
        async with db_errors(self.db):
            await self.db.commit()
            await self.db.refresh(application)
        return application

    async def delete_job_application(self, application_id: str) -> None:
        stmt = delete(JobApplication).where(JobApplication.id == application_id)
        async with db_errors(self.db):
            await self.db.execute(stmt)
            await self.db.commit()
