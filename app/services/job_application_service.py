# app/services/job_application_service.py

import logging
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.job_application import JobApplication
from app.models.types import (
    JobApplicationStatusEnum, JOB_APPLICATION_TRANSITIONS, can_transition
)
from app.repositories.job_application_repo import JobApplicationRepository
from app.repositories.job_posting_repo import JobPostingRepository
from app.schemas.job_schema import (
    CreateJobApplicationReq, UpdateJobApplicationStatusReq,
    GetJobApplicationsReq, GetJobApplicationsResp, JobApplicationResp
)

logger = logging.getLogger(__name__)

# 刊登者可以設定的狀態 / 應徵者可以設定的狀態
_OWNER_STATUSES = {JobApplicationStatusEnum.accepted, JobApplicationStatusEnum.rejected}
_APPLICANT_STATUSES = {JobApplicationStatusEnum.withdrawn}


class JobApplicationService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.application_repo = JobApplicationRepository(db)
        self.posting_repo = JobPostingRepository(db)

    async def create_job_application(self, req: CreateJobApplicationReq) -> None:
        # 步驟 1: 職缺必須存在
        posting = await self.posting_repo.get_job_posting_by_id(req.job_id)
        if not posting:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "職缺不存在")

        # 步驟 2: 檢查是否已應徵過
        applications = await self.application_repo.get_job_applications_by_applicant_id(req.login_user_id)
        for application in applications:
            if application.job_id == req.job_id:
                raise HTTPException(status.HTTP_400_BAD_REQUEST, "你已經應徵過此職缺")

        # 步驟 3: 寫入 (唯一鍵衝突時 Repo 會回傳相同的 400)
        new_application = JobApplication(
            **req.model_dump(),
            applicant_id=req.login_user_id,
            status=JobApplicationStatusEnum.pending,
        )
        await self.application_repo.create_job_application(new_application)

        # 步驟 4: 職缺的應徵數 +1 (應徵已寫入，計數失敗只記錄)
        try:
            await self.posting_repo.increment_application_count(req.job_id)
        except HTTPException as e:
            logger.error(f"應徵數累加失敗 job: {req.job_id}: {e.detail}", exc_info=True)
        logger.info(f"新應徵 job: {req.job_id}, applicant: {req.login_user_id}")

    async def get_job_applications(self, req: GetJobApplicationsReq) -> GetJobApplicationsResp:
        """
        - 指定 job_id 時，只有刊登者可以查看該職缺的所有應徵
        - 未指定 job_id 時，只回傳登入者自己的應徵紀錄
        """
        if req.job_id:
            posting = await self.posting_repo.get_job_posting_by_id(req.job_id)
            if not posting:
                raise HTTPException(status.HTTP_404_NOT_FOUND, "職缺不存在")
            if posting.user_id != req.login_user_id:
                raise HTTPException(status.HTTP_403_FORBIDDEN, "你沒有權限檢視此職缺的應徵")
        else:
            req = req.model_copy(update={"applicant_id": req.login_user_id})

        applications, total = await self.application_repo.list_job_applications(req)
        return GetJobApplicationsResp(
            count=total,
            list=[JobApplicationResp.model_validate(a) for a in applications],
        )

    async def get_job_application(self, application_id: str) -> JobApplicationResp:
        application = await self.application_repo.get_job_application_by_id(application_id)
        if not application:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "應徵紀錄不存在")
        return JobApplicationResp.model_validate(application)

    async def update_job_application_status(self, req: UpdateJobApplicationStatusReq) -> None:
        """
        刊登者: pending -> accepted / rejected
        應徵者: pending -> withdrawn
        """
        application = await self.application_repo.get_job_application_by_id(req.id)
        if not application:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "應徵紀錄不存在")

        posting = await self.posting_repo.get_job_posting_by_id(application.job_id)
        is_owner = posting is not None and posting.user_id == req.login_user_id
        is_applicant = application.applicant_id == req.login_user_id

        if req.status in _OWNER_STATUSES and not is_owner:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "只有職缺刊登者可以接受或拒絕應徵")
        if req.status in _APPLICANT_STATUSES and not is_applicant:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "只有應徵者可以撤回應徵")
        if req.status == JobApplicationStatusEnum.pending and not (is_owner or is_applicant):
            raise HTTPException(status.HTTP_403_FORBIDDEN, "你沒有權限修改此應徵")

        if not can_transition(JOB_APPLICATION_TRANSITIONS, application.status, req.status):
            raise HTTPException(
                status.HTTP_400_BAD_REQUEST,
                f"應徵狀態無法從「{application.status.value}」變更為「{req.status.value}」"
            )

        application.status = req.status
        await self.application_repo.update_job_application(application)
