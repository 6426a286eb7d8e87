# app/services/job_posting_service.py
import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException, status

from app.core.background import spawn
from app.core.database import detached_session_factory
from app.models.job_posting import JobPosting
from app.models.types import JOB_POSTING_TRANSITIONS, can_transition
from app.repositories.job_posting_repo import JobPostingRepository
from app.schemas.common_schema import from_epoch_seconds
from app.schemas.job_schema import (
    CreateJobPostingReq, UpdateJobPostingReq,
    JobPostingResp, GetJobPostingsReq, GetJobPostingsResp
)
from app.utils.html_render import render_plain_text_html

logger = logging.getLogger(__name__)


async def _increment_views_in_background(session_factory, posting_id: str) -> None:
    """使用獨立的 session 累加瀏覽數，與原本的 request 無關"""
    async with session_factory() as session:
        await JobPostingRepository(session).increment_views_count(posting_id)
    logger.debug(f"職缺瀏覽數 +1: {posting_id}")


class JobPostingService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = JobPostingRepository(db)

    async def _get_and_check_owner(self, posting_id: str, user_id: str) -> JobPosting:
        """
        獲取職缺並檢查是否為刊登者
        """
        posting = await self.repo.get_job_posting_by_id(posting_id)
        if not posting:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "職缺不存在")
        if posting.user_id != user_id:
            raise HTTPException(status.HTTP_403_FORBIDDEN, "你沒有權限修改此職缺")
        return posting

    async def create_job_posting(self, req: CreateJobPostingReq) -> None:
        posting = JobPosting(
            **req.model_dump(exclude={"expires_at"}),
            user_id=req.login_user_id,
            description_html=render_plain_text_html(req.description),
            expires_at=from_epoch_seconds(req.expires_at),
        )
        await self.repo.create_job_posting(posting)

    async def update_job_posting(self, req: UpdateJobPostingReq) -> None:
        """
        業務邏輯：刊登者整筆更新職缺，狀態必須符合允許的轉換
        """
        posting = await self._get_and_check_owner(req.id, req.login_user_id)

        if not can_transition(JOB_POSTING_TRANSITIONS, posting.status, req.status):
            raise HTTPException(
                status.HTTP_400_BAD_REQUEST,
                f"職缺狀態無法從「{posting.status.value}」變更為「{req.status.value}」"
            )

        for key, value in req.model_dump(exclude={"id", "expires_at"}).items():
            setattr(posting, key, value)
        posting.description_html = render_plain_text_html(req.description)
        posting.expires_at = from_epoch_seconds(req.expires_at)

        await self.repo.update_job_posting(posting)

    async def get_job_postings(self, req: GetJobPostingsReq) -> GetJobPostingsResp:
        postings, total = await self.repo.list_job_postings(req)
        return GetJobPostingsResp(
            count=total,
            list=[JobPostingResp.model_validate(p) for p in postings],
        )

    async def get_job_posting(self, posting_id: str) -> JobPostingResp:
        """
        業務邏輯：獲取單一職缺詳情，並在背景累加瀏覽數 (不等待結果)
        """
        posting = await self.repo.get_job_posting_by_id(posting_id)
        if not posting:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "職缺不存在")

        resp = JobPostingResp.model_validate(posting)
        spawn(
            _increment_views_in_background(detached_session_factory(self.db), posting_id),
            name=f"increment-job-views-{posting_id}",
        )
        return resp

    async def get_my_job_postings(self, user_id: str) -> List[JobPostingResp]:
        postings = await self.repo.list_job_postings_by_user_id(user_id)
        return [JobPostingResp.model_validate(p) for p in postings]

    async def delete_job_posting(self, posting_id: str, user_id: str) -> None:
        """刊登者刪除職缺 (應徵紀錄保留)"""
        await self._get_and_check_owner(posting_id, user_id)
        await self.repo.delete_job_posting(posting_id)
