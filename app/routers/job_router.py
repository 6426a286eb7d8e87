# app/routers/job_router.py
import logging
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.core.config import settings
from app.core.database import get_db
from app.core.security import get_current_user
from app.models.user import User
from app.models.types import JobPostingStatusEnum, JobApplicationStatusEnum
from app.services.job_posting_service import JobPostingService
from app.services.job_application_service import JobApplicationService
from app.schemas.job_schema import (
    CreateJobPostingReq, UpdateJobPostingReq, JobPostingResp,
    GetJobPostingsReq, GetJobPostingsResp,
    CreateJobApplicationReq, UpdateJobApplicationStatusReq,
    GetJobApplicationsReq, GetJobApplicationsResp
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/job",
    tags=["Job"],
)

# --- 職缺 ---
@router.post("/posting", status_code=status.HTTP_204_NO_CONTENT)
async def create_job_posting(
    req: CreateJobPostingReq,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """刊登新職缺"""
    req.login_user_id = current_user.user_id
    await JobPostingService(db).create_job_posting(req)

@router.put("/posting", status_code=status.HTTP_204_NO_CONTENT)
async def update_job_posting(
    req: UpdateJobPostingReq,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    整筆更新職缺 (僅限刊登者)

    - 狀態轉換: open -> closed / filled, closed -> open
    """
    req.login_user_id = current_user.user_id
    await JobPostingService(db).update_job_posting(req)

@router.get("/postings", response_model=GetJobPostingsResp)
async def get_job_postings(
    db: AsyncSession = Depends(get_db),
    page: int = 0,
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=0),
    skills: Optional[str] = None,
    location: Optional[str] = None,
    min_budget: float = Query(0, ge=0),
    max_budget: float = Query(0, ge=0),
    currency: Optional[str] = None,
    status: Optional[JobPostingStatusEnum] = None,
):
    """搜尋職缺 (公開)"""
    req = GetJobPostingsReq(
        page=page,
        page_size=min(page_size, settings.MAX_PAGE_SIZE),
        skills=skills,
        location=location,
        min_budget=min_budget,
        max_budget=max_budget,
        currency=currency,
        status=status,
    )
    return await JobPostingService(db).get_job_postings(req)

# (注意) 必須放在 /posting/{posting_id} 之前
@router.get("/postings/my", response_model=List[JobPostingResp])
async def get_my_job_postings(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """當前登入者刊登的所有職缺"""
    return await JobPostingService(db).get_my_job_postings(current_user.user_id)

@router.get("/posting/{posting_id}", response_model=JobPostingResp)
async def get_job_posting(
    posting_id: str,
    db: AsyncSession = Depends(get_db)
):
    """職缺詳情 (公開)，瀏覽數在背景累加"""
    return await JobPostingService(db).get_job_posting(posting_id)

@router.delete("/posting/{posting_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job_posting(
    posting_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """刪除職缺 (僅限刊登者)"""
    await JobPostingService(db).delete_job_posting(posting_id, current_user.user_id)

# --- 應徵 ---
@router.post("/application", status_code=status.HTTP_204_NO_CONTENT)
async def create_job_application(
    req: CreateJobApplicationReq,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """應徵職缺 (同一職缺只能應徵一次)"""
    req.login_user_id = current_user.user_id
    await JobApplicationService(db).create_job_application(req)

@router.get("/applications", response_model=GetJobApplicationsResp)
async def get_job_applications(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    job_id: Optional[str] = None,
    applicant_id: Optional[str] = None,
    status: Optional[JobApplicationStatusEnum] = None,
    page: int = 0,
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=0),
):
    """
    查詢應徵紀錄

    - 帶 job_id: 刊登者查看該職缺的應徵
    - 不帶 job_id: 自己的應徵紀錄
    """
    req = GetJobApplicationsReq(
        job_id=job_id,
        applicant_id=applicant_id,
        status=status,
        page=page,
        page_size=min(page_size, settings.MAX_PAGE_SIZE),
    )
    req.login_user_id = current_user.user_id
    return await JobApplicationService(db).get_job_applications(req)

@router.put("/application/status", status_code=status.HTTP_204_NO_CONTENT)
async def update_job_application_status(
    req: UpdateJobApplicationStatusReq,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """更新應徵狀態 (接受 / 拒絕 / 撤回)"""
    req.login_user_id = current_user.user_id
    await JobApplicationService(db).update_job_application_status(req)
