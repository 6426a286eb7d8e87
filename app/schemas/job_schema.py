# app/schemas/job_schema.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from app.models.types import JobPostingStatusEnum, JobApplicationStatusEnum
from app.schemas.common_schema import EpochSeconds

# 1. 職缺基礎欄位
class JobPostingBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    budget: float = Field(0, ge=0)
    currency: str = Field("USD", max_length=10)
    budget_type: str = Field("fixed", max_length=20) # "fixed", "hourly", "negotiable"
    skills: List[str] = []
    experience_level: Optional[str] = Field(None, max_length=50)
    duration: Optional[str] = Field(None, max_length=100)
    location: Optional[str] = Field(None, max_length=100)
    contact_email: Optional[str] = Field(None, max_length=100)

# 2. 刊登職缺 (Input)
class CreateJobPostingReq(JobPostingBase):
    # epoch 秒數，0 表示不過期
    expires_at: int = Field(0, ge=0)
    login_user_id: Optional[str] = Field(None, exclude=True)

# 3. 更新職缺 (Input)，整筆覆蓋
class UpdateJobPostingReq(JobPostingBase):
    id: str = Field(..., min_length=1)
    # 必填：整筆覆蓋不會沿用目前狀態
    status: JobPostingStatusEnum
    expires_at: int = Field(0, ge=0)
    login_user_id: Optional[str] = Field(None, exclude=True)

# 4. 回傳給前端的職缺 (Output)
class JobPostingResp(JobPostingBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    description: Optional[str] = None
    description_html: Optional[str] = None
    status: JobPostingStatusEnum
    application_count: int = 0
    views_count: int = 0
    is_active: bool = True
    expires_at: EpochSeconds = 0
    created_at: EpochSeconds = 0
    updated_at: EpochSeconds = 0

class GetJobPostingsReq(BaseModel):
    page: int = 0
    page_size: int = 0
    skills: Optional[str] = None
    location: Optional[str] = None
    min_budget: float = 0
    max_budget: float = 0
    currency: Optional[str] = None
    status: Optional[JobPostingStatusEnum] = None

class GetJobPostingsResp(BaseModel):
    count: int
    list: List[JobPostingResp] = []

# --- 應徵 ---
class CreateJobApplicationReq(BaseModel):
    job_id: str = Field(..., min_length=1)
    cover_letter: Optional[str] = None
    proposed_rate: float = Field(0, ge=0)
    currency: str = Field("USD", max_length=10)
    message: Optional[str] = None
    login_user_id: Optional[str] = Field(None, exclude=True)

class UpdateJobApplicationStatusReq(BaseModel):
    id: str = Field(..., min_length=1)
    status: JobApplicationStatusEnum
    login_user_id: Optional[str] = Field(None, exclude=True)

class JobApplicationResp(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    job_id: str
    applicant_id: str
    cover_letter: Optional[str] = None
    proposed_rate: float
    currency: str
    status: JobApplicationStatusEnum
    message: Optional[str] = None
    created_at: EpochSeconds = 0
    updated_at: EpochSeconds = 0

class GetJobApplicationsReq(BaseModel):
    job_id: Optional[str] = None
    applicant_id: Optional[str] = None
    status: Optional[JobApplicationStatusEnum] = None
    page: int = 0
    page_size: int = 0
    login_user_id: Optional[str] = Field(None, exclude=True)

class GetJobApplicationsResp(BaseModel):
    count: int
    list: List[JobApplicationResp] = []
