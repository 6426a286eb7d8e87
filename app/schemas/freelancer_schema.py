# app/schemas/freelancer_schema.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from app.schemas.common_schema import EpochSeconds

# --- 自由工作者 Profile ---
class FreelancerProfileBase(BaseModel):
    is_available: bool = True
    hourly_rate: float = Field(0, ge=0)
    currency: str = Field("USD", max_length=10)
    skills: List[str] = []
    experience: Optional[str] = None
    portfolio: List[str] = []
    availability: Optional[str] = Field(None, max_length=100)
    preferred_projects: List[str] = []
    location: Optional[str] = Field(None, max_length=100)
    contact_email: Optional[str] = Field(None, max_length=100)
    linkedin_profile: Optional[str] = Field(None, max_length=255)
    github_profile: Optional[str] = Field(None, max_length=255)
    website: Optional[str] = Field(None, max_length=255)
    bio: Optional[str] = None
    languages: List[str] = []
    time_zone: Optional[str] = Field(None, max_length=50)
    response_time: Optional[str] = Field(None, max_length=50)

class CreateFreelancerProfileReq(FreelancerProfileBase):
    # 由 Router 從登入資訊填入，不接受前端傳入
    login_user_id: Optional[str] = Field(None, exclude=True)

class UpdateFreelancerProfileReq(FreelancerProfileBase):
    # 更新為整筆覆蓋 (非部分更新)
    login_user_id: Optional[str] = Field(None, exclude=True)

class FreelancerProfileResp(FreelancerProfileBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    bio_html: Optional[str] = None
    completed_projects: int = 0
    client_satisfaction: float = 0
    is_verified: bool = False
    verification_date: EpochSeconds = 0
    created_at: EpochSeconds = 0
    updated_at: EpochSeconds = 0

class GetFreelancerProfilesReq(BaseModel):
    page: int = 0
    page_size: int = 0
    skills: Optional[str] = None
    location: Optional[str] = None
    min_rate: float = 0
    max_rate: float = 0
    currency: Optional[str] = None

class GetFreelancerProfilesResp(BaseModel):
    count: int
    list: List[FreelancerProfileResp] = []

# --- 雇用 (寄送聯絡信) ---
class HireFreelancerReq(BaseModel):
    freelancer_user_id: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
    login_user_id: Optional[str] = Field(None, exclude=True)

class HireFreelancerResp(BaseModel):
    success: bool
    message: str
