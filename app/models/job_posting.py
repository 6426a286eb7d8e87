# models/job_posting.py
import uuid
from sqlalchemy import Column, String, TEXT, INT, DECIMAL, TIMESTAMP, Boolean, Enum, CHAR, func
from app.core.database import Base
from app.models.types import JSONEncodedList, JobPostingStatusEnum

class JobPosting(Base):
    __tablename__ = "job_posting"

    id = Column(CHAR(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # 刊登者
    user_id = Column(CHAR(36), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(TEXT)
    description_html = Column(TEXT)
    budget = Column(DECIMAL(10, 2), nullable=False, default=0)
    currency = Column(String(10), nullable=False, default="USD")
    budget_type = Column(String(20), nullable=False, default="fixed") # "fixed", "hourly", "negotiable"
    skills = Column(JSONEncodedList, default=list) # 需求技能 (JSON 陣列)
    experience_level = Column(String(50)) # "entry", "intermediate", "senior", "expert"
    duration = Column(String(100)) # e.g. "1-3 months"
    location = Column(String(100)) # "remote", "onsite", "hybrid"
    status = Column(
        Enum(JobPostingStatusEnum, values_callable=lambda obj: [e.value for e in obj], native_enum=False, length=20),
        nullable=False,
        default=JobPostingStatusEnum.open,
    )
    contact_email = Column(String(100))
    application_count = Column(INT, nullable=False, default=0)
    views_count = Column(INT, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    expires_at = Column(TIMESTAMP, nullable=True)

    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
