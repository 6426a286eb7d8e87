# app/models/freelancer_profile.py
import uuid
from sqlalchemy import Column, String, TEXT, DECIMAL, CHAR, Boolean, INT, TIMESTAMP, func
from app.core.database import Base
from app.models.types import JSONEncodedList

class FreelancerProfile(Base):
    __tablename__ = "freelancer_profile"

    id = Column(CHAR(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # 一個使用者只能有一份 Profile (唯一鍵)
    # 不設 FK：使用者資料屬於外部模組
    user_id = Column(CHAR(36), unique=True, nullable=False, index=True)

    is_available = Column(Boolean, nullable=False, default=True)
    hourly_rate = Column(DECIMAL(10, 2), nullable=False, default=0)
    currency = Column(String(10), nullable=False, default="USD")

    # 以下四個欄位存成 JSON 文字陣列
    skills = Column(JSONEncodedList, default=list)
    portfolio = Column(JSONEncodedList, default=list)
    preferred_projects = Column(JSONEncodedList, default=list)
    languages = Column(JSONEncodedList, default=list)

    experience = Column(TEXT)
    availability = Column(String(100)) # e.g. "Full-time", "Part-time", "Project-based"
    location = Column(String(100))
    contact_email = Column(String(100)) # (選填) 與帳號不同的聯絡信箱
    linkedin_profile = Column(String(255))
    github_profile = Column(String(255))
    website = Column(String(255))
    bio = Column(TEXT)
    bio_html = Column(TEXT)
    time_zone = Column(String(50))
    response_time = Column(String(50)) # e.g. "Within 24 hours"

    # 統計
    completed_projects = Column(INT, nullable=False, default=0)
    client_satisfaction = Column(DECIMAL(3, 2), nullable=False, default=0) # 0.00 ~ 5.00
    is_verified = Column(Boolean, nullable=False, default=False)
    verification_date = Column(TIMESTAMP, nullable=True)

    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
