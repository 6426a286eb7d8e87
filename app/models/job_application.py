# app/models/job_application.py
import uuid
from sqlalchemy import Column, String, Text, DECIMAL, Enum, CHAR, TIMESTAMP, UniqueConstraint, func
from app.core.database import Base
from app.models.types import JobApplicationStatusEnum

class JobApplication(Base):
    __tablename__ = "job_application"
    # 同一位應徵者對同一個職缺只能應徵一次
    __table_args__ = (
        UniqueConstraint("job_id", "applicant_id", name="uq_job_application_job_applicant"),
    )

    id = Column(CHAR(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # 不設 FK：刪除職缺時不連帶刪除應徵紀錄
    job_id = Column(CHAR(36), nullable=False, index=True)
    applicant_id = Column(CHAR(36), nullable=False, index=True)

    cover_letter = Column(Text)
    proposed_rate = Column(DECIMAL(10, 2), nullable=False, default=0)
    currency = Column(String(10), nullable=False, default="USD")
    status = Column(
        Enum(JobApplicationStatusEnum, values_callable=lambda obj: [e.value for e in obj], native_enum=False, length=20),
        nullable=False,
        default=JobApplicationStatusEnum.pending,
    )
    message = Column(Text) # 應徵者的附加訊息

    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
