# app/services/hire_service.py

import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.background import spawn
from app.models.user import User
from app.repositories.freelancer_profile_repo import FreelancerProfileRepository
from app.repositories.user_repo import UserRepository
from app.schemas.freelancer_schema import HireFreelancerReq, HireFreelancerResp
from app.services.email_service import EmailService
from app.services.site_info_service import SiteInfoService

logger = logging.getLogger(__name__)


class HireService:
    def __init__(
        self,
        db: AsyncSession,
        email_service: Optional[EmailService] = None,
        site_info_service: Optional[SiteInfoService] = None,
    ):
        self.user_repo = UserRepository(db)
        self.profile_repo = FreelancerProfileRepository(db)
        self.email_service = email_service or EmailService()
        self.site_info_service = site_info_service or SiteInfoService()

    @staticmethod
    def _display_name(user: User) -> str:
        return user.display_name or user.username

    def _generate_hiring_email_body(
        self, message: str, current_user: User, freelancer_user: User, site_name: str
    ) -> str:
        sender_name = self._display_name(current_user)
        template = f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>Job Opportunity from {site_name}</title>
</head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
        <h2 style="color: #2c3e50;">Job Opportunity from {site_name}</h2>

        <p>Hello {self._display_name(freelancer_user)},</p>

        <p>You have received a job opportunity from <strong>{sender_name}</strong> ({current_user.username}) on {site_name}.</p>

        <div style="background-color: #f8f9fa; padding: 15px; border-left: 4px solid #007bff; margin: 20px 0;">
            <h3 style="margin-top: 0; color: #007bff;">Message:</h3>
            <p style="margin-bottom: 0;">{message}</p>
        </div>

        <p>You can contact them directly at: <a href="mailto:{current_user.email}">{current_user.email}</a></p>

        <p>Best regards,<br>The {site_name} Team</p>

        <hr style="border: none; border-top: 1px solid #eee; margin: 30px 0;">
        <p style="font-size: 12px; color: #666;">
            This message was sent through {site_name}. Please do not reply to this email directly.
        </p>
    </div>
</body>
</html>
"""
        return template

    async def hire_freelancer(self, req: HireFreelancerReq) -> HireFreelancerResp:
        # 步驟 1: 被雇用的使用者
        freelancer_user = await self.user_repo.get_user_by_id(req.freelancer_user_id)
        if not freelancer_user:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "使用者不存在")

        # 步驟 2: 必須已建立工作者 Profile
        profile = await self.profile_repo.get_freelancer_profile_by_user_id(req.freelancer_user_id)
        if not profile:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "工作者 Profile 不存在")

        # 步驟 3: 寄件者 (登入者)
        current_user = await self.user_repo.get_user_by_id(req.login_user_id)
        if not current_user:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "使用者不存在")

        # 步驟 4: 站台名稱
        site_info = await self.site_info_service.get_site_general()

        # 步驟 5: Profile 有填聯絡信箱就用它，否則用帳號信箱
        contact_email = profile.contact_email or freelancer_user.email

        body = self._generate_hiring_email_body(req.message, current_user, freelancer_user, site_info.name)

        # 步驟 6: 背景寄信，不等待結果
        spawn(
            self.email_service.send(contact_email, req.subject, body),
            name=f"hire-email-{req.freelancer_user_id}",
        )
        logger.info(f"雇用信已排入寄送 from: {current_user.user_id} to user: {freelancer_user.user_id}")

        return HireFreelancerResp(success=True, message="Hiring message sent successfully")
