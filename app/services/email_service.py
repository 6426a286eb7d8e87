# app/services/email_service.py
# 透過 Resend API 寄送 HTML 信件
import asyncio
import logging

import resend

from app.core.config import settings

logger = logging.getLogger(__name__)


class EmailService:
    """
    寄信服務 (fire-and-forget 使用)
    失敗只寫 log，不往外拋，呼叫端不會得知寄送結果
    """

    def __init__(self):
        self.enabled = bool(settings.RESEND_API_KEY)
        if self.enabled:
            resend.api_key = settings.RESEND_API_KEY

    async def send(self, to_email: str, subject: str, html_body: str) -> bool:
        if not self.enabled:
            logger.warning(f"未設定 RESEND_API_KEY，略過寄信 to: {to_email}, subject: {subject}")
            return False

        params = {
            "from": f"{settings.MAIL_FROM_NAME} <{settings.MAIL_FROM_EMAIL}>",
            "to": [to_email],
            "subject": subject,
            "html": html_body,
        }

        try:
            # resend SDK 是同步呼叫，放到 thread 避免卡住 event loop
            response = await asyncio.to_thread(resend.Emails.send, params)
        except Exception as e:
            logger.error(f"寄信失敗 to: {to_email}: {e}", exc_info=True)
            return False

        if response and "id" in response:
            logger.info(f"信件已寄出 to: {to_email} (Email ID: {response['id']})")
            return True

        logger.error(f"寄信失敗 to: {to_email}, response: {response}")
        return False
