# app/services/site_info_service.py
from app.core.config import settings
from app.schemas.user_schema import SiteGeneralResp

class SiteInfoService:
    async def get_site_general(self) -> SiteGeneralResp:
        """站台基本資訊 (目前由設定檔提供)"""
        return SiteGeneralResp(name=settings.SITE_NAME, site_url=settings.SITE_URL)
