# app/routers/user_router.py
from fastapi import APIRouter, Depends
from app.core.security import get_current_user
from app.models.user import User
from app.schemas.user_schema import UserOut, SiteGeneralResp
from app.services.site_info_service import SiteInfoService

router = APIRouter(
    prefix="/users",
    tags=["Users"],
)

@router.get("/me", response_model=UserOut)
async def read_users_me(
    current_user: User = Depends(get_current_user)
):
    """
    獲取當前登入使用者的基本資料 (不含密碼)
    """
    return current_user

@router.get("/site", response_model=SiteGeneralResp)
async def read_site_general():
    """站台名稱與網址 (公開)"""
    return await SiteInfoService().get_site_general()
