# app/services/auth_service.py
import logging
import uuid
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.user_repo import UserRepository
from app.core.security import verify_password, create_access_token, get_password_hash
from app.models.user import User
from app.schemas.user_schema import UserCreate

logger = logging.getLogger(__name__)

class AuthService:
    def __init__(self, db: AsyncSession):
        self.user_repo = UserRepository(db)

    async def authenticate_user(self, email: str, password: str) -> User | None:
        """
        驗證使用者帳號密碼。
        成功回傳 User 物件，失敗回傳 None。
        """
        user = await self.user_repo.get_user_by_email(email)

        # 1. 檢查使用者是否存在
        if not user:
            return None

        # 2. 檢查是否被停權
        if not user.is_active:
            return None

        # 3. 檢查密碼是否正確
        if not verify_password(plain_password=password, hashed_password=user.password_hash):
            return None

        return user

    async def register_user(self, user_create: UserCreate) -> User:
        """
        處理使用者註冊
        """
        # 1. Email 與使用者名稱都不可重複
        if await self.user_repo.get_user_by_email(user_create.email):
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "此 Email 已經被註冊")
        if await self.user_repo.get_user_by_username(user_create.username):
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "此使用者名稱已經被使用")

        # 2. 建立 User ORM 模型 (密碼存雜湊值)
        new_user = User(
            user_id=str(uuid.uuid4()),
            email=user_create.email,
            username=user_create.username,
            display_name=user_create.display_name,
            password_hash=get_password_hash(user_create.password),
        )

        created_user = await self.user_repo.create_user(new_user)
        logger.info(f"新使用者註冊: {created_user.user_id}")
        return created_user

    def create_login_token(self, user: User) -> str:
        """
        為指定使用者建立 access token
        """
        return create_access_token(
            data={
                "sub": user.email, # 'sub' 是 JWT 的標準欄位
                "user_id": str(user.user_id),
            }
        )
