import logging
from contextlib import asynccontextmanager

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base

from app.core.config import settings
from app.models.types import StoredValueDecodeError

logger = logging.getLogger(__name__)

# 建立非同步引擎
engine = create_async_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True, # 每次從連線池取連線前，先 PING 一次，確保連線有效
    echo=settings.DB_ECHO,
)

# 建立非同步 Session
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# 建立 ORM Model 基底類別
Base = declarative_base()

# (重要) 取得 DB Session 的 Dependency
async def get_db() -> AsyncSession:
    """FastAPI Dependency: 取得非同步資料庫 session"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


def detached_session_factory(db: AsyncSession) -> async_sessionmaker:
    """
    以同一個 engine 建立新的 session factory。
    給背景工作使用，不與 request 的 session 共用交易。
    """
    return async_sessionmaker(bind=db.bind, class_=AsyncSession, expire_on_commit=False)


@asynccontextmanager
async def db_errors(db: AsyncSession, conflict_detail: str | None = None):
    """
    將儲存層錯誤統一轉成 HTTPException。

    - 唯一鍵衝突 (IntegrityError) 且有給 conflict_detail -> 400
    - 其餘 SQLAlchemy 錯誤 -> 500 資料庫錯誤
    - 欄位內的 JSON 無法解析 -> 500
    """
    try:
        yield
    except IntegrityError as e:
        await db.rollback()
        if conflict_detail is not None:
            logger.info(f"唯一鍵衝突: {conflict_detail}")
            raise HTTPException(status.HTTP_400_BAD_REQUEST, conflict_detail) from e
        logger.error(f"資料庫寫入失敗: {e}", exc_info=True)
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, "資料庫錯誤") from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"資料庫操作失敗: {e}", exc_info=True)
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, "資料庫錯誤") from e
    except StoredValueDecodeError as e:
        logger.error(f"資料欄位解析失敗: {e}", exc_info=True)
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, "資料解析失敗") from e
