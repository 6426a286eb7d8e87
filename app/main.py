import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.database import engine
from app.core.background import wait_for_background_tasks
from app.core.migrations import migrate_freelancer_tables
from app.routers import auth_router, user_router, freelancer_router, job_router

# --- 匯入所有 Model 檔案 ---
# 都在應用程式啟動時被 SQLAlchemy 註冊。
from app.models import user
from app.models import freelancer_profile
from app.models import job_posting
from app.models import job_application


# 設定基礎日誌
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 啟動
    logger.info(f"Starting up {settings.SITE_NAME} backend...")
    if settings.AUTO_MIGRATE:
        await migrate_freelancer_tables(engine)

    yield

    # 關閉前等背景工作 (寄信 / 瀏覽數) 跑完
    logger.info("Shutting down, waiting for background tasks...")
    await wait_for_background_tasks()
    await engine.dispose()


app = FastAPI(lifespan=lifespan)

# --- 設定 CORS (跨來源資源共用) ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 請求格式錯誤一律回 400
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"請求格式錯誤 {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "請求格式錯誤", "errors": jsonable_encoder(exc.errors())},
    )

# --- 根路徑 ---
@app.get("/")
def read_root():
    return {"status": "success", "message": "Backend is running!"}

# --- 載入 API 路由 ---
app.include_router(auth_router.router)
app.include_router(user_router.router)
app.include_router(freelancer_router.router)
app.include_router(job_router.router)
