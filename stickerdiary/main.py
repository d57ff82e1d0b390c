import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stickerdiary.common.handlers import register_exception_handlers
from stickerdiary.database import create_tables
from stickerdiary.user.router import auth_router, router as user_router
from stickerdiary.diary.router import router as diary_router
from stickerdiary.share.router import router as share_router
from stickerdiary.statistics.router import router as statistics_router

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_tables()
    logger.info("DB 테이블 준비 완료")
    yield


app = FastAPI(title="Sticker Diary API", version="1.0.0", lifespan=lifespan)

app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(user_router, prefix="/users", tags=["users"])
app.include_router(diary_router, prefix="/diaries", tags=["diaries"])
app.include_router(share_router, prefix="/share", tags=["share"])
app.include_router(statistics_router, prefix="/statistics", tags=["statistics"])

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # 모든 도메인 허용 (개발용)
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/")
def read_root():
    return {"message": "스티커 다이어리 서버가 동작 중이에요~"}
