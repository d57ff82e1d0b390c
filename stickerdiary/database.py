from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from dotenv import load_dotenv
import os

# 환경 변수 로드
load_dotenv()


def build_database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    host = os.getenv("DB_HOST")
    if not host:
        # DB 설정이 없으면 로컬 SQLite 파일 사용 (개발용)
        return "sqlite:///./stickerdiary.db"

    user = os.getenv("DB_USER")
    passwd = os.getenv("DB_PASSWD")
    port = os.getenv("DB_PORT", "3306")
    db = os.getenv("DB_NAME", "stickerdiary")
    return f'mysql+pymysql://{user}:{passwd}@{host}:{port}/{db}?charset=utf8mb4'


DB_URL = build_database_url()

connect_args = {"check_same_thread": False} if DB_URL.startswith("sqlite") else {}

# SQLAlchemy 엔진 및 세션 생성
engine = create_engine(
    DB_URL,
    echo=os.getenv("DB_ECHO", "false").lower() == "true",
    pool_pre_ping=True,
    connect_args=connect_args,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


# FastAPI 의존성 주입을 위한 세션 생성 함수
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind=None):
    # 모델 모듈을 import 해야 metadata에 테이블이 등록된다
    from stickerdiary.user import models as user_models  # noqa: F401
    from stickerdiary.diary import models as diary_models  # noqa: F401
    from stickerdiary.sticker import models as sticker_models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
