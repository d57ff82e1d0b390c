from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session
from stickerdiary.database import get_db
from stickerdiary.statistics import schemas
from stickerdiary.statistics.service import count_diaries_by_month, get_user_statistics
from stickerdiary.user.auth import get_current_user
from stickerdiary.user.models import User

router = APIRouter()

@router.get(
    "",
    response_model=schemas.DiaryStatisticsResponse,
    summary="다이어리 통계",
    description="로그인한 사용자의 다이어리/스티커/좋아요 통계를 반환합니다."
)
def get_statistics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return get_user_statistics(db, current_user.id)

@router.get(
    "/{year}/{month}/count",
    response_model=schemas.DiaryCountResponse,
    summary="특정 연/월의 다이어리 개수",
    description="입력한 연도와 월에 작성한 다이어리 개수를 반환합니다. 휴지통은 제외합니다."
)
def get_diary_count_by_month(
    year: int = Path(ge=1, le=9998),
    month: int = Path(),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    diary_count = count_diaries_by_month(db, current_user.id, year, month)
    return schemas.DiaryCountResponse(
        user_id=current_user.id,
        year=year,
        month=month,
        diary_count=diary_count
    )
