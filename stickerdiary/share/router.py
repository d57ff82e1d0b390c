from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from stickerdiary.database import get_db
from stickerdiary.diary import service
from stickerdiary.diary.schemas import DiaryResponse

router = APIRouter()


@router.get("/{diary_id}", response_model=DiaryResponse, summary="공유 다이어리 조회",
            description="공개 상태이고 휴지통에 없는 다이어리만 로그인 없이 조회할 수 있습니다.")
def get_shared_diary(diary_id: int, db: Session = Depends(get_db)):
    return service.get_public_diary(db, diary_id)


@router.post("/{diary_id}/like", response_model=DiaryResponse, summary="공유 다이어리 좋아요")
def like_shared_diary(diary_id: int, db: Session = Depends(get_db)):
    service.get_public_diary(db, diary_id)
    return service.toggle_like(db, diary_id)
