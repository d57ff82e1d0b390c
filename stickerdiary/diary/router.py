from datetime import date
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from stickerdiary.common.exceptions import DiaryNotFoundError
from stickerdiary.database import get_db
from stickerdiary.diary import service
from stickerdiary.diary.models import Diary
from stickerdiary.diary.schemas import DiaryRequest, DiaryResponse, DiarySummaryResponse
from stickerdiary.diary.search import search_diaries
from stickerdiary.sticker.schemas import StickerResponse
from stickerdiary.sticker.service import list_stickers
from stickerdiary.user.auth import get_current_user
from stickerdiary.user.models import User
from typing import List, Optional
import logging

router = APIRouter()

logger = logging.getLogger(__name__)


def get_owned_diary(
    diary_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Diary:
    """
    로그인한 사용자의 다이어리만 허용한다. 남의 다이어리는 존재하지 않는 것처럼 404.
    """
    diary = service.get_diary(db, diary_id)
    if diary.user_id != current_user.id:
        logger.warning(f"다른 사용자의 다이어리 접근 시도: diary_id={diary_id}, user_id={current_user.id}")
        raise DiaryNotFoundError(diary_id)
    return diary


@router.post("", response_model=DiaryResponse, status_code=status.HTTP_201_CREATED,
             summary="다이어리 작성", description="다이어리와 스티커를 한 번에 저장합니다.")
def create_diary(
    request: DiaryRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return service.create_diary(db, current_user.id, request)


@router.get("", response_model=List[DiarySummaryResponse],
            summary="내 다이어리 목록 조회", description="휴지통을 제외한 다이어리를 최신순으로 조회합니다.")
def get_my_diaries(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return service.get_user_diaries(db, current_user.id)


@router.get("/trash", response_model=List[DiarySummaryResponse],
            summary="휴지통 조회", description="휴지통에 있는 다이어리를 삭제된 시각 최신순으로 조회합니다.")
def get_trash(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return service.get_trash_diaries(db, current_user.id)


@router.get("/search", response_model=List[DiarySummaryResponse],
            summary="다이어리 검색",
            description="키워드 > 날짜 범위 > 장르 순으로 하나의 조건만 적용합니다. 조건이 없으면 전체 목록입니다.")
def search(
    keyword: Optional[str] = Query(default=None),
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    genre: Optional[str] = Query(default=None, max_length=50),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return search_diaries(db, current_user.id, keyword=keyword, start_date=start_date, end_date=end_date, genre=genre)


@router.get("/{diary_id}", response_model=DiaryResponse, summary="다이어리 조회", description="다이어리 상세와 스티커를 조회합니다.")
def get_diary(diary: Diary = Depends(get_owned_diary)):
    return diary


@router.get("/{diary_id}/stickers", response_model=List[StickerResponse],
            summary="스티커 조회", description="다이어리의 스티커를 z-index 오름차순으로 조회합니다.")
def get_stickers(diary: Diary = Depends(get_owned_diary), db: Session = Depends(get_db)):
    return list_stickers(db, diary.id)


@router.put("/{diary_id}", response_model=DiaryResponse,
            summary="다이어리 수정", description="모든 필드를 요청 값으로 덮어쓰고 스티커 전체를 교체합니다.")
def update_diary(
    request: DiaryRequest,
    diary: Diary = Depends(get_owned_diary),
    db: Session = Depends(get_db)
):
    return service.update_diary(db, diary.id, request)


@router.post("/{diary_id}/trash", response_model=DiaryResponse, summary="휴지통으로 이동")
def move_to_trash(diary: Diary = Depends(get_owned_diary), db: Session = Depends(get_db)):
    return service.move_to_trash(db, diary.id)


@router.post("/{diary_id}/restore", response_model=DiaryResponse, summary="휴지통에서 복원")
def restore_from_trash(diary: Diary = Depends(get_owned_diary), db: Session = Depends(get_db)):
    return service.restore_from_trash(db, diary.id)


@router.delete("/{diary_id}", summary="다이어리 영구 삭제", description="다이어리와 스티커를 영구 삭제합니다. 되돌릴 수 없습니다.")
def delete_diary(diary: Diary = Depends(get_owned_diary), db: Session = Depends(get_db)):
    service.delete_diary(db, diary.id)
    return {"message": "다이어리가 삭제되었습니다!"}


@router.post("/{diary_id}/like", response_model=DiaryResponse, summary="좋아요")
def like_diary(diary: Diary = Depends(get_owned_diary), db: Session = Depends(get_db)):
    return service.toggle_like(db, diary.id)


@router.delete("/{diary_id}/like", response_model=DiaryResponse, summary="좋아요 취소", description="좋아요 수는 0 아래로 내려가지 않습니다.")
def unlike_diary(diary: Diary = Depends(get_owned_diary), db: Session = Depends(get_db)):
    return service.unlike_diary(db, diary.id)


@router.post("/{diary_id}/toggle-public", response_model=DiaryResponse, summary="공개 여부 전환")
def toggle_public(diary: Diary = Depends(get_owned_diary), db: Session = Depends(get_db)):
    return service.toggle_public(db, diary.id)
