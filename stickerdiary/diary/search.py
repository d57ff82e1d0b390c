from datetime import date
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from stickerdiary.common.exceptions import FieldError, ValidationFailureError
from stickerdiary.diary.models import Diary
from stickerdiary.diary.service import get_user_diaries


def _active(db: Session, user_id: int):
    return db.query(Diary).filter(Diary.user_id == user_id, Diary.is_deleted.is_(False))


def search_by_keyword(db: Session, user_id: int, keyword: str) -> List[Diary]:
    # 제목 또는 메모에 대소문자 구분 없이 포함되는지 검사
    needle = keyword.lower()
    return (
        _active(db, user_id)
        .filter(or_(
            func.lower(Diary.title).contains(needle, autoescape=True),
            func.lower(Diary.memo).contains(needle, autoescape=True),
        ))
        .order_by(Diary.created_at.desc(), Diary.id.desc())
        .all()
    )


def search_by_date_range(db: Session, user_id: int, start_date: date, end_date: date) -> List[Diary]:
    if start_date > end_date:
        raise ValidationFailureError([FieldError("start_date", "시작일은 종료일보다 늦을 수 없습니다.")])
    return (
        _active(db, user_id)
        .filter(Diary.date.between(start_date, end_date))
        .order_by(Diary.date.desc(), Diary.id.desc())
        .all()
    )


def search_by_genre(db: Session, user_id: int, genre: str) -> List[Diary]:
    return (
        _active(db, user_id)
        .filter(Diary.genre == genre)
        .order_by(Diary.created_at.desc(), Diary.id.desc())
        .all()
    )


def search_diaries(
    db: Session,
    user_id: int,
    keyword: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    genre: Optional[str] = None,
) -> List[Diary]:
    """
    검색 조건 우선순위: 키워드 > 날짜 범위(둘 다 있을 때) > 장르 > 전체 목록.
    휴지통에 있는 다이어리는 어떤 경우에도 포함하지 않는다.
    """
    if keyword is not None and keyword.strip():
        return search_by_keyword(db, user_id, keyword)
    if start_date is not None and end_date is not None:
        return search_by_date_range(db, user_id, start_date, end_date)
    if genre is not None and genre.strip():
        return search_by_genre(db, user_id, genre)
    return get_user_diaries(db, user_id)
