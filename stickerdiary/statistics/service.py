from collections import Counter
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from stickerdiary.common.exceptions import FieldError, ValidationFailureError
from stickerdiary.diary.models import Diary
from stickerdiary.sticker.models import Sticker


def get_user_statistics(db: Session, user_id: int) -> dict:
    diary_count = db.query(func.count(Diary.id)).filter(
        Diary.user_id == user_id, Diary.is_deleted.is_(False)
    ).scalar()

    trash_count = db.query(func.count(Diary.id)).filter(
        Diary.user_id == user_id, Diary.is_deleted.is_(True)
    ).scalar()

    like_count = db.query(func.coalesce(func.sum(Diary.like_count), 0)).filter(
        Diary.user_id == user_id, Diary.is_deleted.is_(False)
    ).scalar()

    # 휴지통 제외, 다이어리별 스티커 수
    per_diary = (
        db.query(Sticker.diary_id, func.count(Sticker.id))
        .join(Diary, Diary.id == Sticker.diary_id)
        .filter(Diary.user_id == user_id, Diary.is_deleted.is_(False))
        .group_by(Sticker.diary_id)
        .all()
    )
    sticker_count = sum(count for _, count in per_diary)
    avg_sticker_count = round(sticker_count / len(per_diary), 2) if per_diary else 0.0

    genres = db.query(Diary.genre).filter(
        Diary.user_id == user_id, Diary.is_deleted.is_(False), Diary.genre.isnot(None)
    ).all()
    genre_distribution = Counter(g[0] for g in genres)

    return {
        "user_id": user_id,
        "diary_count": diary_count,
        "trash_count": trash_count,
        "like_count": int(like_count),
        "sticker_count": sticker_count,
        "avg_sticker_count": avg_sticker_count,
        "genre_distribution": dict(genre_distribution),
    }


def count_diaries_by_month(db: Session, user_id: int, year: int, month: int) -> int:
    if month < 1 or month > 12:
        raise ValidationFailureError([FieldError("month", "월(month)은 1~12 사이여야 합니다.")])

    start = datetime(year, month, 1)
    end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
    return db.query(func.count(Diary.id)).filter(
        Diary.user_id == user_id,
        Diary.is_deleted.is_(False),
        Diary.created_at >= start,
        Diary.created_at < end,
    ).scalar()
