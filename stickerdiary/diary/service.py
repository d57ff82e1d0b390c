import logging
from typing import List

from sqlalchemy.orm import Session

from stickerdiary.common.exceptions import DiaryNotFoundError, UserNotFoundError
from stickerdiary.diary.models import Diary
from stickerdiary.diary.schemas import DiaryRequest
from stickerdiary.sticker.service import delete_stickers, replace_stickers
from stickerdiary.transaction import transactional_session
from stickerdiary.user.models import User

logger = logging.getLogger(__name__)


def _find_diary(db: Session, diary_id: int) -> Diary:
    diary = db.query(Diary).filter(Diary.id == diary_id).first()
    if diary is None:
        raise DiaryNotFoundError(diary_id)
    return diary


def _apply_fields(diary: Diary, request: DiaryRequest):
    # 부분 수정이 아니라 요청 값으로 전부 덮어쓴다
    diary.title = request.title
    diary.memo = request.memo
    diary.date = request.date
    diary.genre = request.genre
    diary.is_public = request.is_public


def create_diary(db: Session, user_id: int, request: DiaryRequest) -> Diary:
    with transactional_session(db) as session:
        if session.query(User.id).filter(User.id == user_id).first() is None:
            raise UserNotFoundError(user_id)

        diary = Diary(user_id=user_id)
        _apply_fields(diary, request)
        session.add(diary)
        session.flush()

        replace_stickers(session, diary, request.stickers)

    db.refresh(diary)
    logger.info(f"다이어리 생성: diary_id={diary.id}, user_id={user_id}, stickers={len(request.stickers)}")
    return diary


def get_diary(db: Session, diary_id: int) -> Diary:
    return _find_diary(db, diary_id)


def get_public_diary(db: Session, diary_id: int) -> Diary:
    diary = (
        db.query(Diary)
        .filter(Diary.id == diary_id, Diary.is_public.is_(True), Diary.is_deleted.is_(False))
        .first()
    )
    if diary is None:
        raise DiaryNotFoundError(message="공개된 다이어리를 찾을 수 없습니다.")
    return diary


def get_user_diaries(db: Session, user_id: int) -> List[Diary]:
    return (
        db.query(Diary)
        .filter(Diary.user_id == user_id, Diary.is_deleted.is_(False))
        .order_by(Diary.created_at.desc(), Diary.id.desc())
        .all()
    )


def get_trash_diaries(db: Session, user_id: int) -> List[Diary]:
    return (
        db.query(Diary)
        .filter(Diary.user_id == user_id, Diary.is_deleted.is_(True))
        .order_by(Diary.deleted_at.desc(), Diary.id.desc())
        .all()
    )


def update_diary(db: Session, diary_id: int, request: DiaryRequest) -> Diary:
    with transactional_session(db) as session:
        diary = _find_diary(session, diary_id)
        _apply_fields(diary, request)
        # 기존 스티커 삭제 후 새로 추가
        replace_stickers(session, diary, request.stickers)

    db.refresh(diary)
    return diary


def move_to_trash(db: Session, diary_id: int) -> Diary:
    with transactional_session(db) as session:
        diary = _find_diary(session, diary_id)
        # 이미 휴지통에 있으면 deleted_at만 다시 찍힌다
        diary.move_to_trash()

    db.refresh(diary)
    logger.info(f"휴지통 이동: diary_id={diary_id}")
    return diary


def restore_from_trash(db: Session, diary_id: int) -> Diary:
    with transactional_session(db) as session:
        diary = _find_diary(session, diary_id)
        diary.restore()

    db.refresh(diary)
    logger.info(f"휴지통 복원: diary_id={diary_id}")
    return diary


def delete_diary(db: Session, diary_id: int):
    with transactional_session(db) as session:
        diary = _find_diary(session, diary_id)
        removed = delete_stickers(session, diary.id)
        session.delete(diary)

    logger.info(f"다이어리 영구 삭제: diary_id={diary_id}, stickers={removed}")


def toggle_like(db: Session, diary_id: int) -> Diary:
    with transactional_session(db) as session:
        # DB에서 원자적으로 증가시킨다
        updated = (
            session.query(Diary)
            .filter(Diary.id == diary_id)
            .update({Diary.like_count: Diary.like_count + 1}, synchronize_session=False)
        )
        if updated == 0:
            raise DiaryNotFoundError(diary_id)

    return _refreshed(db, diary_id)


def unlike_diary(db: Session, diary_id: int) -> Diary:
    with transactional_session(db) as session:
        updated = (
            session.query(Diary)
            .filter(Diary.id == diary_id, Diary.like_count > 0)
            .update({Diary.like_count: Diary.like_count - 1}, synchronize_session=False)
        )
        if updated == 0:
            # 0에서 멈추는 경우와 다이어리가 없는 경우를 구분한다
            _find_diary(session, diary_id)

    return _refreshed(db, diary_id)


def toggle_public(db: Session, diary_id: int) -> Diary:
    with transactional_session(db) as session:
        diary = _find_diary(session, diary_id)
        diary.is_public = not diary.is_public

    db.refresh(diary)
    return diary


def _refreshed(db: Session, diary_id: int) -> Diary:
    diary = _find_diary(db, diary_id)
    db.refresh(diary)
    return diary
