from datetime import date

import pytest

from stickerdiary.common.exceptions import DiaryNotFoundError, UnexpectedError, UserNotFoundError
from stickerdiary.diary import service
from stickerdiary.diary.models import Diary
from stickerdiary.diary.schemas import DiaryRequest
from stickerdiary.sticker.models import Sticker
from stickerdiary.sticker.schemas import StickerRequest
from stickerdiary.sticker.service import list_stickers


def sticker(z_index, type="emoji", src="/stickers/star.png", **kwargs):
    return StickerRequest(type=type, src=src, z_index=z_index, **kwargs)


def diary_request(**overrides):
    fields = {
        "title": "비 오는 날",
        "memo": "우산을 잃어버렸다",
        "date": date(2024, 5, 1),
        "genre": "daily",
        "stickers": [sticker(1), sticker(2, type="text", src="/stickers/hello.png")],
    }
    fields.update(overrides)
    return DiaryRequest(**fields)


def assert_trash_invariant(diary: Diary):
    assert diary.is_deleted == (diary.deleted_at is not None)


def test_create_diary_with_stickers(db, user):
    diary = service.create_diary(db, user.id, diary_request())

    assert diary.id is not None
    assert diary.user_id == user.id
    assert diary.is_public is False
    assert diary.is_deleted is False
    assert diary.like_count == 0
    assert [s.z_index for s in diary.stickers] == [1, 2]
    assert diary.sticker_count == 2
    assert diary.audit.created_at is not None
    assert_trash_invariant(diary)


def test_create_diary_for_missing_user(db):
    with pytest.raises(UserNotFoundError):
        service.create_diary(db, 999, diary_request())

    assert db.query(Diary).count() == 0


def test_get_diary_not_found(db):
    with pytest.raises(DiaryNotFoundError):
        service.get_diary(db, 123)


def test_update_replaces_fields_and_stickers(db, user):
    diary = service.create_diary(db, user.id, diary_request(is_public=True))

    updated = service.update_diary(
        db,
        diary.id,
        DiaryRequest(title="맑은 날", stickers=[sticker(5, rotation=12.5, x=10, y=20, width=30, height=40)]),
    )

    # 전체 덮어쓰기: 빠진 필드는 기본값으로 돌아간다
    assert updated.title == "맑은 날"
    assert updated.memo is None
    assert updated.date is None
    assert updated.genre is None
    assert updated.is_public is False

    stickers = list_stickers(db, diary.id)
    assert len(stickers) == 1
    assert stickers[0].z_index == 5
    assert stickers[0].rotation == 12.5
    assert (stickers[0].x, stickers[0].y, stickers[0].width, stickers[0].height) == (10, 20, 30, 40)
    assert_trash_invariant(updated)


def test_update_does_not_change_trash_state(db, user):
    diary = service.create_diary(db, user.id, diary_request())
    service.move_to_trash(db, diary.id)

    updated = service.update_diary(db, diary.id, diary_request(title="still trashed"))

    assert updated.is_deleted is True
    assert_trash_invariant(updated)


def test_update_failure_keeps_previous_sticker_set(db, user):
    diary = service.create_diary(db, user.id, diary_request())
    # src가 비어 있는 스티커는 INSERT 단계에서 실패한다
    broken = StickerRequest.model_construct(
        type="emoji", src=None, x=0, y=0, width=0, height=0, rotation=0.0, z_index=9
    )

    with pytest.raises(UnexpectedError):
        service.update_diary(db, diary.id, DiaryRequest.model_construct(
            title="changed", memo=None, date=None, genre=None, is_public=True, stickers=[sticker(3), broken],
        ))

    reloaded = service.get_diary(db, diary.id)
    assert reloaded.title == "비 오는 날"
    assert reloaded.is_public is False
    assert [s.z_index for s in list_stickers(db, diary.id)] == [1, 2]


def test_move_to_trash_and_restore(db, user):
    diary = service.create_diary(db, user.id, diary_request())
    before = (diary.title, diary.memo, diary.date, diary.genre, diary.like_count,
              [(s.type, s.src, s.z_index) for s in diary.stickers])

    trashed = service.move_to_trash(db, diary.id)
    assert trashed.is_deleted is True
    assert trashed.deleted_at is not None
    assert_trash_invariant(trashed)

    restored = service.restore_from_trash(db, diary.id)
    assert restored.is_deleted is False
    assert restored.deleted_at is None
    assert_trash_invariant(restored)

    after = (restored.title, restored.memo, restored.date, restored.genre, restored.like_count,
             [(s.type, s.src, s.z_index) for s in restored.stickers])
    assert after == before


def test_move_to_trash_twice_restamps(db, user):
    diary = service.create_diary(db, user.id, diary_request())

    first = service.move_to_trash(db, diary.id).deleted_at
    second = service.move_to_trash(db, diary.id).deleted_at

    assert second >= first


def test_trash_listing(db, user):
    kept = service.create_diary(db, user.id, diary_request(title="kept"))
    trashed = service.create_diary(db, user.id, diary_request(title="trashed"))
    service.move_to_trash(db, trashed.id)

    assert [d.id for d in service.get_user_diaries(db, user.id)] == [kept.id]
    assert [d.id for d in service.get_trash_diaries(db, user.id)] == [trashed.id]


def test_user_diaries_newest_first(db, user, other_user):
    first = service.create_diary(db, user.id, diary_request(title="first"))
    second = service.create_diary(db, user.id, diary_request(title="second"))
    service.create_diary(db, other_user.id, diary_request(title="someone else"))

    assert [d.id for d in service.get_user_diaries(db, user.id)] == [second.id, first.id]


def test_delete_diary_removes_stickers(db, user):
    diary = service.create_diary(db, user.id, diary_request())
    diary_id = diary.id

    service.delete_diary(db, diary_id)

    assert db.query(Sticker).filter(Sticker.diary_id == diary_id).count() == 0
    assert list_stickers(db, diary_id) == []
    with pytest.raises(DiaryNotFoundError):
        service.get_diary(db, diary_id)


def test_delete_trashed_diary(db, user):
    diary = service.create_diary(db, user.id, diary_request())
    service.move_to_trash(db, diary.id)

    service.delete_diary(db, diary.id)

    assert service.get_trash_diaries(db, user.id) == []


def test_toggle_like_increments_every_time(db, user):
    diary = service.create_diary(db, user.id, diary_request())

    for _ in range(5):
        diary = service.toggle_like(db, diary.id)

    assert diary.like_count == 5


def test_unlike_never_goes_below_zero(db, user):
    diary = service.create_diary(db, user.id, diary_request())
    service.toggle_like(db, diary.id)

    assert service.unlike_diary(db, diary.id).like_count == 0
    assert service.unlike_diary(db, diary.id).like_count == 0


def test_like_missing_diary(db):
    with pytest.raises(DiaryNotFoundError):
        service.toggle_like(db, 404)
    with pytest.raises(DiaryNotFoundError):
        service.unlike_diary(db, 404)


def test_toggle_public_twice_returns_to_private(db, user):
    diary = service.create_diary(db, user.id, diary_request())

    assert service.toggle_public(db, diary.id).is_public is True
    assert service.toggle_public(db, diary.id).is_public is False


def test_get_public_diary(db, user):
    diary = service.create_diary(db, user.id, diary_request())

    with pytest.raises(DiaryNotFoundError):
        service.get_public_diary(db, diary.id)

    service.toggle_public(db, diary.id)
    assert service.get_public_diary(db, diary.id).id == diary.id

    # 공개 상태여도 휴지통에 있으면 공유되지 않는다
    service.move_to_trash(db, diary.id)
    with pytest.raises(DiaryNotFoundError):
        service.get_public_diary(db, diary.id)
