from stickerdiary.diary import service as diary_service
from stickerdiary.diary.schemas import DiaryRequest
from stickerdiary.sticker.models import Sticker
from stickerdiary.sticker.schemas import StickerRequest
from stickerdiary.sticker.service import delete_stickers, list_stickers, replace_stickers
from stickerdiary.transaction import transactional_session


def make_stickers(*z_indexes):
    return [StickerRequest(type="emoji", src=f"/stickers/{z}.png", z_index=z) for z in z_indexes]


def test_scenario_two_stickers_replaced_by_one(db, user):
    diary = diary_service.create_diary(db, user.id, DiaryRequest(title="t", stickers=make_stickers(1, 2)))

    diary_service.update_diary(db, diary.id, DiaryRequest(title="t", stickers=make_stickers(5)))

    stickers = list_stickers(db, diary.id)
    assert [s.z_index for s in stickers] == [5]


def test_replace_keeps_given_z_index_and_orders_ascending(db, user):
    diary = diary_service.create_diary(db, user.id, DiaryRequest(title="t"))

    with transactional_session(db) as session:
        returned = replace_stickers(session, diary, make_stickers(3, 1, 7))

    assert [s.z_index for s in returned] == [1, 3, 7]
    assert [s.z_index for s in list_stickers(db, diary.id)] == [1, 3, 7]
    assert [s.src for s in list_stickers(db, diary.id)] == ["/stickers/1.png", "/stickers/3.png", "/stickers/7.png"]


def test_duplicate_z_index_keeps_insertion_order(db, user):
    specs = [
        StickerRequest(type="emoji", src="/a.png", z_index=2),
        StickerRequest(type="emoji", src="/b.png", z_index=2),
        StickerRequest(type="emoji", src="/c.png", z_index=1),
    ]
    diary = diary_service.create_diary(db, user.id, DiaryRequest(title="t", stickers=specs))

    assert [s.src for s in list_stickers(db, diary.id)] == ["/c.png", "/a.png", "/b.png"]
    assert [s.src for s in diary.stickers] == ["/c.png", "/a.png", "/b.png"]


def test_replace_with_empty_set_clears_stickers(db, user):
    diary = diary_service.create_diary(db, user.id, DiaryRequest(title="t", stickers=make_stickers(1, 2)))

    updated = diary_service.update_diary(db, diary.id, DiaryRequest(title="t", stickers=[]))

    assert updated.stickers == []
    assert updated.sticker_count == 0


def test_replace_only_touches_own_diary(db, user):
    first = diary_service.create_diary(db, user.id, DiaryRequest(title="a", stickers=make_stickers(1, 2)))
    second = diary_service.create_diary(db, user.id, DiaryRequest(title="b", stickers=make_stickers(4)))

    diary_service.update_diary(db, first.id, DiaryRequest(title="a", stickers=make_stickers(9)))

    assert [s.z_index for s in list_stickers(db, second.id)] == [4]


def test_sticker_defaults(db, user):
    diary = diary_service.create_diary(
        db, user.id, DiaryRequest(title="t", stickers=[StickerRequest(type="emoji", src="/x.png")])
    )

    sticker = list_stickers(db, diary.id)[0]
    assert sticker.rotation == 0.0
    assert sticker.z_index == 1
    assert (sticker.x, sticker.y, sticker.width, sticker.height) == (0, 0, 0, 0)


def test_delete_stickers_returns_count(db, user):
    diary = diary_service.create_diary(db, user.id, DiaryRequest(title="t", stickers=make_stickers(1, 2, 3)))

    with transactional_session(db) as session:
        removed = delete_stickers(session, diary.id)

    assert removed == 3
    assert db.query(Sticker).count() == 0
