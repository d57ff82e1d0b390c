from typing import Iterable, List

from sqlalchemy.orm import Session

from stickerdiary.sticker.models import Sticker
from stickerdiary.sticker.schemas import StickerRequest


def list_stickers(db: Session, diary_id: int) -> List[Sticker]:
    return (
        db.query(Sticker)
        .filter(Sticker.diary_id == diary_id)
        .order_by(Sticker.z_index.asc(), Sticker.id.asc())
        .all()
    )


def delete_stickers(session: Session, diary_id: int) -> int:
    return (
        session.query(Sticker)
        .filter(Sticker.diary_id == diary_id)
        .delete(synchronize_session="fetch")
    )


def replace_stickers(session: Session, diary, specs: Iterable[StickerRequest]) -> List[Sticker]:
    """
    다이어리의 스티커 전체를 교체한다 (전부 삭제 후 전달된 순서대로 삽입).
    z_index는 요청 값을 그대로 쓴다. 커밋은 호출한 쪽 트랜잭션이 담당하므로
    중간에 실패하면 다이어리 변경과 함께 롤백된다.
    """
    delete_stickers(session, diary.id)

    stickers = [
        Sticker(
            diary_id=diary.id,
            type=spec.type,
            src=spec.src,
            x=spec.x,
            y=spec.y,
            width=spec.width,
            height=spec.height,
            rotation=spec.rotation,
            z_index=spec.z_index,
        )
        for spec in specs or []
    ]
    session.add_all(stickers)
    session.flush()

    # diary.stickers 관계는 다음 접근 시 다시 읽는다
    session.expire(diary, ["stickers"])
    return sorted(stickers, key=lambda s: (s.z_index, s.id))
