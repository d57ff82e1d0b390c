from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import date as date_, datetime
from typing import Optional, List

from stickerdiary.sticker.schemas import StickerRequest, StickerResponse


# Request
class DiaryRequest(BaseModel):
    title: str = Field(max_length=200)
    memo: Optional[str] = None
    date: Optional[date_] = None
    genre: Optional[str] = Field(default=None, max_length=50)
    is_public: bool = False
    stickers: List[StickerRequest] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("제목은 필수입니다.")
        return value

# Response
class DiarySummaryResponse(BaseModel):
    id: int
    user_id: int
    title: str
    date: Optional[date_] = None
    genre: Optional[str] = None
    is_public: bool
    is_deleted: bool
    deleted_at: Optional[datetime] = None
    like_count: int
    sticker_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

class DiaryResponse(DiarySummaryResponse):
    memo: Optional[str] = None
    updated_at: Optional[datetime] = None
    stickers: List[StickerResponse]
