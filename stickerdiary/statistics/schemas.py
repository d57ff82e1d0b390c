from pydantic import BaseModel
from typing import Dict


class DiaryStatisticsResponse(BaseModel):
    user_id: int
    diary_count: int
    trash_count: int
    like_count: int
    sticker_count: int
    avg_sticker_count: float
    genre_distribution: Dict[str, int]

class DiaryCountResponse(BaseModel):
    user_id: int
    year: int
    month: int
    diary_count: int
