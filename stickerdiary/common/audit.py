from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class AuditStamp:
    """
    생성/수정 시각 값 타입. 각 엔티티에 composite로 포함된다.
    값은 저장 계층(컬럼 default/onupdate)이 채운다.
    """
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
