from datetime import datetime, timedelta, timezone

# 모든 날짜/시간은 서울 시간 기준 (DB에는 naive datetime으로 저장)
KST = timezone(timedelta(hours=9), "Asia/Seoul")


def now() -> datetime:
    return datetime.now(KST).replace(tzinfo=None)
