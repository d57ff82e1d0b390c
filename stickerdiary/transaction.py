import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stickerdiary.common.exceptions import UnexpectedError

logger = logging.getLogger(__name__)


@contextmanager
def transactional_session(db: Session):
    """
    Spring Boot @Transactional처럼 사용할 수 있는 컨텍스트 매니저.
    블록 안의 쓰기는 모두 커밋되거나 모두 롤백된다.
    세션 종료는 get_db 의존성이 담당한다.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("트랜잭션 처리 중 DB 오류 발생")
        raise UnexpectedError() from e
    except Exception:
        db.rollback()
        raise
