from sqlalchemy import create_engine, event        # SQLAlchemy 엔진 생성 도구
from sqlalchemy.orm import declarative_base        # 모델의 Base 클래스
from sqlalchemy.orm import sessionmaker            # 세션 팩토리 함수
import logging

from config.settings import settings               # ✅ 환경변수 설정 파일 불러오기

logger = logging.getLogger(__name__)


def build_engine(url: str, **kwargs):
    """URL 종류에 맞춰 엔진 생성 (SQLite는 스레드 체크 해제 + FK 활성화)"""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        engine = create_engine(url, **kwargs)

        @event.listens_for(engine, "connect")
        def _enable_sqlite_fk(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        **kwargs,
    )


# ✅ 환경변수에서 DB 연결 URL을 불러와 엔진 생성
engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)

# ✅ 세션 팩토리: DB 연결에 사용할 세션 생성기 정의
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ✅ 모델 정의 시 상속할 Base 클래스 (Declarative 방식 사용)
Base = declarative_base()


# ✅ 요청 단위 DB 세션 의존성
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """모델 테이블 생성 (서버 기동 시 1회)"""
    from models import users, students, subjects, attendance, timetable  # noqa: F401  Base.metadata에 모델 등록

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables ready")


def close_db():
    """커넥션 풀 정리 (서버 종료 시)"""
    engine.dispose()
    logger.info("Database connection pool disposed")
