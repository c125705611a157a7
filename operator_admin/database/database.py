from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from operator_admin.config import Config, get_config


def build_engine(database_url: str, isolation_level: Optional[str] = None, **kwargs) -> Engine:
    """
    연결 URL로 SQLAlchemy 엔진을 생성합니다.

    SQLite는 기본적으로 외래 키 제약을 검사하지 않으므로, 연결마다
    'PRAGMA foreign_keys = ON'을 실행하여 연관 테이블의 참조 무결성을 보장합니다.
    """
    if isolation_level:
        kwargs["isolation_level"] = isolation_level

    if database_url.startswith("sqlite"):
        # connect_args는 SQLite에서만 필요합니다. (thread-safe 설정)
        kwargs.setdefault("connect_args", {"check_same_thread": False})

    new_engine = create_engine(database_url, **kwargs)

    if new_engine.dialect.name == "sqlite":
        @event.listens_for(new_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys = ON")
            cursor.close()

    return new_engine


# 데이터베이스 세션 생성을 위한 SessionLocal 클래스
# autocommit=False, autoflush=False로 설정하여, 명시적으로 commit을 호출해야 DB에 반영됩니다.
# 엔진은 configure()가 호출될 때 연결됩니다.
SessionLocal = sessionmaker(autocommit=False, autoflush=False)

# 모든 모델 클래스가 상속받을 Base 클래스
Base = declarative_base()

_engine: Optional[Engine] = None


def configure(config: Optional[Config] = None) -> Engine:
    """
    설정으로 엔진을 (다시) 만들고 SessionLocal에 연결합니다.
    설정을 주지 않으면 get_config()의 현재 설정을 사용합니다.
    """
    global _engine
    config = config or get_config()
    if _engine is not None:
        _engine.dispose()
    _engine = build_engine(config.data_source_name(), config.isolation_level())
    SessionLocal.configure(bind=_engine)
    return _engine


def get_engine() -> Engine:
    """현재 엔진을 반환합니다. 아직 만들어지지 않았다면 현재 설정으로 생성합니다."""
    if _engine is None:
        return configure()
    return _engine


def dispose_engine() -> None:
    """엔진의 연결 풀을 닫고, 다음 get_engine() 호출 때 다시 만들도록 합니다."""
    global _engine
    if _engine is not None:
        _engine.dispose()
        _engine = None
    SessionLocal.configure(bind=None)
