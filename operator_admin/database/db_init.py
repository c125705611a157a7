import argparse
from typing import Optional

from operator_admin.config import load_config
from .database import SessionLocal, Base, configure, get_engine
from .models import *
from .relations import add_relation
from operator_admin.utils.log import get_logger, setup_logging

logger = get_logger(__name__)

def initialize_db(config_path: Optional[str] = None):
    """
    DB와 테이블을 생성하고, 기본 관리자 프로젝트와 사용자를 삽입합니다.

    Args:
        config_path: JSON 설정 파일 경로. 주어지면 파일을 읽은 뒤 그 설정으로 엔진을 만듭니다.
    """
    if config_path:
        load_config(config_path)
        configure()
    engine = get_engine()
    logger.info("Initializing database (%s)...", engine.url.render_as_string(hide_password=True))

    # 모든 테이블을 생성합니다. (이미 존재하면 생성하지 않음)
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created.")

    db = SessionLocal()
    try:
        # 기본 데이터가 이미 있는지 확인
        if db.query(User).first():
            logger.info("Default data already exists. Skipping seed.")
            return

        admin_project = Project.new(name="admin")
        admin_user = User.new(username="admin", email="admin@localhost")
        db.add(admin_project)
        db.add(admin_user)
        # 관계를 추가하기 전에 양쪽 엔티티가 먼저 저장되어 있어야 합니다.
        db.commit()

        add_relation(db, PROJECTS_USERS, admin_project, admin_user)
        logger.info("Default project and user created.")

    except Exception:
        logger.exception("Failed to seed default data.")
        db.rollback()
        raise
    finally:
        db.close()

if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="operator_admin 데이터베이스 초기화")
    parser.add_argument("-c", "--config", help="JSON 설정 파일 경로")
    args = parser.parse_args()

    if args.config:
        load_config(args.config)
    setup_logging()
    initialize_db()
