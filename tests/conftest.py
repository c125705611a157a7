# tests/conftest.py
import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from operator_admin.database.database import Base, build_engine
from operator_admin.database import models

# ===================================================================
#  인메모리 SQLite 데이터베이스 Fixture
# ===================================================================

@pytest.fixture
def engine():
    """테스트마다 새로운 인메모리 SQLite 엔진을 만들고 모든 테이블을 생성합니다."""
    # StaticPool: 모든 세션이 같은 인메모리 연결을 공유하도록 합니다.
    test_engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()

@pytest.fixture
def db_session(engine):
    """요청 범위 세션과 동일한 설정의 세션을 생성합니다."""
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()

# ===================================================================
#  엔티티 Fixture (관계를 맺기 전에 양쪽 엔티티가 저장되어 있어야 합니다)
# ===================================================================

def _persist(db_session, *entities):
    db_session.add_all(entities)
    db_session.commit()
    return entities

@pytest.fixture
def hypervisor(db_session) -> models.Hypervisor:
    hv = models.Hypervisor(hypervisor_id="hv-1", mac="de:ad:be:ef:00:01", ipv6="fe80::1", meta={})
    _persist(db_session, hv)
    return hv

@pytest.fixture
def ipranges(db_session):
    ranges = [
        models.IPRange(
            iprange_id=f"ip-{i}", cidr=f"10.0.{i}.0/24", gateway=f"10.0.{i}.1",
            start_ip=f"10.0.{i}.10", end_ip=f"10.0.{i}.250", meta={},
        )
        for i in (1, 2, 3)
    ]
    _persist(db_session, *ranges)
    return ranges

@pytest.fixture
def network(db_session) -> models.Network:
    net = models.Network(network_id="net-1", name="public", meta={})
    _persist(db_session, net)
    return net

@pytest.fixture
def project(db_session) -> models.Project:
    proj = models.Project(project_id="proj-1", name="default", meta={})
    _persist(db_session, proj)
    return proj

@pytest.fixture
def users(db_session):
    people = [
        models.User(user_id=f"user-{i}", username=f"operator{i}", email=f"operator{i}@example.com", meta={})
        for i in (1, 2)
    ]
    _persist(db_session, *people)
    return people

@pytest.fixture
def permissions(db_session):
    perms = [
        models.Permission(permission_id="perm-1", name="create guest", service="guests", action="create", meta={}),
        models.Permission(permission_id="perm-2", name="delete guest", service="guests", action="delete", meta={}),
    ]
    _persist(db_session, *perms)
    return perms
