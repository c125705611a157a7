# tests/repositories/test_sqlalchemy_repositories.py
import pytest

from operator_admin.database import models
from operator_admin.repositories.sqlalchemy import (
    SqlalchemyHypervisorRepository,
    SqlalchemyIPRangeRepository,
    SqlalchemyNetworkRepository,
    SqlalchemyProjectRepository,
    SqlalchemyUserRepository,
    SqlalchemyPermissionRepository,
)


def ids(entities):
    return [e.identity() for e in entities]

# ===================================================================
#  하이퍼바이저 <-> IP 대역
# ===================================================================
class TestHypervisorIPRanges:
    @pytest.fixture
    def repo(self, db_session) -> SqlalchemyHypervisorRepository:
        return SqlalchemyHypervisorRepository(db_session)

    def test_relation_lifecycle(self, db_session, repo, hypervisor, ipranges):
        """추가, 삭제, 교체, 역방향 조회, 비우기 흐름을 순서대로 테스트합니다."""
        iprange = ipranges[0]
        iprange_repo = SqlalchemyIPRangeRepository(db_session)

        # 추가
        assert ids(repo.add_iprange(hypervisor, iprange)) == ["ip-1"]
        # 삭제
        assert repo.remove_iprange(hypervisor, iprange) == []
        # 교체
        assert ids(repo.set_ipranges(hypervisor, [iprange])) == ["ip-1"]
        # IP 대역 기준 역방향 조회
        assert ids(iprange_repo.list_hypervisors(iprange)) == ["hv-1"]
        # 비우기
        assert repo.set_ipranges(hypervisor, []) == []
        assert iprange_repo.list_hypervisors(iprange) == []

    def test_add_twice_returns_single_entry(self, repo, hypervisor, ipranges):
        repo.add_iprange(hypervisor, ipranges[1])

        assert ids(repo.add_iprange(hypervisor, ipranges[1])) == ["ip-2"]

    def test_deleting_iprange_removes_relation(self, db_session, repo, hypervisor, ipranges):
        """IP 대역이 삭제되면 연관 테이블의 관계도 함께 삭제되는지 테스트합니다."""
        repo.set_ipranges(hypervisor, ipranges)

        SqlalchemyIPRangeRepository(db_session).delete(ipranges[0])

        assert ids(repo.list_ipranges(hypervisor)) == ["ip-2", "ip-3"]

    def test_create_and_find(self, repo):
        created = repo.create(models.Hypervisor.new(mac="de:ad:be:ef:00:09", ipv6="fe80::9"))

        assert repo.find_by_id(created.hypervisor_id) is created
        assert created.meta == {}
        assert repo.find_by_id("missing") is None

    def test_update_persists_changes(self, db_session, repo, hypervisor):
        hypervisor.mac = "de:ad:be:ef:00:ff"
        hypervisor.meta = {"rack": "r1"}

        repo.update(hypervisor)
        db_session.expire_all()

        reloaded = repo.find_by_id("hv-1")
        assert reloaded.mac == "de:ad:be:ef:00:ff"
        assert reloaded.meta == {"rack": "r1"}

# ===================================================================
#  IP 대역 기준 하이퍼바이저 교체
# ===================================================================
class TestIPRangeHypervisors:
    @pytest.fixture
    def hypervisors(self, db_session, hypervisor):
        other = models.Hypervisor(hypervisor_id="hv-2", mac="de:ad:be:ef:00:02", ipv6="fe80::2", meta={})
        db_session.add(other)
        db_session.commit()
        return [hypervisor, other]

    def test_set_from_iprange_side_keeps_other_ipranges(self, db_session, hypervisors, ipranges):
        """IP 대역 기준으로 교체하면 해당 IP 대역의 연결만 바뀌는지 테스트합니다."""
        # === Arrange ===
        hv_repo = SqlalchemyHypervisorRepository(db_session)
        repo = SqlalchemyIPRangeRepository(db_session)
        hv_repo.set_ipranges(hypervisors[0], [ipranges[0], ipranges[1]])

        # === Act ===
        result = repo.set_hypervisors(ipranges[0], [hypervisors[1]])

        # === Assert ===
        assert ids(result) == ["hv-2"]
        # hv-1은 ip-1만 잃고 ip-2는 그대로 유지
        assert ids(hv_repo.list_ipranges(hypervisors[0])) == ["ip-2"]
        assert ids(hv_repo.list_ipranges(hypervisors[1])) == ["ip-1"]

    def test_add_and_remove_from_iprange_side(self, db_session, hypervisors, ipranges):
        repo = SqlalchemyIPRangeRepository(db_session)

        assert ids(repo.add_hypervisor(ipranges[2], hypervisors[0])) == ["hv-1"]
        # 같은 쌍을 반대 방향에서 추가해도 행은 하나만 존재
        SqlalchemyHypervisorRepository(db_session).add_iprange(hypervisors[0], ipranges[2])
        assert ids(repo.list_hypervisors(ipranges[2])) == ["hv-1"]

        assert repo.remove_hypervisor(ipranges[2], hypervisors[0]) == []

# ===================================================================
#  IP 대역 <-> 네트워크
# ===================================================================
class TestIPRangeNetworks:
    def test_relation_lifecycle(self, db_session, ipranges, network):
        repo = SqlalchemyIPRangeRepository(db_session)
        network_repo = SqlalchemyNetworkRepository(db_session)

        assert ids(repo.add_network(ipranges[0], network)) == ["net-1"]
        repo.add_network(ipranges[1], network)
        assert ids(network_repo.list_ipranges(network)) == ["ip-1", "ip-2"]

        assert repo.remove_network(ipranges[0], network) == []
        assert ids(network_repo.list_ipranges(network)) == ["ip-2"]

        assert repo.set_networks(ipranges[1], []) == []
        assert network_repo.list_ipranges(network) == []

    def test_network_owns_its_iprange_set(self, db_session, ipranges, network):
        """네트워크 기준으로 IP 대역 목록을 교체할 수 있는지 테스트합니다."""
        # === Arrange ===
        other = models.Network(network_id="net-2", name="private", meta={})
        db_session.add(other)
        db_session.commit()
        repo = SqlalchemyNetworkRepository(db_session)
        repo.set_ipranges(other, [ipranges[0]])

        # === Act ===
        result = repo.set_ipranges(network, [ipranges[1], ipranges[2]])

        # === Assert ===
        assert ids(result) == ["ip-2", "ip-3"]
        assert ids(repo.list_ipranges(other)) == ["ip-1"]
        assert ids(SqlalchemyIPRangeRepository(db_session).list_networks(ipranges[1])) == ["net-1"]

    def test_network_add_and_remove_iprange(self, db_session, ipranges, network):
        repo = SqlalchemyNetworkRepository(db_session)

        assert ids(repo.add_iprange(network, ipranges[2])) == ["ip-3"]
        assert repo.remove_iprange(network, ipranges[2]) == []

    def test_find_by_ids(self, db_session, ipranges):
        repo = SqlalchemyIPRangeRepository(db_session)

        found = repo.find_by_ids(["ip-3", "ip-1", "missing"])

        assert sorted(ids(found)) == ["ip-1", "ip-3"]
        assert repo.find_by_ids([]) == []

    def test_network_find_by_name(self, db_session, network):
        repo = SqlalchemyNetworkRepository(db_session)

        assert repo.find_by_name("public") is network
        assert repo.find_by_name("private") is None

# ===================================================================
#  프로젝트 <-> 사용자 / 권한
# ===================================================================
class TestProjectRelations:
    @pytest.fixture
    def repo(self, db_session) -> SqlalchemyProjectRepository:
        return SqlalchemyProjectRepository(db_session)

    def test_users_lifecycle(self, db_session, repo, project, users):
        user_repo = SqlalchemyUserRepository(db_session)

        assert ids(repo.add_user(project, users[0])) == ["user-1"]
        assert ids(repo.set_users(project, users)) == ["user-1", "user-2"]
        assert ids(user_repo.list_projects(users[1])) == ["proj-1"]
        assert ids(repo.remove_user(project, users[0])) == ["user-2"]
        assert repo.set_users(project, []) == []

    def test_permissions_lifecycle(self, db_session, repo, project, permissions):
        permission_repo = SqlalchemyPermissionRepository(db_session)

        assert ids(repo.add_permission(project, permissions[1])) == ["perm-2"]
        assert ids(repo.set_permissions(project, [permissions[0]])) == ["perm-1"]
        assert ids(permission_repo.list_projects(permissions[0])) == ["proj-1"]
        assert permission_repo.list_projects(permissions[1]) == []
        assert repo.remove_permission(project, permissions[0]) == []

    def test_deleting_user_removes_membership(self, db_session, repo, project, users):
        repo.set_users(project, users)

        SqlalchemyUserRepository(db_session).delete(users[1])

        assert ids(repo.list_users(project)) == ["user-1"]

    def test_deleting_project_removes_all_relations(self, db_session, repo, project, users, permissions):
        repo.set_users(project, users)
        repo.set_permissions(project, permissions)

        repo.delete(project)

        assert SqlalchemyUserRepository(db_session).list_projects(users[0]) == []
        permission_repo = SqlalchemyPermissionRepository(db_session)
        assert permission_repo.list_projects(permissions[0]) == []
        assert permission_repo.find_by_id("perm-1") is not None

    def test_find_by_ids_and_update(self, db_session, repo, project):
        assert ids(repo.find_by_ids(["proj-1", "missing"])) == ["proj-1"]

        project.name = "renamed"
        repo.update(project)
        db_session.expire_all()

        assert repo.find_by_id("proj-1").name == "renamed"

# ===================================================================
#  사용자 / 권한 기준 프로젝트 교체
# ===================================================================
class TestOtherSideProjectRelations:
    @pytest.fixture
    def projects(self, db_session, project):
        other = models.Project(project_id="proj-2", name="staging", meta={})
        db_session.add(other)
        db_session.commit()
        return [project, other]

    def test_set_from_user_side_replaces_only_that_user(self, db_session, projects, users):
        """사용자 기준으로 교체하면 그 사용자의 소속만 바뀌고 다른 사용자의 소속은 유지되는지 테스트합니다."""
        # === Arrange ===
        project_repo = SqlalchemyProjectRepository(db_session)
        repo = SqlalchemyUserRepository(db_session)
        project_repo.set_users(projects[0], users)

        # === Act ===
        result = repo.set_projects(users[0], [projects[1]])

        # === Assert ===
        assert ids(result) == ["proj-2"]
        assert ids(repo.list_projects(users[1])) == ["proj-1"]
        assert ids(project_repo.list_users(projects[0])) == ["user-2"]
        assert ids(project_repo.list_users(projects[1])) == ["user-1"]

    def test_user_add_and_remove_project(self, db_session, projects, users):
        repo = SqlalchemyUserRepository(db_session)

        assert ids(repo.add_project(users[1], projects[1])) == ["proj-2"]
        assert ids(repo.add_project(users[1], projects[0])) == ["proj-1", "proj-2"]
        assert ids(repo.remove_project(users[1], projects[1])) == ["proj-1"]

    def test_set_from_permission_side(self, db_session, projects, permissions):
        # === Arrange ===
        project_repo = SqlalchemyProjectRepository(db_session)
        repo = SqlalchemyPermissionRepository(db_session)
        project_repo.set_permissions(projects[0], permissions)

        # === Act ===
        result = repo.set_projects(permissions[0], [projects[1]])

        # === Assert ===
        assert ids(result) == ["proj-2"]
        assert ids(project_repo.list_permissions(projects[0])) == ["perm-2"]
        assert ids(project_repo.list_permissions(projects[1])) == ["perm-1"]

    def test_permission_add_and_remove_project(self, db_session, projects, permissions):
        repo = SqlalchemyPermissionRepository(db_session)

        assert ids(repo.add_project(permissions[1], projects[0])) == ["proj-1"]
        assert repo.remove_project(permissions[1], projects[0]) == []

# ===================================================================
#  사용자 조회
# ===================================================================
class TestUserLookups:
    def test_find_by_username_and_email(self, db_session, users):
        repo = SqlalchemyUserRepository(db_session)

        assert repo.find_by_username("operator2") is users[1]
        assert repo.find_by_email(users[0].email) is users[0]
        assert repo.find_by_email("nobody@example.com") is None

    def test_list_all_orders_by_username(self, db_session, users):
        repo = SqlalchemyUserRepository(db_session)

        assert [u.username for u in repo.list_all()] == ["operator1", "operator2"]
