from sqlalchemy import Table, Column, String, ForeignKey
from ..database import Base

# 연관 테이블 이름. relations 엔진의 SQL 문에 직접 삽입되므로 반드시 이 상수만 사용합니다.
HYPERVISORS_IPRANGES = "hypervisors_ipranges"
IPRANGES_NETWORKS = "ipranges_networks"
PROJECTS_USERS = "projects_users"
PROJECTS_PERMISSIONS = "projects_permissions"


def _join_table(name: str, left: str, right: str) -> Table:
    """
    두 엔티티의 식별자 컬럼만으로 이루어진 연관 테이블을 정의합니다.
    두 컬럼이 함께 기본 키가 되므로 같은 쌍이 두 번 저장될 수 없고,
    한쪽 엔티티가 삭제되면 해당 관계도 함께 삭제됩니다.

    Args:
        name: 연관 테이블 이름.
        left: 'table.column' 형식의 첫 번째 외래 키 대상.
        right: 'table.column' 형식의 두 번째 외래 키 대상.
    """
    return Table(
        name,
        Base.metadata,
        Column(left.split(".")[1], String(36), ForeignKey(left, ondelete="CASCADE"), primary_key=True),
        Column(right.split(".")[1], String(36), ForeignKey(right, ondelete="CASCADE"), primary_key=True),
    )


hypervisors_ipranges = _join_table(HYPERVISORS_IPRANGES, "hypervisors.hypervisor_id", "ipranges.iprange_id")
ipranges_networks = _join_table(IPRANGES_NETWORKS, "ipranges.iprange_id", "networks.network_id")
projects_users = _join_table(PROJECTS_USERS, "projects.project_id", "users.user_id")
projects_permissions = _join_table(PROJECTS_PERMISSIONS, "projects.project_id", "permissions.permission_id")
