# operator_admin/database/relations.py
"""
두 엔티티 사이의 다대다(many-to-many) 관계를 연관 테이블에 저장하는 범용 관계 엔진입니다.

하이퍼바이저-IP 대역, IP 대역-네트워크, 프로젝트-사용자, 프로젝트-권한처럼
두 컬럼으로만 이루어진 연관 테이블은 모두 이 모듈의 함수로 관리합니다.

테이블 이름과 컬럼 이름은 SQL 문에 직접 삽입되므로 반드시 코드 상수
(models.association의 관계 이름, 각 모델의 OWNER_COLUMN)에서만 와야 합니다.
식별자 값은 항상 바인드 파라미터로 전달됩니다.

변경 함수(add/remove/set/clear)는 전달받은 세션의 트랜잭션을 직접 커밋하거나 롤백합니다.
세션에 아직 커밋되지 않은 다른 ORM 변경이 있으면 관계 변경과 함께 커밋되고,
관계 변경이 실패하면 함께 버려집니다. 따라서 호출 전에 다른 변경은 먼저 커밋해 두어야 합니다.
"""
from typing import Any, Dict, List, Protocol, Sequence, runtime_checkable

from sqlalchemy import text
from sqlalchemy.orm import Session


@runtime_checkable
class Relatable(Protocol):
    """관계에 참여할 수 있는 엔티티가 제공해야 하는 최소한의 식별 정보"""

    def identity(self) -> str:
        """엔티티의 고유 식별자(UUID 문자열)를 반환합니다."""
        ...

    def owner_column(self) -> str:
        """연관 테이블에서 이 엔티티의 식별자를 저장하는 컬럼 이름을 반환합니다."""
        ...


class MixedRelationColumnsError(ValueError):
    """set_relations에 서로 다른 종류의 엔티티가 함께 전달되었을 때"""
    pass


def add_relation(db: Session, relation_name: str, a: Relatable, b: Relatable) -> None:
    """
    두 엔티티 사이의 관계를 추가합니다. 이미 존재하는 관계라면 아무 것도 하지 않습니다.

    중복 검사와 삽입을 하나의 문장으로 실행하므로, 같은 쌍을 동시에 추가하더라도
    별도의 조회 후 삽입 과정에서 생기는 경쟁 구간이 없습니다.

    Args:
        db: 요청 범위의 데이터베이스 세션.
        relation_name: 연관 테이블 이름.
        a: 관계의 한쪽 엔티티.
        b: 관계의 다른 쪽 엔티티.
    """
    a_column, b_column = a.owner_column(), b.owner_column()
    sql = f"""
        INSERT INTO {relation_name} ({a_column}, {b_column})
        SELECT :a_id, :b_id
        WHERE NOT EXISTS (
            SELECT 1 FROM {relation_name}
            WHERE {a_column} = :a_id AND {b_column} = :b_id
        )
    """
    _execute_and_commit(db, sql, {"a_id": a.identity(), "b_id": b.identity()})


def remove_relation(db: Session, relation_name: str, a: Relatable, b: Relatable) -> None:
    """
    두 엔티티 사이의 관계를 삭제합니다. 존재하지 않는 관계를 삭제해도 오류가 아닙니다.
    두 컬럼이 모두 일치하는 행만 삭제합니다.
    """
    sql = f"""
        DELETE FROM {relation_name}
        WHERE {a.owner_column()} = :a_id AND {b.owner_column()} = :b_id
    """
    _execute_and_commit(db, sql, {"a_id": a.identity(), "b_id": b.identity()})


def set_relations(db: Session, relation_name: str, owner: Relatable, related: Sequence[Relatable]) -> None:
    """
    owner가 가진 관계 집합을 related 목록으로 원자적으로 교체합니다.

    하나의 트랜잭션 안에서 owner의 기존 관계를 모두 삭제한 뒤 새 관계를 한 번에 삽입합니다.
    어느 단계에서든 실패하면 트랜잭션 전체를 롤백하고 원래 예외를 그대로 다시 발생시키므로,
    호출자는 예외가 발생했다면 아무 변경도 일어나지 않았다고 간주할 수 있습니다.

    Args:
        db: 요청 범위의 데이터베이스 세션.
        relation_name: 연관 테이블 이름.
        owner: 관계 집합이 교체될 엔티티.
        related: 새 관계 대상 목록. 모두 같은 종류(같은 owner_column)여야 합니다.
            비어 있으면 clear_relations와 동일하게 동작합니다.

    Raises:
        MixedRelationColumnsError: related에 서로 다른 컬럼을 쓰는 엔티티가 섞여 있을 때.
            이 경우 어떤 SQL도 실행되지 않습니다.
    """
    if not related:
        clear_relations(db, relation_name, owner)
        return

    related_columns = {r.owner_column() for r in related}
    if len(related_columns) > 1:
        raise MixedRelationColumnsError(
            f"related entities for '{relation_name}' use different columns: {sorted(related_columns)}"
        )

    owner_column = owner.owner_column()
    related_column = related[0].owner_column()

    params: Dict[str, Any] = {"owner_id": owner.identity()}
    values = []
    for i, r in enumerate(related):
        params[f"related_{i}"] = r.identity()
        values.append(f"(:owner_id, :related_{i})")

    delete_sql = f"DELETE FROM {relation_name} WHERE {owner_column} = :owner_id"
    insert_sql = f"""
        INSERT INTO {relation_name} ({owner_column}, {related_column})
        VALUES {", ".join(values)}
    """

    try:
        # 삭제가 삽입보다 먼저 실행되는 것은 같은 트랜잭션 안의 실행 순서로 보장됩니다.
        db.execute(text(delete_sql), {"owner_id": params["owner_id"]})
        db.execute(text(insert_sql), params)
        db.commit()
    except Exception:
        db.rollback()
        raise


def clear_relations(db: Session, relation_name: str, owner: Relatable) -> None:
    """owner가 가진 모든 관계를 삭제합니다. 관계가 없어도 오류가 아닙니다."""
    sql = f"DELETE FROM {relation_name} WHERE {owner.owner_column()} = :owner_id"
    _execute_and_commit(db, sql, {"owner_id": owner.identity()})


def list_relations(db: Session, relation_name: str, owner: Relatable, related_column: str) -> List[str]:
    """
    owner와 연결된 상대편 식별자 목록을 연관 테이블에서 그대로 조회합니다. (조인 없음)

    Args:
        related_column: 상대편 식별자가 저장된 컬럼 이름.

    Returns:
        상대편 식별자의 정렬된 리스트.
    """
    sql = f"""
        SELECT {related_column} FROM {relation_name}
        WHERE {owner.owner_column()} = :owner_id
        ORDER BY {related_column} ASC
    """
    rows = db.execute(text(sql), {"owner_id": owner.identity()}).all()
    return [row[0] for row in rows]


def _execute_and_commit(db: Session, sql: str, params: Dict[str, Any]) -> None:
    try:
        db.execute(text(sql), params)
        db.commit()
    except Exception:
        # 세션을 계속 사용할 수 있도록 롤백한 뒤 원래 예외를 전달합니다.
        db.rollback()
        raise
