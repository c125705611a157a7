from typing import Callable, Iterable, List, Type, TypeVar

from operator_admin.utils.log import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def resolve_ids(
    ids: Iterable[str],
    find_by_ids: Callable[[List[str]], List[T]],
    get_id: Callable[[T], str],
    not_found_error: Type[Exception],
    label: str,
) -> List[T]:
    """
    ID 목록을 엔티티 목록으로 변환합니다. 중복 ID는 한 번만 포함되며 입력 순서를 유지합니다.

    관계 일괄 교체 전에 호출하여, 존재하지 않는 대상 때문에 트랜잭션이 롤백되기 전에
    어떤 ID가 잘못되었는지 호출자에게 알려줍니다.

    Args:
        ids: 조회할 ID 목록.
        find_by_ids: 리포지토리의 find_by_ids 메서드.
        get_id: 엔티티에서 ID를 꺼내는 함수.
        not_found_error: 누락된 ID가 있을 때 발생시킬 예외 클래스.
        label: 오류 메시지에 사용할 엔티티 이름.

    Raises:
        not_found_error: 존재하지 않는 ID가 하나라도 있을 때.
    """
    unique_ids = list(dict.fromkeys(ids))
    found = {get_id(entity): entity for entity in find_by_ids(unique_ids)}
    missing = [i for i in unique_ids if i not in found]
    if missing:
        logger.warning("%s ids not found: %s", label, missing)
        raise not_found_error(f"{label} with id(s) {missing} not found.")
    return [found[i] for i in unique_ids]
