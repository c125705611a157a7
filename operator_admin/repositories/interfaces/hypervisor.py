from abc import ABC, abstractmethod
from typing import List, Optional
from operator_admin.database import models

class IHypervisorRepository(ABC):
    @abstractmethod
    def create(self, hypervisor_model: models.Hypervisor) -> models.Hypervisor:
        """새로운 하이퍼바이저를 데이터베이스에 생성합니다."""
        pass

    @abstractmethod
    def update(self, hypervisor: models.Hypervisor) -> models.Hypervisor:
        """변경된 하이퍼바이저 속성을 저장합니다."""
        pass

    @abstractmethod
    def find_by_id(self, hypervisor_id: str) -> Optional[models.Hypervisor]:
        """고유 ID로 특정 하이퍼바이저를 조회합니다."""
        pass

    @abstractmethod
    def find_by_ids(self, hypervisor_ids: List[str]) -> List[models.Hypervisor]:
        """여러 ID에 해당하는 하이퍼바이저를 조회합니다. 존재하지 않는 ID는 결과에서 빠집니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[models.Hypervisor]:
        """모든 하이퍼바이저의 목록을 조회합니다."""
        pass

    @abstractmethod
    def delete(self, hypervisor: models.Hypervisor) -> bool:
        """특정 하이퍼바이저를 삭제합니다. 연결된 IP 대역 관계도 함께 삭제됩니다."""
        pass

    @abstractmethod
    def list_ipranges(self, hypervisor: models.Hypervisor) -> List[models.IPRange]:
        """하이퍼바이저에 연결된 모든 IP 대역을 조회합니다."""
        pass

    @abstractmethod
    def add_iprange(self, hypervisor: models.Hypervisor, iprange: models.IPRange) -> List[models.IPRange]:
        """
        하이퍼바이저에 IP 대역을 연결합니다. 이미 연결되어 있으면 무시합니다.

        Returns:
            변경 후 하이퍼바이저에 연결된 IP 대역 목록.
        """
        pass

    @abstractmethod
    def remove_iprange(self, hypervisor: models.Hypervisor, iprange: models.IPRange) -> List[models.IPRange]:
        """하이퍼바이저와 IP 대역의 연결을 해제하고, 남은 IP 대역 목록을 반환합니다."""
        pass

    @abstractmethod
    def set_ipranges(self, hypervisor: models.Hypervisor, ipranges: List[models.IPRange]) -> List[models.IPRange]:
        """
        하이퍼바이저에 연결된 IP 대역을 주어진 목록으로 원자적으로 교체합니다.
        빈 목록이면 모든 연결을 해제합니다.
        """
        pass
