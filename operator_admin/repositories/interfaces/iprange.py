from abc import ABC, abstractmethod
from typing import List, Optional
from operator_admin.database import models

class IIPRangeRepository(ABC):
    """
    IP 대역 저장소. IP 대역은 두 관계의 양쪽에 모두 등장합니다.
    네트워크 쪽(ipranges_networks)은 IP 대역이 소유자이고,
    하이퍼바이저 쪽(hypervisors_ipranges)은 IP 대역 기준으로 교체할 때 소유자가 됩니다.
    """

    @abstractmethod
    def create(self, iprange_model: models.IPRange) -> models.IPRange:
        """새로운 IP 대역을 데이터베이스에 생성합니다."""
        pass

    @abstractmethod
    def update(self, iprange: models.IPRange) -> models.IPRange:
        """변경된 IP 대역 속성을 저장합니다."""
        pass

    @abstractmethod
    def find_by_id(self, iprange_id: str) -> Optional[models.IPRange]:
        """고유 ID로 특정 IP 대역을 조회합니다."""
        pass

    @abstractmethod
    def find_by_ids(self, iprange_ids: List[str]) -> List[models.IPRange]:
        """여러 ID에 해당하는 IP 대역을 조회합니다. 존재하지 않는 ID는 결과에서 빠집니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[models.IPRange]:
        """모든 IP 대역의 목록을 조회합니다."""
        pass

    @abstractmethod
    def delete(self, iprange: models.IPRange) -> bool:
        """특정 IP 대역을 삭제합니다. 하이퍼바이저 및 네트워크와의 관계도 함께 삭제됩니다."""
        pass

    # --- IP 대역 <-> 네트워크 ---

    @abstractmethod
    def list_networks(self, iprange: models.IPRange) -> List[models.Network]:
        """IP 대역이 속한 모든 네트워크를 조회합니다."""
        pass

    @abstractmethod
    def add_network(self, iprange: models.IPRange, network: models.Network) -> List[models.Network]:
        """IP 대역을 네트워크에 연결하고, 변경 후 네트워크 목록을 반환합니다."""
        pass

    @abstractmethod
    def remove_network(self, iprange: models.IPRange, network: models.Network) -> List[models.Network]:
        """IP 대역과 네트워크의 연결을 해제하고, 남은 네트워크 목록을 반환합니다."""
        pass

    @abstractmethod
    def set_networks(self, iprange: models.IPRange, networks: List[models.Network]) -> List[models.Network]:
        """IP 대역이 속한 네트워크를 주어진 목록으로 원자적으로 교체합니다."""
        pass

    # --- IP 대역 <-> 하이퍼바이저 ---

    @abstractmethod
    def list_hypervisors(self, iprange: models.IPRange) -> List[models.Hypervisor]:
        """IP 대역이 연결된 모든 하이퍼바이저를 조회합니다."""
        pass

    @abstractmethod
    def add_hypervisor(self, iprange: models.IPRange, hypervisor: models.Hypervisor) -> List[models.Hypervisor]:
        """IP 대역에 하이퍼바이저를 연결하고, 변경 후 하이퍼바이저 목록을 반환합니다."""
        pass

    @abstractmethod
    def remove_hypervisor(self, iprange: models.IPRange, hypervisor: models.Hypervisor) -> List[models.Hypervisor]:
        """IP 대역과 하이퍼바이저의 연결을 해제하고, 남은 하이퍼바이저 목록을 반환합니다."""
        pass

    @abstractmethod
    def set_hypervisors(self, iprange: models.IPRange, hypervisors: List[models.Hypervisor]) -> List[models.Hypervisor]:
        """
        IP 대역에 연결된 하이퍼바이저를 주어진 목록으로 원자적으로 교체합니다.
        다른 IP 대역의 하이퍼바이저 연결은 변경되지 않습니다.
        """
        pass
