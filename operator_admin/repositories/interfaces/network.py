from abc import ABC, abstractmethod
from typing import List, Optional
from operator_admin.database import models

class INetworkRepository(ABC):
    @abstractmethod
    def create(self, network_model: models.Network) -> models.Network:
        """새로운 네트워크를 데이터베이스에 생성합니다."""
        pass

    @abstractmethod
    def update(self, network: models.Network) -> models.Network:
        """변경된 네트워크 속성을 저장합니다."""
        pass

    @abstractmethod
    def find_by_id(self, network_id: str) -> Optional[models.Network]:
        """고유 ID로 특정 네트워크를 조회합니다."""
        pass

    @abstractmethod
    def find_by_ids(self, network_ids: List[str]) -> List[models.Network]:
        """여러 ID에 해당하는 네트워크를 조회합니다."""
        pass

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[models.Network]:
        """이름으로 특정 네트워크를 조회합니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[models.Network]:
        """모든 네트워크의 목록을 조회합니다."""
        pass

    @abstractmethod
    def delete(self, network: models.Network) -> bool:
        """특정 네트워크를 데이터베이스에서 삭제합니다."""
        pass

    @abstractmethod
    def list_ipranges(self, network: models.Network) -> List[models.IPRange]:
        """네트워크에 속한 모든 IP 대역을 조회합니다."""
        pass

    @abstractmethod
    def add_iprange(self, network: models.Network, iprange: models.IPRange) -> List[models.IPRange]:
        """네트워크에 IP 대역을 추가하고, 변경 후 IP 대역 목록을 반환합니다."""
        pass

    @abstractmethod
    def remove_iprange(self, network: models.Network, iprange: models.IPRange) -> List[models.IPRange]:
        """네트워크에서 IP 대역을 제외하고, 남은 IP 대역 목록을 반환합니다."""
        pass

    @abstractmethod
    def set_ipranges(self, network: models.Network, ipranges: List[models.IPRange]) -> List[models.IPRange]:
        """네트워크에 속한 IP 대역을 주어진 목록으로 원자적으로 교체합니다."""
        pass
