from typing import Any, Dict, List, Optional

from operator_admin.database import models
from operator_admin.repositories.interfaces import (
    IHypervisorRepository, IIPRangeRepository, INetworkRepository
)
from operator_admin.services.exceptions import (
    HypervisorNotFoundError, IPRangeNotFoundError, NetworkNotFoundError,
    NetworkCreationError, NetworkUpdateError,
)
from operator_admin.services.lookup import resolve_ids
from operator_admin.utils.log import get_logger

logger = get_logger(__name__)


def hypervisor_to_dict(hypervisor: models.Hypervisor) -> Dict[str, Any]:
    return {
        "id": hypervisor.hypervisor_id,
        "mac": hypervisor.mac,
        "ipv6": hypervisor.ipv6,
        "metadata": hypervisor.meta,
    }


def iprange_to_dict(iprange: models.IPRange) -> Dict[str, Any]:
    return {
        "id": iprange.iprange_id,
        "cidr": iprange.cidr,
        "gateway": iprange.gateway,
        "start": iprange.start_ip,
        "end": iprange.end_ip,
        "metadata": iprange.meta,
    }


def network_to_dict(network: models.Network) -> Dict[str, Any]:
    return {"id": network.network_id, "name": network.name, "metadata": network.meta}


class InventoryService:
    """하이퍼바이저, IP 대역, 네트워크와 이들 사이의 관계를 관리하는 서비스를 제공합니다."""

    def __init__(self, hypervisor_repo: IHypervisorRepository, iprange_repo: IIPRangeRepository, network_repo: INetworkRepository):
        """
        InventoryService를 초기화합니다.

        Args:
            hypervisor_repo: 하이퍼바이저 데이터와 하이퍼바이저-IP 대역 관계에 접근하기 위한 리포지토리.
            iprange_repo: IP 대역 데이터와 IP 대역 기준 네트워크/하이퍼바이저 관계에 접근하기 위한 리포지토리.
            network_repo: 네트워크 데이터와 네트워크 기준 IP 대역 관계에 접근하기 위한 리포지토리.
        """
        self.hypervisor_repo = hypervisor_repo
        self.iprange_repo = iprange_repo
        self.network_repo = network_repo

    # --------------------------------------------------------------------------
    ## 하이퍼바이저
    # --------------------------------------------------------------------------

    def create_hypervisor(self, mac: str, ipv6: str, metadata: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """새로운 하이퍼바이저를 등록합니다. ID는 새로 발급됩니다."""
        hypervisor = models.Hypervisor.new(mac=mac, ipv6=ipv6, meta=metadata or {})
        created = self.hypervisor_repo.create(hypervisor)
        logger.info("Hypervisor %s created (mac=%s).", created.hypervisor_id, created.mac)
        return hypervisor_to_dict(created)

    def list_hypervisors(self) -> List[Dict[str, Any]]:
        """모든 하이퍼바이저의 목록을 조회합니다."""
        return [hypervisor_to_dict(h) for h in self.hypervisor_repo.list_all()]

    def get_hypervisor(self, hypervisor_id: str) -> Dict[str, Any]:
        """
        ID로 특정 하이퍼바이저를 조회합니다.

        Raises:
            HypervisorNotFoundError: 해당 ID의 하이퍼바이저를 찾을 수 없을 때.
        """
        return hypervisor_to_dict(self._get_hypervisor(hypervisor_id))

    def update_hypervisor(self, hypervisor_id: str, mac: Optional[str] = None, ipv6: Optional[str] = None,
                          metadata: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        하이퍼바이저 속성을 수정합니다. None이 아닌 값만 반영되며, metadata는 통째로 교체됩니다.

        Raises:
            HypervisorNotFoundError: 해당 ID의 하이퍼바이저를 찾을 수 없을 때.
        """
        hypervisor = self._get_hypervisor(hypervisor_id)
        if mac is not None:
            hypervisor.mac = mac
        if ipv6 is not None:
            hypervisor.ipv6 = ipv6
        if metadata is not None:
            hypervisor.meta = dict(metadata)
        updated = self.hypervisor_repo.update(hypervisor)
        logger.info("Hypervisor %s updated.", hypervisor_id)
        return hypervisor_to_dict(updated)

    def delete_hypervisor(self, hypervisor_id: str) -> bool:
        """
        하이퍼바이저를 삭제합니다. 연결된 IP 대역 관계도 함께 삭제됩니다.

        Raises:
            HypervisorNotFoundError: 해당 ID의 하이퍼바이저를 찾을 수 없을 때.
        """
        hypervisor = self._get_hypervisor(hypervisor_id)
        self.hypervisor_repo.delete(hypervisor)
        logger.info("Hypervisor %s deleted.", hypervisor_id)
        return True

    def list_hypervisor_ipranges(self, hypervisor_id: str) -> List[Dict[str, Any]]:
        """하이퍼바이저에 연결된 IP 대역 목록을 조회합니다."""
        hypervisor = self._get_hypervisor(hypervisor_id)
        return [iprange_to_dict(r) for r in self.hypervisor_repo.list_ipranges(hypervisor)]

    def add_hypervisor_iprange(self, hypervisor_id: str, iprange_id: str) -> List[Dict[str, Any]]:
        """
        하이퍼바이저에 IP 대역을 연결합니다. 이미 연결되어 있어도 오류가 아닙니다.

        Returns:
            변경 후 하이퍼바이저에 연결된 IP 대역 목록.

        Raises:
            HypervisorNotFoundError: 해당 ID의 하이퍼바이저를 찾을 수 없을 때.
            IPRangeNotFoundError: 해당 ID의 IP 대역을 찾을 수 없을 때.
        """
        hypervisor = self._get_hypervisor(hypervisor_id)
        iprange = self._get_iprange(iprange_id)
        ipranges = self.hypervisor_repo.add_iprange(hypervisor, iprange)
        logger.info("IP range %s added to hypervisor %s.", iprange_id, hypervisor_id)
        return [iprange_to_dict(r) for r in ipranges]

    def remove_hypervisor_iprange(self, hypervisor_id: str, iprange_id: str) -> List[Dict[str, Any]]:
        """
        하이퍼바이저와 IP 대역의 연결을 해제합니다. 연결되어 있지 않아도 오류가 아닙니다.

        Raises:
            HypervisorNotFoundError: 해당 ID의 하이퍼바이저를 찾을 수 없을 때.
            IPRangeNotFoundError: 해당 ID의 IP 대역을 찾을 수 없을 때.
        """
        hypervisor = self._get_hypervisor(hypervisor_id)
        iprange = self._get_iprange(iprange_id)
        ipranges = self.hypervisor_repo.remove_iprange(hypervisor, iprange)
        logger.info("IP range %s removed from hypervisor %s.", iprange_id, hypervisor_id)
        return [iprange_to_dict(r) for r in ipranges]

    def set_hypervisor_ipranges(self, hypervisor_id: str, iprange_ids: List[str]) -> List[Dict[str, Any]]:
        """
        하이퍼바이저에 연결된 IP 대역을 주어진 목록으로 교체합니다.

        모든 ID가 존재하는지 먼저 확인한 뒤 교체하므로, 하나라도 없으면
        기존 관계는 전혀 변경되지 않습니다. 빈 목록은 모든 연결을 해제합니다.

        Raises:
            HypervisorNotFoundError: 해당 ID의 하이퍼바이저를 찾을 수 없을 때.
            IPRangeNotFoundError: 목록 중 존재하지 않는 IP 대역이 있을 때.
        """
        hypervisor = self._get_hypervisor(hypervisor_id)
        ipranges = resolve_ids(
            iprange_ids, self.iprange_repo.find_by_ids, lambda r: r.iprange_id, IPRangeNotFoundError, "IP range"
        )
        result = self.hypervisor_repo.set_ipranges(hypervisor, ipranges)
        logger.info("Hypervisor %s IP ranges replaced (%d entries).", hypervisor_id, len(result))
        return [iprange_to_dict(r) for r in result]

    # --------------------------------------------------------------------------
    ## IP 대역
    # --------------------------------------------------------------------------

    def create_iprange(self, cidr: str, gateway: str, start: str, end: str,
                       metadata: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """새로운 IP 대역을 등록합니다. ID는 새로 발급됩니다."""
        iprange = models.IPRange.new(cidr=cidr, gateway=gateway, start_ip=start, end_ip=end, meta=metadata or {})
        created = self.iprange_repo.create(iprange)
        logger.info("IP range %s created (cidr=%s).", created.iprange_id, created.cidr)
        return iprange_to_dict(created)

    def list_ipranges(self) -> List[Dict[str, Any]]:
        """모든 IP 대역의 목록을 조회합니다."""
        return [iprange_to_dict(r) for r in self.iprange_repo.list_all()]

    def get_iprange(self, iprange_id: str) -> Dict[str, Any]:
        """
        ID로 특정 IP 대역을 조회합니다.

        Raises:
            IPRangeNotFoundError: 해당 ID의 IP 대역을 찾을 수 없을 때.
        """
        return iprange_to_dict(self._get_iprange(iprange_id))

    def update_iprange(self, iprange_id: str, cidr: Optional[str] = None, gateway: Optional[str] = None,
                       start: Optional[str] = None, end: Optional[str] = None,
                       metadata: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        IP 대역 속성을 수정합니다. None이 아닌 값만 반영됩니다.

        Raises:
            IPRangeNotFoundError: 해당 ID의 IP 대역을 찾을 수 없을 때.
        """
        iprange = self._get_iprange(iprange_id)
        changes = {"cidr": cidr, "gateway": gateway, "start_ip": start, "end_ip": end}
        for attr, value in changes.items():
            if value is not None:
                setattr(iprange, attr, value)
        if metadata is not None:
            iprange.meta = dict(metadata)
        updated = self.iprange_repo.update(iprange)
        logger.info("IP range %s updated.", iprange_id)
        return iprange_to_dict(updated)

    def delete_iprange(self, iprange_id: str) -> bool:
        """IP 대역을 삭제합니다. 하이퍼바이저 및 네트워크와의 관계도 함께 삭제됩니다."""
        iprange = self._get_iprange(iprange_id)
        self.iprange_repo.delete(iprange)
        logger.info("IP range %s deleted.", iprange_id)
        return True

    # --------------------------------------------------------------------------
    ## IP 대역 <-> 하이퍼바이저 (IP 대역 기준)
    # --------------------------------------------------------------------------

    def list_iprange_hypervisors(self, iprange_id: str) -> List[Dict[str, Any]]:
        """특정 IP 대역이 연결된 하이퍼바이저 목록을 조회합니다."""
        iprange = self._get_iprange(iprange_id)
        return [hypervisor_to_dict(h) for h in self.iprange_repo.list_hypervisors(iprange)]

    def add_iprange_hypervisor(self, iprange_id: str, hypervisor_id: str) -> List[Dict[str, Any]]:
        """
        IP 대역에 하이퍼바이저를 연결합니다.

        Raises:
            IPRangeNotFoundError: 해당 ID의 IP 대역을 찾을 수 없을 때.
            HypervisorNotFoundError: 해당 ID의 하이퍼바이저를 찾을 수 없을 때.
        """
        iprange = self._get_iprange(iprange_id)
        hypervisor = self._get_hypervisor(hypervisor_id)
        hypervisors = self.iprange_repo.add_hypervisor(iprange, hypervisor)
        logger.info("Hypervisor %s added to IP range %s.", hypervisor_id, iprange_id)
        return [hypervisor_to_dict(h) for h in hypervisors]

    def remove_iprange_hypervisor(self, iprange_id: str, hypervisor_id: str) -> List[Dict[str, Any]]:
        """IP 대역과 하이퍼바이저의 연결을 해제합니다."""
        iprange = self._get_iprange(iprange_id)
        hypervisor = self._get_hypervisor(hypervisor_id)
        hypervisors = self.iprange_repo.remove_hypervisor(iprange, hypervisor)
        logger.info("Hypervisor %s removed from IP range %s.", hypervisor_id, iprange_id)
        return [hypervisor_to_dict(h) for h in hypervisors]

    def set_iprange_hypervisors(self, iprange_id: str, hypervisor_ids: List[str]) -> List[Dict[str, Any]]:
        """
        IP 대역에 연결된 하이퍼바이저를 주어진 목록으로 교체합니다.
        다른 IP 대역의 연결은 변경되지 않습니다.

        Raises:
            IPRangeNotFoundError: 해당 ID의 IP 대역을 찾을 수 없을 때.
            HypervisorNotFoundError: 목록 중 존재하지 않는 하이퍼바이저가 있을 때.
        """
        iprange = self._get_iprange(iprange_id)
        hypervisors = resolve_ids(
            hypervisor_ids, self.hypervisor_repo.find_by_ids, lambda h: h.hypervisor_id,
            HypervisorNotFoundError, "Hypervisor",
        )
        result = self.iprange_repo.set_hypervisors(iprange, hypervisors)
        logger.info("IP range %s hypervisors replaced (%d entries).", iprange_id, len(result))
        return [hypervisor_to_dict(h) for h in result]

    # --------------------------------------------------------------------------
    ## IP 대역 <-> 네트워크 (IP 대역 기준)
    # --------------------------------------------------------------------------

    def list_iprange_networks(self, iprange_id: str) -> List[Dict[str, Any]]:
        """IP 대역이 속한 네트워크 목록을 조회합니다."""
        iprange = self._get_iprange(iprange_id)
        return [network_to_dict(n) for n in self.iprange_repo.list_networks(iprange)]

    def add_iprange_network(self, iprange_id: str, network_id: str) -> List[Dict[str, Any]]:
        """
        IP 대역을 네트워크에 연결합니다.

        Raises:
            IPRangeNotFoundError: 해당 ID의 IP 대역을 찾을 수 없을 때.
            NetworkNotFoundError: 해당 ID의 네트워크를 찾을 수 없을 때.
        """
        iprange = self._get_iprange(iprange_id)
        network = self._get_network(network_id)
        networks = self.iprange_repo.add_network(iprange, network)
        logger.info("Network %s added to IP range %s.", network_id, iprange_id)
        return [network_to_dict(n) for n in networks]

    def remove_iprange_network(self, iprange_id: str, network_id: str) -> List[Dict[str, Any]]:
        """IP 대역과 네트워크의 연결을 해제합니다."""
        iprange = self._get_iprange(iprange_id)
        network = self._get_network(network_id)
        networks = self.iprange_repo.remove_network(iprange, network)
        logger.info("Network %s removed from IP range %s.", network_id, iprange_id)
        return [network_to_dict(n) for n in networks]

    def set_iprange_networks(self, iprange_id: str, network_ids: List[str]) -> List[Dict[str, Any]]:
        """
        IP 대역이 속한 네트워크를 주어진 목록으로 교체합니다.

        Raises:
            IPRangeNotFoundError: 해당 ID의 IP 대역을 찾을 수 없을 때.
            NetworkNotFoundError: 목록 중 존재하지 않는 네트워크가 있을 때.
        """
        iprange = self._get_iprange(iprange_id)
        networks = resolve_ids(
            network_ids, self.network_repo.find_by_ids, lambda n: n.network_id, NetworkNotFoundError, "Network"
        )
        result = self.iprange_repo.set_networks(iprange, networks)
        logger.info("IP range %s networks replaced (%d entries).", iprange_id, len(result))
        return [network_to_dict(n) for n in result]

    # --------------------------------------------------------------------------
    ## 네트워크
    # --------------------------------------------------------------------------

    def create_network(self, name: str, metadata: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        새로운 네트워크를 생성합니다.

        Raises:
            NetworkCreationError: 동일한 이름의 네트워크가 이미 존재할 때.
        """
        if self.network_repo.find_by_name(name):
            raise NetworkCreationError(f"Network with name '{name}' already exists.")
        created = self.network_repo.create(models.Network.new(name=name, meta=metadata or {}))
        logger.info("Network %s created (name=%s).", created.network_id, created.name)
        return network_to_dict(created)

    def list_networks(self) -> List[Dict[str, Any]]:
        """모든 네트워크의 목록을 조회합니다."""
        return [network_to_dict(n) for n in self.network_repo.list_all()]

    def get_network(self, network_id: str) -> Dict[str, Any]:
        """
        ID로 특정 네트워크를 조회합니다.

        Raises:
            NetworkNotFoundError: 해당 ID의 네트워크를 찾을 수 없을 때.
        """
        return network_to_dict(self._get_network(network_id))

    def update_network(self, network_id: str, name: Optional[str] = None,
                       metadata: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        네트워크 속성을 수정합니다. None이 아닌 값만 반영됩니다.

        Raises:
            NetworkNotFoundError: 해당 ID의 네트워크를 찾을 수 없을 때.
            NetworkUpdateError: 다른 네트워크가 이미 같은 이름을 쓰고 있을 때.
        """
        network = self._get_network(network_id)
        if name is not None and name != network.name:
            if self.network_repo.find_by_name(name):
                raise NetworkUpdateError(f"Network with name '{name}' already exists.")
            network.name = name
        if metadata is not None:
            network.meta = dict(metadata)
        updated = self.network_repo.update(network)
        logger.info("Network %s updated.", network_id)
        return network_to_dict(updated)

    def delete_network(self, network_id: str) -> bool:
        """네트워크를 삭제합니다. IP 대역과의 관계도 함께 삭제됩니다."""
        network = self._get_network(network_id)
        self.network_repo.delete(network)
        logger.info("Network %s deleted.", network_id)
        return True

    # --------------------------------------------------------------------------
    ## 네트워크 <-> IP 대역 (네트워크 기준)
    # --------------------------------------------------------------------------

    def list_network_ipranges(self, network_id: str) -> List[Dict[str, Any]]:
        """네트워크에 속한 IP 대역 목록을 조회합니다."""
        network = self._get_network(network_id)
        return [iprange_to_dict(r) for r in self.network_repo.list_ipranges(network)]

    def add_network_iprange(self, network_id: str, iprange_id: str) -> List[Dict[str, Any]]:
        """
        네트워크에 IP 대역을 추가합니다. 이미 속해 있어도 오류가 아닙니다.

        Raises:
            NetworkNotFoundError: 해당 ID의 네트워크를 찾을 수 없을 때.
            IPRangeNotFoundError: 해당 ID의 IP 대역을 찾을 수 없을 때.
        """
        network = self._get_network(network_id)
        iprange = self._get_iprange(iprange_id)
        ipranges = self.network_repo.add_iprange(network, iprange)
        logger.info("IP range %s added to network %s.", iprange_id, network_id)
        return [iprange_to_dict(r) for r in ipranges]

    def remove_network_iprange(self, network_id: str, iprange_id: str) -> List[Dict[str, Any]]:
        """네트워크에서 IP 대역을 제외합니다."""
        network = self._get_network(network_id)
        iprange = self._get_iprange(iprange_id)
        ipranges = self.network_repo.remove_iprange(network, iprange)
        logger.info("IP range %s removed from network %s.", iprange_id, network_id)
        return [iprange_to_dict(r) for r in ipranges]

    def set_network_ipranges(self, network_id: str, iprange_ids: List[str]) -> List[Dict[str, Any]]:
        """
        네트워크에 속한 IP 대역을 주어진 목록으로 교체합니다.

        Raises:
            NetworkNotFoundError: 해당 ID의 네트워크를 찾을 수 없을 때.
            IPRangeNotFoundError: 목록 중 존재하지 않는 IP 대역이 있을 때.
        """
        network = self._get_network(network_id)
        ipranges = resolve_ids(
            iprange_ids, self.iprange_repo.find_by_ids, lambda r: r.iprange_id, IPRangeNotFoundError, "IP range"
        )
        result = self.network_repo.set_ipranges(network, ipranges)
        logger.info("Network %s IP ranges replaced (%d entries).", network_id, len(result))
        return [iprange_to_dict(r) for r in result]

    # --------------------------------------------------------------------------
    ## 내부 조회 헬퍼
    # --------------------------------------------------------------------------

    def _get_hypervisor(self, hypervisor_id: str) -> models.Hypervisor:
        hypervisor = self.hypervisor_repo.find_by_id(hypervisor_id)
        if not hypervisor:
            logger.warning("Hypervisor %s not found.", hypervisor_id)
            raise HypervisorNotFoundError(f"Hypervisor with id '{hypervisor_id}' not found.")
        return hypervisor

    def _get_iprange(self, iprange_id: str) -> models.IPRange:
        iprange = self.iprange_repo.find_by_id(iprange_id)
        if not iprange:
            logger.warning("IP range %s not found.", iprange_id)
            raise IPRangeNotFoundError(f"IP range with id '{iprange_id}' not found.")
        return iprange

    def _get_network(self, network_id: str) -> models.Network:
        network = self.network_repo.find_by_id(network_id)
        if not network:
            logger.warning("Network %s not found.", network_id)
            raise NetworkNotFoundError(f"Network with id '{network_id}' not found.")
        return network

