# tests/services/test_inventory_service.py
import pytest
from unittest.mock import MagicMock

from operator_admin.services.inventory_service import InventoryService
from operator_admin.services.exceptions import (
    HypervisorNotFoundError, IPRangeNotFoundError, NetworkNotFoundError, NetworkCreationError, NetworkUpdateError,
)
from operator_admin.repositories.interfaces import IHypervisorRepository, IIPRangeRepository, INetworkRepository
from operator_admin.database import models

# ===================================================================
#  Fixture 설정
# ===================================================================

@pytest.fixture
def mock_hypervisor_repo() -> MagicMock:
    return MagicMock(spec=IHypervisorRepository)

@pytest.fixture
def mock_iprange_repo() -> MagicMock:
    return MagicMock(spec=IIPRangeRepository)

@pytest.fixture
def mock_network_repo() -> MagicMock:
    return MagicMock(spec=INetworkRepository)

@pytest.fixture
def inventory_service(mock_hypervisor_repo, mock_iprange_repo, mock_network_repo) -> InventoryService:
    """테스트에 사용될 InventoryService 인스턴스를 생성하고, 의존성을 주입합니다."""
    return InventoryService(mock_hypervisor_repo, mock_iprange_repo, mock_network_repo)

def make_hypervisor(hypervisor_id="hv-1"):
    return models.Hypervisor(hypervisor_id=hypervisor_id, mac="de:ad:be:ef:00:01", ipv6="fe80::1", meta={})

def make_iprange(iprange_id="ip-1"):
    return models.IPRange(iprange_id=iprange_id, cidr="10.0.0.0/24", gateway="10.0.0.1",
                          start_ip="10.0.0.10", end_ip="10.0.0.250", meta={})

def make_network(network_id="net-1", name="public"):
    return models.Network(network_id=network_id, name=name, meta={})

# ===================================================================
#  하이퍼바이저 <-> IP 대역
# ===================================================================
class TestHypervisorIPRanges:
    def test_create_hypervisor_generates_id(self, inventory_service: InventoryService, mock_hypervisor_repo: MagicMock):
        # === Arrange ===
        mock_hypervisor_repo.create.side_effect = lambda h: h

        # === Act ===
        hypervisor = inventory_service.create_hypervisor("de:ad:be:ef:00:01", "fe80::1")

        # === Assert ===
        assert hypervisor["id"]
        assert hypervisor["metadata"] == {}

    def test_add_hypervisor_iprange(self, inventory_service, mock_hypervisor_repo, mock_iprange_repo):
        """하이퍼바이저와 IP 대역을 조회한 뒤 리포지토리에 관계 추가를 위임하는지 테스트합니다."""
        # === Arrange ===
        hypervisor, iprange = make_hypervisor(), make_iprange()
        mock_hypervisor_repo.find_by_id.return_value = hypervisor
        mock_iprange_repo.find_by_id.return_value = iprange
        mock_hypervisor_repo.add_iprange.return_value = [iprange]

        # === Act ===
        result = inventory_service.add_hypervisor_iprange("hv-1", "ip-1")

        # === Assert ===
        assert result == [{
            "id": "ip-1", "cidr": "10.0.0.0/24", "gateway": "10.0.0.1",
            "start": "10.0.0.10", "end": "10.0.0.250", "metadata": {},
        }]
        mock_hypervisor_repo.add_iprange.assert_called_once_with(hypervisor, iprange)

    def test_add_iprange_to_unknown_hypervisor(self, inventory_service, mock_hypervisor_repo, mock_iprange_repo):
        mock_hypervisor_repo.find_by_id.return_value = None

        with pytest.raises(HypervisorNotFoundError):
            inventory_service.add_hypervisor_iprange("missing", "ip-1")
        mock_iprange_repo.find_by_id.assert_not_called()
        mock_hypervisor_repo.add_iprange.assert_not_called()

    def test_remove_unknown_iprange(self, inventory_service, mock_hypervisor_repo, mock_iprange_repo):
        mock_hypervisor_repo.find_by_id.return_value = make_hypervisor()
        mock_iprange_repo.find_by_id.return_value = None

        with pytest.raises(IPRangeNotFoundError):
            inventory_service.remove_hypervisor_iprange("hv-1", "missing")
        mock_hypervisor_repo.remove_iprange.assert_not_called()

    def test_set_hypervisor_ipranges(self, inventory_service, mock_hypervisor_repo, mock_iprange_repo):
        # === Arrange ===
        hypervisor = make_hypervisor()
        ip1, ip2 = make_iprange("ip-1"), make_iprange("ip-2")
        mock_hypervisor_repo.find_by_id.return_value = hypervisor
        mock_iprange_repo.find_by_ids.return_value = [ip1, ip2]
        mock_hypervisor_repo.set_ipranges.return_value = [ip1, ip2]

        # === Act ===
        result = inventory_service.set_hypervisor_ipranges("hv-1", ["ip-1", "ip-2"])

        # === Assert ===
        assert [r["id"] for r in result] == ["ip-1", "ip-2"]
        mock_hypervisor_repo.set_ipranges.assert_called_once_with(hypervisor, [ip1, ip2])

    def test_set_hypervisor_ipranges_with_unknown_id(self, inventory_service, mock_hypervisor_repo, mock_iprange_repo):
        mock_hypervisor_repo.find_by_id.return_value = make_hypervisor()
        mock_iprange_repo.find_by_ids.return_value = [make_iprange("ip-1")]

        with pytest.raises(IPRangeNotFoundError, match="ip-9"):
            inventory_service.set_hypervisor_ipranges("hv-1", ["ip-1", "ip-9"])
        mock_hypervisor_repo.set_ipranges.assert_not_called()

    def test_list_iprange_hypervisors(self, inventory_service, mock_hypervisor_repo, mock_iprange_repo):
        iprange = make_iprange()
        mock_iprange_repo.find_by_id.return_value = iprange
        mock_iprange_repo.list_hypervisors.return_value = [make_hypervisor()]

        result = inventory_service.list_iprange_hypervisors("ip-1")

        assert [h["id"] for h in result] == ["hv-1"]
        mock_iprange_repo.list_hypervisors.assert_called_once_with(iprange)

# ===================================================================
#  IP 대역 <-> 네트워크
# ===================================================================
class TestIPRangeNetworks:
    def test_set_iprange_networks(self, inventory_service, mock_iprange_repo, mock_network_repo):
        # === Arrange ===
        iprange, network = make_iprange(), make_network()
        mock_iprange_repo.find_by_id.return_value = iprange
        mock_network_repo.find_by_ids.return_value = [network]
        mock_iprange_repo.set_networks.return_value = [network]

        # === Act ===
        result = inventory_service.set_iprange_networks("ip-1", ["net-1"])

        # === Assert ===
        assert result == [{"id": "net-1", "name": "public", "metadata": {}}]
        mock_iprange_repo.set_networks.assert_called_once_with(iprange, [network])

    def test_add_unknown_network(self, inventory_service, mock_iprange_repo, mock_network_repo):
        mock_iprange_repo.find_by_id.return_value = make_iprange()
        mock_network_repo.find_by_id.return_value = None

        with pytest.raises(NetworkNotFoundError):
            inventory_service.add_iprange_network("ip-1", "missing")
        mock_iprange_repo.add_network.assert_not_called()

    def test_create_network_duplicate_name(self, inventory_service, mock_network_repo):
        mock_network_repo.find_by_name.return_value = make_network()

        with pytest.raises(NetworkCreationError):
            inventory_service.create_network("public")
        mock_network_repo.create.assert_not_called()

    def test_delete_network(self, inventory_service, mock_network_repo):
        network = make_network()
        mock_network_repo.find_by_id.return_value = network

        assert inventory_service.delete_network("net-1") is True
        mock_network_repo.delete.assert_called_once_with(network)

# ===================================================================
#  반대 방향(IP 대역 / 네트워크 기준) 관계
# ===================================================================
class TestOtherSideRelations:
    def test_set_iprange_hypervisors(self, inventory_service, mock_hypervisor_repo, mock_iprange_repo):
        """IP 대역 기준 교체는 IP 대역 리포지토리에 위임되는지 테스트합니다."""
        # === Arrange ===
        iprange, hypervisor = make_iprange(), make_hypervisor()
        mock_iprange_repo.find_by_id.return_value = iprange
        mock_hypervisor_repo.find_by_ids.return_value = [hypervisor]
        mock_iprange_repo.set_hypervisors.return_value = [hypervisor]

        # === Act ===
        result = inventory_service.set_iprange_hypervisors("ip-1", ["hv-1", "hv-1"])

        # === Assert ===
        assert [h["id"] for h in result] == ["hv-1"]
        mock_hypervisor_repo.find_by_ids.assert_called_once_with(["hv-1"])
        mock_iprange_repo.set_hypervisors.assert_called_once_with(iprange, [hypervisor])
        mock_hypervisor_repo.set_ipranges.assert_not_called()

    def test_set_iprange_hypervisors_unknown(self, inventory_service, mock_hypervisor_repo, mock_iprange_repo):
        mock_iprange_repo.find_by_id.return_value = make_iprange()
        mock_hypervisor_repo.find_by_ids.return_value = []

        with pytest.raises(HypervisorNotFoundError):
            inventory_service.set_iprange_hypervisors("ip-1", ["hv-9"])
        mock_iprange_repo.set_hypervisors.assert_not_called()

    def test_add_and_remove_iprange_hypervisor(self, inventory_service, mock_hypervisor_repo, mock_iprange_repo):
        iprange, hypervisor = make_iprange(), make_hypervisor()
        mock_iprange_repo.find_by_id.return_value = iprange
        mock_hypervisor_repo.find_by_id.return_value = hypervisor
        mock_iprange_repo.add_hypervisor.return_value = [hypervisor]
        mock_iprange_repo.remove_hypervisor.return_value = []

        assert [h["id"] for h in inventory_service.add_iprange_hypervisor("ip-1", "hv-1")] == ["hv-1"]
        assert inventory_service.remove_iprange_hypervisor("ip-1", "hv-1") == []

    def test_set_network_ipranges(self, inventory_service, mock_iprange_repo, mock_network_repo):
        # === Arrange ===
        network = make_network()
        ip1, ip2 = make_iprange("ip-1"), make_iprange("ip-2")
        mock_network_repo.find_by_id.return_value = network
        mock_iprange_repo.find_by_ids.return_value = [ip1, ip2]
        mock_network_repo.set_ipranges.return_value = [ip1, ip2]

        # === Act ===
        result = inventory_service.set_network_ipranges("net-1", ["ip-1", "ip-2"])

        # === Assert ===
        assert [r["id"] for r in result] == ["ip-1", "ip-2"]
        mock_network_repo.set_ipranges.assert_called_once_with(network, [ip1, ip2])
        mock_iprange_repo.set_networks.assert_not_called()

    def test_add_network_iprange_unknown_iprange(self, inventory_service, mock_iprange_repo, mock_network_repo):
        mock_network_repo.find_by_id.return_value = make_network()
        mock_iprange_repo.find_by_id.return_value = None

        with pytest.raises(IPRangeNotFoundError):
            inventory_service.add_network_iprange("net-1", "missing")
        mock_network_repo.add_iprange.assert_not_called()

    def test_list_network_ipranges(self, inventory_service, mock_iprange_repo, mock_network_repo):
        network = make_network()
        mock_network_repo.find_by_id.return_value = network
        mock_network_repo.list_ipranges.return_value = [make_iprange()]

        assert [r["id"] for r in inventory_service.list_network_ipranges("net-1")] == ["ip-1"]
        mock_network_repo.list_ipranges.assert_called_once_with(network)

# ===================================================================
#  수정(Update)
# ===================================================================
class TestUpdates:
    def test_update_hypervisor_partial(self, inventory_service, mock_hypervisor_repo):
        # === Arrange ===
        hypervisor = make_hypervisor()
        mock_hypervisor_repo.find_by_id.return_value = hypervisor
        mock_hypervisor_repo.update.side_effect = lambda h: h

        # === Act ===
        result = inventory_service.update_hypervisor("hv-1", ipv6="fe80::99")

        # === Assert ===
        assert result["ipv6"] == "fe80::99"
        assert result["mac"] == "de:ad:be:ef:00:01"
        mock_hypervisor_repo.update.assert_called_once_with(hypervisor)

    def test_update_unknown_hypervisor(self, inventory_service, mock_hypervisor_repo):
        mock_hypervisor_repo.find_by_id.return_value = None

        with pytest.raises(HypervisorNotFoundError):
            inventory_service.update_hypervisor("missing", mac="x")
        mock_hypervisor_repo.update.assert_not_called()

    def test_update_iprange(self, inventory_service, mock_iprange_repo):
        mock_iprange_repo.find_by_id.return_value = make_iprange()
        mock_iprange_repo.update.side_effect = lambda r: r

        result = inventory_service.update_iprange("ip-1", end="10.0.0.200", metadata={"vlan": "10"})

        assert result["end"] == "10.0.0.200"
        assert result["start"] == "10.0.0.10"
        assert result["metadata"] == {"vlan": "10"}

    def test_update_network_name_conflict(self, inventory_service, mock_network_repo):
        mock_network_repo.find_by_id.return_value = make_network()
        mock_network_repo.find_by_name.return_value = make_network("net-2", "private")

        with pytest.raises(NetworkUpdateError):
            inventory_service.update_network("net-1", name="private")
        mock_network_repo.update.assert_not_called()
