from typing import List, Optional
from sqlalchemy.orm import Session
from operator_admin.database import models, relations
from operator_admin.repositories.interfaces import IIPRangeRepository

class SqlalchemyIPRangeRepository(IIPRangeRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, iprange_model: models.IPRange) -> models.IPRange:
        self.db.add(iprange_model)
        self.db.commit()
        self.db.refresh(iprange_model)
        return iprange_model

    def update(self, iprange: models.IPRange) -> models.IPRange:
        self.db.commit()
        self.db.refresh(iprange)
        return iprange

    def find_by_id(self, iprange_id: str) -> Optional[models.IPRange]:
        return self.db.query(models.IPRange).filter(models.IPRange.iprange_id == iprange_id).first()

    def find_by_ids(self, iprange_ids: List[str]) -> List[models.IPRange]:
        if not iprange_ids:
            return []
        return self.db.query(models.IPRange).filter(models.IPRange.iprange_id.in_(iprange_ids)).all()

    def list_all(self) -> List[models.IPRange]:
        return self.db.query(models.IPRange).order_by(models.IPRange.iprange_id.asc()).all()

    def delete(self, iprange: models.IPRange) -> bool:
        if iprange:
            self.db.delete(iprange)
            self.db.commit()
            return True
        return False

    # --- IP 대역 <-> 네트워크 ---

    def list_networks(self, iprange: models.IPRange) -> List[models.Network]:
        link = models.ipranges_networks
        return (
            self.db.query(models.Network)
            .join(link, link.c.network_id == models.Network.network_id)
            .filter(link.c.iprange_id == iprange.iprange_id)
            .order_by(models.Network.network_id.asc())
            .all()
        )

    def add_network(self, iprange: models.IPRange, network: models.Network) -> List[models.Network]:
        relations.add_relation(self.db, models.IPRANGES_NETWORKS, iprange, network)
        return self.list_networks(iprange)

    def remove_network(self, iprange: models.IPRange, network: models.Network) -> List[models.Network]:
        relations.remove_relation(self.db, models.IPRANGES_NETWORKS, iprange, network)
        return self.list_networks(iprange)

    def set_networks(self, iprange: models.IPRange, networks: List[models.Network]) -> List[models.Network]:
        relations.set_relations(self.db, models.IPRANGES_NETWORKS, iprange, networks)
        return self.list_networks(iprange)

    # --- IP 대역 <-> 하이퍼바이저 (IP 대역이 소유자) ---

    def list_hypervisors(self, iprange: models.IPRange) -> List[models.Hypervisor]:
        link = models.hypervisors_ipranges
        return (
            self.db.query(models.Hypervisor)
            .join(link, link.c.hypervisor_id == models.Hypervisor.hypervisor_id)
            .filter(link.c.iprange_id == iprange.iprange_id)
            .order_by(models.Hypervisor.hypervisor_id.asc())
            .all()
        )

    def add_hypervisor(self, iprange: models.IPRange, hypervisor: models.Hypervisor) -> List[models.Hypervisor]:
        relations.add_relation(self.db, models.HYPERVISORS_IPRANGES, iprange, hypervisor)
        return self.list_hypervisors(iprange)

    def remove_hypervisor(self, iprange: models.IPRange, hypervisor: models.Hypervisor) -> List[models.Hypervisor]:
        relations.remove_relation(self.db, models.HYPERVISORS_IPRANGES, iprange, hypervisor)
        return self.list_hypervisors(iprange)

    def set_hypervisors(self, iprange: models.IPRange, hypervisors: List[models.Hypervisor]) -> List[models.Hypervisor]:
        relations.set_relations(self.db, models.HYPERVISORS_IPRANGES, iprange, hypervisors)
        return self.list_hypervisors(iprange)
