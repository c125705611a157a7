from typing import List, Optional
from sqlalchemy.orm import Session
from operator_admin.database import models, relations
from operator_admin.repositories.interfaces import INetworkRepository

class SqlalchemyNetworkRepository(INetworkRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, network_model: models.Network) -> models.Network:
        self.db.add(network_model)
        self.db.commit()
        self.db.refresh(network_model)
        return network_model

    def update(self, network: models.Network) -> models.Network:
        self.db.commit()
        self.db.refresh(network)
        return network

    def find_by_id(self, network_id: str) -> Optional[models.Network]:
        return self.db.query(models.Network).filter(models.Network.network_id == network_id).first()

    def find_by_ids(self, network_ids: List[str]) -> List[models.Network]:
        if not network_ids:
            return []
        return self.db.query(models.Network).filter(models.Network.network_id.in_(network_ids)).all()

    def find_by_name(self, name: str) -> Optional[models.Network]:
        return self.db.query(models.Network).filter(models.Network.name == name).first()

    def list_all(self) -> List[models.Network]:
        return self.db.query(models.Network).order_by(models.Network.name.asc()).all()

    def delete(self, network: models.Network) -> bool:
        if network:
            self.db.delete(network)
            self.db.commit()
            return True
        return False

    def list_ipranges(self, network: models.Network) -> List[models.IPRange]:
        link = models.ipranges_networks
        return (
            self.db.query(models.IPRange)
            .join(link, link.c.iprange_id == models.IPRange.iprange_id)
            .filter(link.c.network_id == network.network_id)
            .order_by(models.IPRange.iprange_id.asc())
            .all()
        )

    def add_iprange(self, network: models.Network, iprange: models.IPRange) -> List[models.IPRange]:
        relations.add_relation(self.db, models.IPRANGES_NETWORKS, network, iprange)
        return self.list_ipranges(network)

    def remove_iprange(self, network: models.Network, iprange: models.IPRange) -> List[models.IPRange]:
        relations.remove_relation(self.db, models.IPRANGES_NETWORKS, network, iprange)
        return self.list_ipranges(network)

    def set_ipranges(self, network: models.Network, ipranges: List[models.IPRange]) -> List[models.IPRange]:
        relations.set_relations(self.db, models.IPRANGES_NETWORKS, network, ipranges)
        return self.list_ipranges(network)
