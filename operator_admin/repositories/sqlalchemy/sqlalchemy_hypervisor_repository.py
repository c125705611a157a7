from typing import List, Optional
from sqlalchemy.orm import Session
from operator_admin.database import models, relations
from operator_admin.repositories.interfaces import IHypervisorRepository

class SqlalchemyHypervisorRepository(IHypervisorRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, hypervisor_model: models.Hypervisor) -> models.Hypervisor:
        self.db.add(hypervisor_model)
        self.db.commit()
        self.db.refresh(hypervisor_model)
        return hypervisor_model

    def update(self, hypervisor: models.Hypervisor) -> models.Hypervisor:
        self.db.commit()
        self.db.refresh(hypervisor)
        return hypervisor

    def find_by_id(self, hypervisor_id: str) -> Optional[models.Hypervisor]:
        return self.db.query(models.Hypervisor).filter(models.Hypervisor.hypervisor_id == hypervisor_id).first()

    def find_by_ids(self, hypervisor_ids: List[str]) -> List[models.Hypervisor]:
        if not hypervisor_ids:
            return []
        return self.db.query(models.Hypervisor).filter(models.Hypervisor.hypervisor_id.in_(hypervisor_ids)).all()

    def list_all(self) -> List[models.Hypervisor]:
        return self.db.query(models.Hypervisor).order_by(models.Hypervisor.hypervisor_id.asc()).all()

    def delete(self, hypervisor: models.Hypervisor) -> bool:
        if hypervisor:
            self.db.delete(hypervisor)
            self.db.commit()
            return True
        return False

    def list_ipranges(self, hypervisor: models.Hypervisor) -> List[models.IPRange]:
        link = models.hypervisors_ipranges
        return (
            self.db.query(models.IPRange)
            .join(link, link.c.iprange_id == models.IPRange.iprange_id)
            .filter(link.c.hypervisor_id == hypervisor.hypervisor_id)
            .order_by(models.IPRange.iprange_id.asc())
            .all()
        )

    def add_iprange(self, hypervisor: models.Hypervisor, iprange: models.IPRange) -> List[models.IPRange]:
        relations.add_relation(self.db, models.HYPERVISORS_IPRANGES, hypervisor, iprange)
        return self.list_ipranges(hypervisor)

    def remove_iprange(self, hypervisor: models.Hypervisor, iprange: models.IPRange) -> List[models.IPRange]:
        relations.remove_relation(self.db, models.HYPERVISORS_IPRANGES, hypervisor, iprange)
        return self.list_ipranges(hypervisor)

    def set_ipranges(self, hypervisor: models.Hypervisor, ipranges: List[models.IPRange]) -> List[models.IPRange]:
        relations.set_relations(self.db, models.HYPERVISORS_IPRANGES, hypervisor, ipranges)
        return self.list_ipranges(hypervisor)
