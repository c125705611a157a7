import uuid
from sqlalchemy import Column, String, JSON
from ..database import Base

class Hypervisor(Base):
    """
    VM을 실행하는 물리 호스트(하이퍼바이저)를 나타냅니다.
    MAC 주소와 IPv6 주소로 식별되며, VM에 할당할 수 있는 IP 대역(IPRange)과 연결됩니다.
    """
    __tablename__ = "hypervisors"
    OWNER_COLUMN = "hypervisor_id"

    hypervisor_id = Column(String(36), primary_key=True)
    mac = Column(String, nullable=False, unique=True)
    ipv6 = Column(String, nullable=False)
    meta = Column("metadata", JSON, nullable=False, default=dict)

    def identity(self) -> str:
        return self.hypervisor_id

    def owner_column(self) -> str:
        return self.OWNER_COLUMN

    @classmethod
    def new(cls, **fields) -> "Hypervisor":
        fields.setdefault("meta", {})
        return cls(hypervisor_id=str(uuid.uuid4()), **fields)
