import uuid
from sqlalchemy import Column, String, JSON
from ..database import Base

class Network(Base):
    """여러 IP 대역을 묶는 논리 네트워크입니다."""
    __tablename__ = "networks"
    OWNER_COLUMN = "network_id"

    network_id = Column(String(36), primary_key=True)
    name = Column(String, unique=True, nullable=False, index=True)
    meta = Column("metadata", JSON, nullable=False, default=dict)

    def identity(self) -> str:
        return self.network_id

    def owner_column(self) -> str:
        return self.OWNER_COLUMN

    @classmethod
    def new(cls, **fields) -> "Network":
        fields.setdefault("meta", {})
        return cls(network_id=str(uuid.uuid4()), **fields)
