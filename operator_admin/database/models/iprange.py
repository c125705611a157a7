import uuid
from sqlalchemy import Column, String, JSON
from ..database import Base

class IPRange(Base):
    """
    하이퍼바이저가 VM에 할당할 수 있는 연속된 IP 주소 범위입니다.
    CIDR, 게이트웨이, 시작/끝 주소를 가지며 하나 이상의 네트워크에 속할 수 있습니다.
    """
    __tablename__ = "ipranges"
    OWNER_COLUMN = "iprange_id"

    iprange_id = Column(String(36), primary_key=True)
    cidr = Column(String, nullable=False)
    gateway = Column(String, nullable=False)
    start_ip = Column(String, nullable=False)
    end_ip = Column(String, nullable=False)
    meta = Column("metadata", JSON, nullable=False, default=dict)

    def identity(self) -> str:
        return self.iprange_id

    def owner_column(self) -> str:
        return self.OWNER_COLUMN

    @classmethod
    def new(cls, **fields) -> "IPRange":
        fields.setdefault("meta", {})
        return cls(iprange_id=str(uuid.uuid4()), **fields)
