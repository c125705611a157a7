import uuid
from sqlalchemy import Column, String, Boolean, JSON
from ..database import Base

class Permission(Base):
    """
    특정 서비스(service)의 엔티티 종류(entity_type)에 대해 수행할 수 있는 동작(action)을 정의합니다.
    owner가 True이면 해당 엔티티의 소유자에게만 허용되는 권한입니다.
    권한은 프로젝트에 연결되어 RBAC의 기본 단위가 됩니다.
    """
    __tablename__ = "permissions"
    OWNER_COLUMN = "permission_id"

    permission_id = Column(String(36), primary_key=True)
    name = Column(String, nullable=False, default="")
    service = Column(String, nullable=False)
    action = Column(String, nullable=False)
    entity_type = Column("entitytype", String, nullable=False, default="")
    owner = Column(Boolean, nullable=False, default=False)
    description = Column(String, nullable=False, default="")
    meta = Column("metadata", JSON, nullable=False, default=dict)

    def identity(self) -> str:
        return self.permission_id

    def owner_column(self) -> str:
        return self.OWNER_COLUMN

    @classmethod
    def new(cls, **fields) -> "Permission":
        fields.setdefault("meta", {})
        return cls(permission_id=str(uuid.uuid4()), **fields)
