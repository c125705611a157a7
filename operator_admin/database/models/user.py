import uuid
from sqlalchemy import Column, String, JSON
from ..database import Base

class User(Base):
    """
    시스템을 관리하는 운영자 계정을 나타냅니다.
    사용자는 하나 이상의 프로젝트에 소속될 수 있습니다.
    """
    __tablename__ = "users"
    OWNER_COLUMN = "user_id"

    user_id = Column(String(36), primary_key=True)
    username = Column(String, unique=True, nullable=False, index=True)
    email = Column(String, nullable=False)
    meta = Column("metadata", JSON, nullable=False, default=dict)

    def identity(self) -> str:
        return self.user_id

    def owner_column(self) -> str:
        return self.OWNER_COLUMN

    @classmethod
    def new(cls, **fields) -> "User":
        fields.setdefault("meta", {})
        return cls(user_id=str(uuid.uuid4()), **fields)
