import uuid
from sqlalchemy import Column, String, JSON
from ..database import Base

class Project(Base):
    """
    하나의 격리된 테넌트(tenant) 또는 작업 공간을 나타냅니다.
    사용자(User)와 권한(Permission)은 프로젝트 단위로 연결됩니다.
    OpenStack의 'Project' 또는 AWS의 'Account'와 유사한 개념입니다.
    """
    __tablename__ = "projects"
    OWNER_COLUMN = "project_id"

    project_id = Column(String(36), primary_key=True)
    name = Column(String, unique=True, nullable=False, index=True)
    meta = Column("metadata", JSON, nullable=False, default=dict)

    def identity(self) -> str:
        return self.project_id

    def owner_column(self) -> str:
        return self.OWNER_COLUMN

    @classmethod
    def new(cls, **fields) -> "Project":
        fields.setdefault("meta", {})
        return cls(project_id=str(uuid.uuid4()), **fields)
