from abc import ABC, abstractmethod
from typing import List, Optional
from operator_admin.database import models

class IPermissionRepository(ABC):
    @abstractmethod
    def create(self, permission_model: models.Permission) -> models.Permission:
        """새로운 권한을 데이터베이스에 생성합니다."""
        pass

    @abstractmethod
    def update(self, permission: models.Permission) -> models.Permission:
        """변경된 권한 속성을 저장합니다."""
        pass

    @abstractmethod
    def find_by_id(self, permission_id: str) -> Optional[models.Permission]:
        """고유 ID로 특정 권한을 조회합니다."""
        pass

    @abstractmethod
    def find_by_ids(self, permission_ids: List[str]) -> List[models.Permission]:
        """여러 ID에 해당하는 권한을 조회합니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[models.Permission]:
        """모든 권한의 목록을 조회합니다."""
        pass

    @abstractmethod
    def delete(self, permission: models.Permission) -> bool:
        """특정 권한을 데이터베이스에서 삭제합니다."""
        pass

    @abstractmethod
    def list_projects(self, permission: models.Permission) -> List[models.Project]:
        """권한이 부여된 모든 프로젝트를 조회합니다."""
        pass

    @abstractmethod
    def add_project(self, permission: models.Permission, project: models.Project) -> List[models.Project]:
        """권한을 프로젝트에 부여하고, 변경 후 프로젝트 목록을 반환합니다."""
        pass

    @abstractmethod
    def remove_project(self, permission: models.Permission, project: models.Project) -> List[models.Project]:
        """프로젝트에서 권한을 회수하고, 남은 프로젝트 목록을 반환합니다."""
        pass

    @abstractmethod
    def set_projects(self, permission: models.Permission, projects: List[models.Project]) -> List[models.Project]:
        """권한이 부여된 프로젝트를 주어진 목록으로 원자적으로 교체합니다."""
        pass
