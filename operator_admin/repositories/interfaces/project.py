from abc import ABC, abstractmethod
from typing import List, Optional
from operator_admin.database import models

class IProjectRepository(ABC):
    @abstractmethod
    def create(self, project_model: models.Project) -> models.Project:
        """새로운 프로젝트를 데이터베이스에 생성합니다."""
        pass

    @abstractmethod
    def update(self, project: models.Project) -> models.Project:
        """변경된 프로젝트 속성을 저장합니다."""
        pass

    @abstractmethod
    def find_by_id(self, project_id: str) -> Optional[models.Project]:
        """고유 ID로 특정 프로젝트를 조회합니다."""
        pass

    @abstractmethod
    def find_by_ids(self, project_ids: List[str]) -> List[models.Project]:
        """여러 ID에 해당하는 프로젝트를 조회합니다. 존재하지 않는 ID는 결과에서 빠집니다."""
        pass

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[models.Project]:
        """이름으로 특정 프로젝트를 조회합니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[models.Project]:
        """모든 프로젝트의 목록을 조회합니다."""
        pass

    @abstractmethod
    def delete(self, project: models.Project) -> bool:
        """특정 프로젝트를 삭제합니다. 사용자 및 권한과의 관계도 함께 삭제됩니다."""
        pass

    @abstractmethod
    def list_users(self, project: models.Project) -> List[models.User]:
        """프로젝트에 소속된 모든 사용자를 조회합니다."""
        pass

    @abstractmethod
    def add_user(self, project: models.Project, user: models.User) -> List[models.User]:
        """프로젝트에 사용자를 추가합니다. 이미 소속되어 있으면 무시합니다."""
        pass

    @abstractmethod
    def remove_user(self, project: models.Project, user: models.User) -> List[models.User]:
        """프로젝트에서 사용자를 제외합니다."""
        pass

    @abstractmethod
    def set_users(self, project: models.Project, users: List[models.User]) -> List[models.User]:
        """프로젝트의 사용자 목록을 주어진 목록으로 원자적으로 교체합니다."""
        pass

    @abstractmethod
    def list_permissions(self, project: models.Project) -> List[models.Permission]:
        """프로젝트에 부여된 모든 권한을 조회합니다."""
        pass

    @abstractmethod
    def add_permission(self, project: models.Project, permission: models.Permission) -> List[models.Permission]:
        """프로젝트에 권한을 부여합니다. 이미 부여되어 있으면 무시합니다."""
        pass

    @abstractmethod
    def remove_permission(self, project: models.Project, permission: models.Permission) -> List[models.Permission]:
        """프로젝트에서 권한을 회수합니다."""
        pass

    @abstractmethod
    def set_permissions(self, project: models.Project, permissions: List[models.Permission]) -> List[models.Permission]:
        """프로젝트의 권한 목록을 주어진 목록으로 원자적으로 교체합니다."""
        pass
