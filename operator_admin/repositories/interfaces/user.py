from abc import ABC, abstractmethod
from typing import List, Optional
from operator_admin.database import models

class IUserRepository(ABC):
    """운영자 계정(User) 저장소. 사용자 기준으로 프로젝트 소속을 조회하고 변경할 수도 있습니다."""

    @abstractmethod
    def create(self, user_model: models.User) -> models.User:
        """사용자를 저장합니다. ID는 models.User.new()로 미리 발급되어 있어야 합니다."""
        pass

    @abstractmethod
    def update(self, user: models.User) -> models.User:
        """변경된 사용자 속성을 저장합니다."""
        pass

    @abstractmethod
    def find_by_id(self, user_id: str) -> Optional[models.User]:
        """UUID로 사용자를 조회합니다. 없으면 None을 반환합니다."""
        pass

    @abstractmethod
    def find_by_ids(self, user_ids: List[str]) -> List[models.User]:
        """여러 UUID에 해당하는 사용자를 한 번에 조회합니다. 존재하지 않는 ID는 결과에서 빠집니다."""
        pass

    @abstractmethod
    def find_by_username(self, username: str) -> Optional[models.User]:
        """로그인 이름으로 사용자를 조회합니다."""
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[models.User]:
        """이메일 주소로 사용자를 조회합니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[models.User]:
        """모든 사용자를 로그인 이름 순으로 조회합니다."""
        pass

    @abstractmethod
    def delete(self, user: models.User) -> bool:
        """사용자를 삭제합니다. projects_users의 소속 행은 외래 키 CASCADE로 함께 삭제됩니다."""
        pass

    @abstractmethod
    def list_projects(self, user: models.User) -> List[models.Project]:
        """사용자가 소속된 모든 프로젝트를 조회합니다."""
        pass

    @abstractmethod
    def add_project(self, user: models.User, project: models.Project) -> List[models.Project]:
        """사용자를 프로젝트에 추가하고, 변경 후 소속 프로젝트 목록을 반환합니다."""
        pass

    @abstractmethod
    def remove_project(self, user: models.User, project: models.Project) -> List[models.Project]:
        """사용자를 프로젝트에서 제외하고, 남은 소속 프로젝트 목록을 반환합니다."""
        pass

    @abstractmethod
    def set_projects(self, user: models.User, projects: List[models.Project]) -> List[models.Project]:
        """
        사용자의 소속 프로젝트를 주어진 목록으로 원자적으로 교체합니다.
        다른 사용자의 소속은 변경되지 않습니다.
        """
        pass
