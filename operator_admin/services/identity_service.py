from typing import Dict, Any, List, Optional

from operator_admin.database import models
from operator_admin.repositories.interfaces import (
    IProjectRepository, IUserRepository, IPermissionRepository
)
from operator_admin.services.exceptions import (
    ProjectCreationError, UserCreationError,
    ProjectNotFoundError, UserNotFoundError, PermissionNotFoundError,
    ProjectUpdateError, UserUpdateError,
)
from operator_admin.services.lookup import resolve_ids
from operator_admin.utils.log import get_logger

logger = get_logger(__name__)

# update_permission으로 바꿀 수 있는 속성
PERMISSION_FIELDS = {"name", "service", "action", "entity_type", "owner", "description", "metadata"}


def project_to_dict(project: models.Project) -> Dict[str, Any]:
    return {"id": project.project_id, "name": project.name, "metadata": project.meta}


def user_to_dict(user: models.User) -> Dict[str, Any]:
    return {"id": user.user_id, "username": user.username, "email": user.email, "metadata": user.meta}


def permission_to_dict(permission: models.Permission) -> Dict[str, Any]:
    return {
        "id": permission.permission_id,
        "name": permission.name,
        "service": permission.service,
        "action": permission.action,
        "entityType": permission.entity_type,
        "owner": permission.owner,
        "description": permission.description,
        "metadata": permission.meta,
    }


class IdentityService:
    """프로젝트, 사용자, 권한 및 이들 사이의 소속 관계를 관리하는 서비스를 제공합니다."""

    def __init__(self, user_repo: IUserRepository, project_repo: IProjectRepository, permission_repo: IPermissionRepository):
        """
        IdentityService를 초기화합니다.

        Args:
            user_repo: 사용자 데이터와 사용자 기준 프로젝트 소속에 접근하기 위한 리포지토리.
            project_repo: 프로젝트 데이터와 프로젝트-사용자/권한 관계에 접근하기 위한 리포지토리.
            permission_repo: 권한 데이터와 권한 기준 프로젝트 관계에 접근하기 위한 리포지토리.
        """
        self.user_repo = user_repo
        self.project_repo = project_repo
        self.permission_repo = permission_repo

    # --------------------------------------------------------------------------
    ## 프로젝트
    # --------------------------------------------------------------------------

    def create_project(self, name: str, metadata: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        새로운 프로젝트를 생성합니다.

        Args:
            name: 생성할 프로젝트의 이름.
            metadata: 프로젝트에 저장할 임의의 키-값 정보.

        Returns:
            생성된 프로젝트의 ID, 이름, 메타데이터를 담은 딕셔너리.

        Raises:
            ProjectCreationError: 동일한 이름의 프로젝트가 이미 존재할 때.
        """
        if self.project_repo.find_by_name(name):
            raise ProjectCreationError(f"Project with name '{name}' already exists.")
        new_project = models.Project.new(name=name, meta=metadata or {})
        created_project = self.project_repo.create(new_project)
        logger.info("Project %s created (name=%s).", created_project.project_id, name)
        return project_to_dict(created_project)

    def list_projects(self) -> List[Dict[str, Any]]:
        """모든 프로젝트의 목록을 조회합니다."""
        return [project_to_dict(p) for p in self.project_repo.list_all()]

    def get_project(self, project_id: str) -> Dict[str, Any]:
        """
        ID로 특정 프로젝트를 조회합니다.

        Raises:
            ProjectNotFoundError: 해당 ID의 프로젝트를 찾을 수 없을 때.
        """
        return project_to_dict(self._get_project(project_id))

    def update_project(self, project_id: str, name: Optional[str] = None,
                       metadata: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        프로젝트 속성을 수정합니다. None이 아닌 값만 반영되며, metadata는 통째로 교체됩니다.

        Raises:
            ProjectNotFoundError: 해당 ID의 프로젝트를 찾을 수 없을 때.
            ProjectUpdateError: 다른 프로젝트가 이미 같은 이름을 쓰고 있을 때.
        """
        project = self._get_project(project_id)
        if name is not None and name != project.name:
            if self.project_repo.find_by_name(name):
                raise ProjectUpdateError(f"Project with name '{name}' already exists.")
            project.name = name
        if metadata is not None:
            project.meta = dict(metadata)
        updated = self.project_repo.update(project)
        logger.info("Project %s updated.", project_id)
        return project_to_dict(updated)

    def delete_project(self, project_id: str) -> bool:
        """
        프로젝트를 삭제합니다. 사용자 및 권한과의 관계도 함께 삭제됩니다.

        Raises:
            ProjectNotFoundError: 해당 ID의 프로젝트를 찾을 수 없을 때.
        """
        project = self._get_project(project_id)
        self.project_repo.delete(project)
        logger.info("Project %s deleted.", project_id)
        return True

    # --------------------------------------------------------------------------
    ## 사용자
    # --------------------------------------------------------------------------

    def create_user(self, username: str, email: str, metadata: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        새로운 사용자를 생성합니다.

        Raises:
            UserCreationError: 동일한 이름이나 이메일의 사용자가 이미 존재할 때.
        """
        if self.user_repo.find_by_username(username):
            raise UserCreationError(f"User with username '{username}' already exists.")
        if self.user_repo.find_by_email(email):
            raise UserCreationError(f"User with email '{email}' already exists.")
        new_user = models.User.new(username=username, email=email, meta=metadata or {})
        created_user = self.user_repo.create(new_user)
        logger.info("User %s created (username=%s).", created_user.user_id, username)
        return user_to_dict(created_user)

    def list_users(self) -> List[Dict[str, Any]]:
        """모든 사용자의 목록을 조회합니다."""
        return [user_to_dict(u) for u in self.user_repo.list_all()]

    def get_user(self, user_id: str) -> Dict[str, Any]:
        """
        ID로 특정 사용자를 조회합니다.

        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
        """
        return user_to_dict(self._get_user(user_id))

    def update_user(self, user_id: str, username: Optional[str] = None, email: Optional[str] = None,
                    metadata: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        사용자 속성을 수정합니다. None이 아닌 값만 반영됩니다.

        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
            UserUpdateError: 다른 사용자가 이미 같은 이름이나 이메일을 쓰고 있을 때.
        """
        user = self._get_user(user_id)
        if username is not None and username != user.username:
            if self.user_repo.find_by_username(username):
                raise UserUpdateError(f"User with username '{username}' already exists.")
            user.username = username
        if email is not None and email != user.email:
            if self.user_repo.find_by_email(email):
                raise UserUpdateError(f"User with email '{email}' already exists.")
            user.email = email
        if metadata is not None:
            user.meta = dict(metadata)
        updated = self.user_repo.update(user)
        logger.info("User %s updated.", user_id)
        return user_to_dict(updated)

    def delete_user(self, user_id: str) -> bool:
        """
        사용자를 삭제합니다. 사용자와 연결된 모든 프로젝트 소속 관계도 함께 삭제됩니다.

        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
        """
        user = self._get_user(user_id)
        self.user_repo.delete(user)
        logger.info("User %s deleted.", user_id)
        return True

    # --------------------------------------------------------------------------
    ## 사용자 <-> 프로젝트 (사용자 기준)
    # --------------------------------------------------------------------------

    def list_user_projects(self, user_id: str) -> List[Dict[str, Any]]:
        """사용자가 소속된 프로젝트 목록을 조회합니다."""
        user = self._get_user(user_id)
        return [project_to_dict(p) for p in self.user_repo.list_projects(user)]

    def add_user_project(self, user_id: str, project_id: str) -> List[Dict[str, Any]]:
        """
        사용자를 프로젝트에 추가합니다. 이미 소속되어 있으면 아무 것도 변경하지 않습니다.

        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
            ProjectNotFoundError: 해당 ID의 프로젝트를 찾을 수 없을 때.
        """
        user = self._get_user(user_id)
        project = self._get_project(project_id)
        projects = self.user_repo.add_project(user, project)
        logger.info("User %s joined project %s.", user_id, project_id)
        return [project_to_dict(p) for p in projects]

    def remove_user_project(self, user_id: str, project_id: str) -> List[Dict[str, Any]]:
        """사용자를 프로젝트에서 제외합니다."""
        user = self._get_user(user_id)
        project = self._get_project(project_id)
        projects = self.user_repo.remove_project(user, project)
        logger.info("User %s left project %s.", user_id, project_id)
        return [project_to_dict(p) for p in projects]

    def set_user_projects(self, user_id: str, project_ids: List[str]) -> List[Dict[str, Any]]:
        """
        사용자의 소속 프로젝트를 주어진 목록으로 교체합니다. 다른 사용자의 소속은 변경되지 않습니다.

        Raises:
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
            ProjectNotFoundError: 목록 중 존재하지 않는 프로젝트가 있을 때.
        """
        user = self._get_user(user_id)
        projects = resolve_ids(
            project_ids, self.project_repo.find_by_ids, lambda p: p.project_id, ProjectNotFoundError, "Project"
        )
        result = self.user_repo.set_projects(user, projects)
        logger.info("User %s projects replaced (%d entries).", user_id, len(result))
        return [project_to_dict(p) for p in result]

    # --------------------------------------------------------------------------
    ## 권한
    # --------------------------------------------------------------------------

    def create_permission(self, service: str, action: str, name: str = "", entity_type: str = "",
                          owner: bool = False, description: str = "",
                          metadata: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """새로운 권한을 생성합니다. ID는 새로 발급됩니다."""
        new_permission = models.Permission.new(
            name=name, service=service, action=action, entity_type=entity_type,
            owner=owner, description=description, meta=metadata or {},
        )
        created = self.permission_repo.create(new_permission)
        logger.info("Permission %s created (%s:%s).", created.permission_id, service, action)
        return permission_to_dict(created)

    def list_permissions(self) -> List[Dict[str, Any]]:
        """모든 권한의 목록을 조회합니다."""
        return [permission_to_dict(p) for p in self.permission_repo.list_all()]

    def get_permission(self, permission_id: str) -> Dict[str, Any]:
        """
        ID로 특정 권한을 조회합니다.

        Raises:
            PermissionNotFoundError: 해당 ID의 권한을 찾을 수 없을 때.
        """
        return permission_to_dict(self._get_permission(permission_id))

    def update_permission(self, permission_id: str, **changes: Any) -> Dict[str, Any]:
        """
        권한 속성을 수정합니다.

        Args:
            changes: name, service, action, entity_type, owner, description, metadata 중 바꿀 값.
                None인 값은 무시됩니다.

        Raises:
            PermissionNotFoundError: 해당 ID의 권한을 찾을 수 없을 때.
            ValueError: 알 수 없는 속성 이름이 포함되어 있을 때.
        """
        unknown = set(changes) - PERMISSION_FIELDS
        if unknown:
            raise ValueError(f"unknown permission fields: {sorted(unknown)}")
        permission = self._get_permission(permission_id)
        for attr, value in changes.items():
            if value is None:
                continue
            if attr == "metadata":
                permission.meta = dict(value)
            else:
                setattr(permission, attr, value)
        updated = self.permission_repo.update(permission)
        logger.info("Permission %s updated.", permission_id)
        return permission_to_dict(updated)

    def delete_permission(self, permission_id: str) -> bool:
        """권한을 삭제합니다. 프로젝트와의 관계도 함께 삭제됩니다."""
        permission = self._get_permission(permission_id)
        self.permission_repo.delete(permission)
        logger.info("Permission %s deleted.", permission_id)
        return True

    # --------------------------------------------------------------------------
    ## 권한 <-> 프로젝트 (권한 기준)
    # --------------------------------------------------------------------------

    def list_permission_projects(self, permission_id: str) -> List[Dict[str, Any]]:
        """특정 권한이 부여된 프로젝트 목록을 조회합니다."""
        permission = self._get_permission(permission_id)
        return [project_to_dict(p) for p in self.permission_repo.list_projects(permission)]

    def add_permission_project(self, permission_id: str, project_id: str) -> List[Dict[str, Any]]:
        """
        권한을 프로젝트에 부여합니다.

        Raises:
            PermissionNotFoundError: 해당 ID의 권한을 찾을 수 없을 때.
            ProjectNotFoundError: 해당 ID의 프로젝트를 찾을 수 없을 때.
        """
        permission = self._get_permission(permission_id)
        project = self._get_project(project_id)
        projects = self.permission_repo.add_project(permission, project)
        logger.info("Permission %s granted to project %s.", permission_id, project_id)
        return [project_to_dict(p) for p in projects]

    def remove_permission_project(self, permission_id: str, project_id: str) -> List[Dict[str, Any]]:
        """프로젝트에서 권한을 회수합니다."""
        permission = self._get_permission(permission_id)
        project = self._get_project(project_id)
        projects = self.permission_repo.remove_project(permission, project)
        logger.info("Permission %s revoked from project %s.", permission_id, project_id)
        return [project_to_dict(p) for p in projects]

    def set_permission_projects(self, permission_id: str, project_ids: List[str]) -> List[Dict[str, Any]]:
        """
        권한이 부여된 프로젝트를 주어진 목록으로 교체합니다.

        Raises:
            PermissionNotFoundError: 해당 ID의 권한을 찾을 수 없을 때.
            ProjectNotFoundError: 목록 중 존재하지 않는 프로젝트가 있을 때.
        """
        permission = self._get_permission(permission_id)
        projects = resolve_ids(
            project_ids, self.project_repo.find_by_ids, lambda p: p.project_id, ProjectNotFoundError, "Project"
        )
        result = self.permission_repo.set_projects(permission, projects)
        logger.info("Permission %s projects replaced (%d entries).", permission_id, len(result))
        return [project_to_dict(p) for p in result]

    # --------------------------------------------------------------------------
    ## 프로젝트 <-> 사용자
    # --------------------------------------------------------------------------

    def list_project_users(self, project_id: str) -> List[Dict[str, Any]]:
        """
        특정 프로젝트에 소속된 모든 사용자를 조회합니다.

        Raises:
            ProjectNotFoundError: 해당 ID의 프로젝트를 찾을 수 없을 때.
        """
        project = self._get_project(project_id)
        return [user_to_dict(u) for u in self.project_repo.list_users(project)]

    def add_project_user(self, project_id: str, user_id: str) -> List[Dict[str, Any]]:
        """
        사용자를 프로젝트에 추가합니다. 이미 소속되어 있으면 아무 것도 변경하지 않습니다.

        Returns:
            변경 후 프로젝트에 소속된 사용자 목록.

        Raises:
            ProjectNotFoundError: 해당 ID의 프로젝트를 찾을 수 없을 때.
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
        """
        project = self._get_project(project_id)
        user = self._get_user(user_id)
        users = self.project_repo.add_user(project, user)
        logger.info("User %s added to project %s.", user_id, project_id)
        return [user_to_dict(u) for u in users]

    def remove_project_user(self, project_id: str, user_id: str) -> List[Dict[str, Any]]:
        """
        사용자를 프로젝트에서 제외합니다. 소속되어 있지 않아도 오류가 아닙니다.

        Raises:
            ProjectNotFoundError: 해당 ID의 프로젝트를 찾을 수 없을 때.
            UserNotFoundError: 해당 ID의 사용자를 찾을 수 없을 때.
        """
        project = self._get_project(project_id)
        user = self._get_user(user_id)
        users = self.project_repo.remove_user(project, user)
        logger.info("User %s removed from project %s.", user_id, project_id)
        return [user_to_dict(u) for u in users]

    def set_project_users(self, project_id: str, user_ids: List[str]) -> List[Dict[str, Any]]:
        """
        프로젝트의 사용자 목록을 주어진 목록으로 교체합니다. 빈 목록이면 모든 사용자를 제외합니다.

        Raises:
            ProjectNotFoundError: 해당 ID의 프로젝트를 찾을 수 없을 때.
            UserNotFoundError: 목록 중 존재하지 않는 사용자가 있을 때. 이 경우 기존 관계는 변경되지 않습니다.
        """
        project = self._get_project(project_id)
        users = resolve_ids(user_ids, self.user_repo.find_by_ids, lambda u: u.user_id, UserNotFoundError, "User")
        result = self.project_repo.set_users(project, users)
        logger.info("Project %s users replaced (%d entries).", project_id, len(result))
        return [user_to_dict(u) for u in result]

    # --------------------------------------------------------------------------
    ## 프로젝트 <-> 권한
    # --------------------------------------------------------------------------

    def list_project_permissions(self, project_id: str) -> List[Dict[str, Any]]:
        """특정 프로젝트에 부여된 모든 권한을 조회합니다."""
        project = self._get_project(project_id)
        return [permission_to_dict(p) for p in self.project_repo.list_permissions(project)]

    def add_project_permission(self, project_id: str, permission_id: str) -> List[Dict[str, Any]]:
        """
        프로젝트에 권한을 부여합니다.

        Raises:
            ProjectNotFoundError: 해당 ID의 프로젝트를 찾을 수 없을 때.
            PermissionNotFoundError: 해당 ID의 권한을 찾을 수 없을 때.
        """
        project = self._get_project(project_id)
        permission = self._get_permission(permission_id)
        permissions = self.project_repo.add_permission(project, permission)
        logger.info("Permission %s granted to project %s.", permission_id, project_id)
        return [permission_to_dict(p) for p in permissions]

    def remove_project_permission(self, project_id: str, permission_id: str) -> List[Dict[str, Any]]:
        """프로젝트에서 권한을 회수합니다."""
        project = self._get_project(project_id)
        permission = self._get_permission(permission_id)
        permissions = self.project_repo.remove_permission(project, permission)
        logger.info("Permission %s revoked from project %s.", permission_id, project_id)
        return [permission_to_dict(p) for p in permissions]

    def set_project_permissions(self, project_id: str, permission_ids: List[str]) -> List[Dict[str, Any]]:
        """
        프로젝트의 권한 목록을 주어진 목록으로 교체합니다.

        Raises:
            ProjectNotFoundError: 해당 ID의 프로젝트를 찾을 수 없을 때.
            PermissionNotFoundError: 목록 중 존재하지 않는 권한이 있을 때.
        """
        project = self._get_project(project_id)
        permissions = resolve_ids(
            permission_ids, self.permission_repo.find_by_ids, lambda p: p.permission_id,
            PermissionNotFoundError, "Permission",
        )
        result = self.project_repo.set_permissions(project, permissions)
        logger.info("Project %s permissions replaced (%d entries).", project_id, len(result))
        return [permission_to_dict(p) for p in result]

    # --------------------------------------------------------------------------
    ## 내부 조회 헬퍼
    # --------------------------------------------------------------------------

    def _get_project(self, project_id: str) -> models.Project:
        project = self.project_repo.find_by_id(project_id)
        if not project:
            logger.warning("Project %s not found.", project_id)
            raise ProjectNotFoundError(f"Project with id '{project_id}' not found.")
        return project

    def _get_user(self, user_id: str) -> models.User:
        user = self.user_repo.find_by_id(user_id)
        if not user:
            logger.warning("User %s not found.", user_id)
            raise UserNotFoundError(f"User with id '{user_id}' not found.")
        return user

    def _get_permission(self, permission_id: str) -> models.Permission:
        permission = self.permission_repo.find_by_id(permission_id)
        if not permission:
            logger.warning("Permission %s not found.", permission_id)
            raise PermissionNotFoundError(f"Permission with id '{permission_id}' not found.")
        return permission
