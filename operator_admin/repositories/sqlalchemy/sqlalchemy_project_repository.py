from typing import List, Optional
from sqlalchemy.orm import Session
from operator_admin.database import models, relations
from operator_admin.repositories.interfaces import IProjectRepository

class SqlalchemyProjectRepository(IProjectRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, project_model: models.Project) -> models.Project:
        self.db.add(project_model)
        self.db.commit()
        self.db.refresh(project_model)
        return project_model

    def update(self, project: models.Project) -> models.Project:
        self.db.commit()
        self.db.refresh(project)
        return project

    def find_by_id(self, project_id: str) -> Optional[models.Project]:
        return self.db.query(models.Project).filter(models.Project.project_id == project_id).first()

    def find_by_ids(self, project_ids: List[str]) -> List[models.Project]:
        if not project_ids:
            return []
        return self.db.query(models.Project).filter(models.Project.project_id.in_(project_ids)).all()

    def find_by_name(self, name: str) -> Optional[models.Project]:
        return self.db.query(models.Project).filter(models.Project.name == name).first()

    def list_all(self) -> List[models.Project]:
        return self.db.query(models.Project).order_by(models.Project.name.asc()).all()

    def delete(self, project: models.Project) -> bool:
        if project:
            self.db.delete(project)
            self.db.commit()
            return True
        return False

    # --- 프로젝트 <-> 사용자 ---

    def list_users(self, project: models.Project) -> List[models.User]:
        link = models.projects_users
        return (
            self.db.query(models.User)
            .join(link, link.c.user_id == models.User.user_id)
            .filter(link.c.project_id == project.project_id)
            .order_by(models.User.user_id.asc())
            .all()
        )

    def add_user(self, project: models.Project, user: models.User) -> List[models.User]:
        relations.add_relation(self.db, models.PROJECTS_USERS, project, user)
        return self.list_users(project)

    def remove_user(self, project: models.Project, user: models.User) -> List[models.User]:
        relations.remove_relation(self.db, models.PROJECTS_USERS, project, user)
        return self.list_users(project)

    def set_users(self, project: models.Project, users: List[models.User]) -> List[models.User]:
        relations.set_relations(self.db, models.PROJECTS_USERS, project, users)
        return self.list_users(project)

    # --- 프로젝트 <-> 권한 ---

    def list_permissions(self, project: models.Project) -> List[models.Permission]:
        link = models.projects_permissions
        return (
            self.db.query(models.Permission)
            .join(link, link.c.permission_id == models.Permission.permission_id)
            .filter(link.c.project_id == project.project_id)
            .order_by(models.Permission.permission_id.asc())
            .all()
        )

    def add_permission(self, project: models.Project, permission: models.Permission) -> List[models.Permission]:
        relations.add_relation(self.db, models.PROJECTS_PERMISSIONS, project, permission)
        return self.list_permissions(project)

    def remove_permission(self, project: models.Project, permission: models.Permission) -> List[models.Permission]:
        relations.remove_relation(self.db, models.PROJECTS_PERMISSIONS, project, permission)
        return self.list_permissions(project)

    def set_permissions(self, project: models.Project, permissions: List[models.Permission]) -> List[models.Permission]:
        relations.set_relations(self.db, models.PROJECTS_PERMISSIONS, project, permissions)
        return self.list_permissions(project)
