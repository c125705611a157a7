from typing import List, Optional
from sqlalchemy.orm import Session
from operator_admin.database import models, relations
from operator_admin.repositories.interfaces import IPermissionRepository

class SqlalchemyPermissionRepository(IPermissionRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, permission_model: models.Permission) -> models.Permission:
        self.db.add(permission_model)
        self.db.commit()
        self.db.refresh(permission_model)
        return permission_model

    def update(self, permission: models.Permission) -> models.Permission:
        self.db.commit()
        self.db.refresh(permission)
        return permission

    def find_by_id(self, permission_id: str) -> Optional[models.Permission]:
        return self.db.query(models.Permission).filter(models.Permission.permission_id == permission_id).first()

    def find_by_ids(self, permission_ids: List[str]) -> List[models.Permission]:
        if not permission_ids:
            return []
        return self.db.query(models.Permission).filter(models.Permission.permission_id.in_(permission_ids)).all()

    def list_all(self) -> List[models.Permission]:
        return self.db.query(models.Permission).order_by(models.Permission.service.asc(), models.Permission.action.asc()).all()

    def delete(self, permission: models.Permission) -> bool:
        if permission:
            self.db.delete(permission)
            self.db.commit()
            return True
        return False

    def list_projects(self, permission: models.Permission) -> List[models.Project]:
        link = models.projects_permissions
        return (
            self.db.query(models.Project)
            .join(link, link.c.project_id == models.Project.project_id)
            .filter(link.c.permission_id == permission.permission_id)
            .order_by(models.Project.project_id.asc())
            .all()
        )

    def add_project(self, permission: models.Permission, project: models.Project) -> List[models.Project]:
        relations.add_relation(self.db, models.PROJECTS_PERMISSIONS, permission, project)
        return self.list_projects(permission)

    def remove_project(self, permission: models.Permission, project: models.Project) -> List[models.Project]:
        relations.remove_relation(self.db, models.PROJECTS_PERMISSIONS, permission, project)
        return self.list_projects(permission)

    def set_projects(self, permission: models.Permission, projects: List[models.Project]) -> List[models.Project]:
        relations.set_relations(self.db, models.PROJECTS_PERMISSIONS, permission, projects)
        return self.list_projects(permission)
