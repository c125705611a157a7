from typing import List, Optional
from sqlalchemy.orm import Session
from operator_admin.database import models, relations
from operator_admin.repositories.interfaces import IUserRepository

User = models.User

class SqlalchemyUserRepository(IUserRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def create(self, user_model: User) -> User:
        self.db.add(user_model)
        self.db.commit()
        self.db.refresh(user_model)
        return user_model

    def update(self, user: User) -> User:
        self.db.commit()
        self.db.refresh(user)
        return user

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self.db.get(User, user_id)

    def find_by_ids(self, user_ids: List[str]) -> List[User]:
        if not user_ids:
            return []
        return (
            self.db.query(User)
            .filter(User.user_id.in_(user_ids))
            .order_by(User.user_id.asc())
            .all()
        )

    def find_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter_by(username=username).one_or_none()

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter_by(email=email).first()

    def list_all(self) -> List[User]:
        return self.db.query(User).order_by(User.username.asc(), User.user_id.asc()).all()

    def delete(self, user: User) -> bool:
        if not user:
            return False
        self.db.delete(user)
        self.db.commit()
        return True

    # --- 사용자 기준 프로젝트 소속 ---

    def list_projects(self, user: User) -> List[models.Project]:
        link = models.projects_users
        return (
            self.db.query(models.Project)
            .join(link, link.c.project_id == models.Project.project_id)
            .filter(link.c.user_id == user.user_id)
            .order_by(models.Project.project_id.asc())
            .all()
        )

    def add_project(self, user: User, project: models.Project) -> List[models.Project]:
        relations.add_relation(self.db, models.PROJECTS_USERS, user, project)
        return self.list_projects(user)

    def remove_project(self, user: User, project: models.Project) -> List[models.Project]:
        relations.remove_relation(self.db, models.PROJECTS_USERS, user, project)
        return self.list_projects(user)

    def set_projects(self, user: User, projects: List[models.Project]) -> List[models.Project]:
        relations.set_relations(self.db, models.PROJECTS_USERS, user, projects)
        return self.list_projects(user)
